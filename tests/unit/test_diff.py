"""Line diff and diff engine tests."""

import pytest

from twig.operations.diff import (
    DELETE, EQUAL, INSERT, DiffOp, FileDiff, apply_script, diff_lines, split_lines,
)
from tests.conftest import commit_files, write_file


@pytest.mark.parametrize('a, b', [
    ([], []),
    ([], ['x', 'y']),
    (['x', 'y'], []),
    (['a', 'b', 'c'], ['a', 'b', 'c']),
    (['a', 'b'], ['c', 'd']),
    (['a', 'b'], ['b', 'a']),
    (['1', 'a', '2', 'b', '3'], ['a', '1', 'b', '2', 'c']),
    (['x', 'x', 'y'], ['y', 'x']),
])
def test_script_reconstructs_right_side(a, b):
    assert apply_script(a, diff_lines(a, b)) == b


def test_identical_is_all_equal():
    ops = diff_lines(['a', 'b'], ['a', 'b'])
    assert [op.tag for op in ops] == [EQUAL, EQUAL]


def test_replaced_line():
    ops = diff_lines(['a', 'b', 'c'], ['a', 'x', 'c'])
    assert ops == [
        DiffOp(EQUAL, 'a'),
        DiffOp(DELETE, 'b'),
        DiffOp(INSERT, 'x'),
        DiffOp(EQUAL, 'c'),
    ]


def test_swapped_lines_terminate():
    ops = diff_lines(['a', 'b'], ['b', 'a'])
    assert ops[0] == DiffOp(DELETE, 'a')
    assert apply_script(['a', 'b'], ops) == ['b', 'a']


def test_apply_script_rejects_mismatch():
    with pytest.raises(ValueError):
        apply_script(['a'], [DiffOp(EQUAL, 'b')])
    with pytest.raises(ValueError):
        apply_script(['a', 'b'], [DiffOp(EQUAL, 'a')])


def test_split_lines():
    assert split_lines(None) == []
    assert split_lines(b'') == []
    assert split_lines(b'a\nb\n') == ['a', 'b']


def test_file_diff_flags():
    new = FileDiff('f', None, b'x\n').compute_diff()
    assert new.is_new and not new.is_deleted
    assert new.insertions == 1

    gone = FileDiff('f', b'x\n', None).compute_diff()
    assert gone.is_deleted and gone.deletions == 1

    binary = FileDiff('f', b'\x00\x01', b'\x00\x02').compute_diff()
    assert binary.is_binary and binary.ops == []


def test_diff_commits(repo):
    first = commit_files(repo, {'a.txt': 'one\ntwo\n', 'b.txt': 'keep\n'}, 'first')
    second = commit_files(repo, {'a.txt': 'one\n2\n', 'c.txt': 'new\n'}, 'second')

    diffs = repo.diff.diff_commits(first, second)
    assert [d.path for d in diffs] == ['a.txt', 'c.txt']
    assert diffs[0].is_modified
    assert (diffs[0].insertions, diffs[0].deletions) == (1, 1)
    assert diffs[1].is_new


def test_diff_commits_by_branch_name(repo_with_commits):
    repo = repo_with_commits
    repo.refs.create_branch('before', repo.graph.history(repo.refs.resolve_head())[-1])
    diffs = repo.diff.diff_commits('before', 'main')
    assert [d.path for d in diffs] == ['file2.txt']


def test_diff_index_to_head(repo_with_commits):
    repo = repo_with_commits
    repo.index.add_file(repo, write_file(repo, 'file1.txt', 'changed\n'))
    diffs = repo.diff.diff_index_to_head()
    assert [d.path for d in diffs] == ['file1.txt']


def test_diff_worktree_to_index(repo_with_commits):
    repo = repo_with_commits
    write_file(repo, 'file1.txt', 'edited\n')
    (repo.work_tree / 'file2.txt').unlink()
    write_file(repo, 'untracked.txt', 'ignored by diff\n')

    diffs = repo.diff.diff_worktree_to_index()
    assert [(d.path, d.is_deleted) for d in diffs] == [('file1.txt', False), ('file2.txt', True)]


def test_format_diff_plain(repo):
    diff = repo.diff.diff_blobs('f.txt', b'a\nb\n', b'a\nc\n')
    text = repo.diff.format_diff([diff], color=False)
    assert text.splitlines() == [
        'diff --twig a/f.txt b/f.txt',
        '--- a/f.txt',
        '+++ b/f.txt',
        ' a',
        '-b',
        '+c',
    ]


def test_format_diff_binary(repo):
    diff = repo.diff.diff_blobs('img.bin', b'\x00a', b'\x00b')
    assert 'Binary files a/img.bin and b/img.bin differ' in repo.diff.format_diff([diff], color=False)


def test_format_diff_colored(repo):
    from colorama import Fore
    diff = repo.diff.diff_blobs('f.txt', None, b'new\n')
    assert f'{Fore.GREEN}+new' in repo.diff.format_diff([diff], color=True)
