"""Working tree and status tests."""

from tests.conftest import commit_files, write_file


def test_list_files_excludes_metadata(repo, working_files):
    assert repo.worktree.list_files() == ['subdir/test3.txt', 'test1.txt', 'test2.txt']


def test_list_files_honours_ignore(repo, working_files):
    write_file(repo, '.twigignore', 'subdir/\ntest2.txt\n')
    assert repo.worktree.list_files() == ['.twigignore', 'test1.txt']


def test_list_files_from_subdirectory(repo, working_files):
    assert repo.worktree.list_files('subdir') == ['subdir/test3.txt']


def test_clean_status(repo_with_commits):
    status = repo_with_commits.worktree.status()
    assert status.branch == 'main'
    assert status.is_clean


def test_status_categories(repo_with_commits):
    repo = repo_with_commits
    write_file(repo, 'new.txt', 'new\n')
    repo.index.add_file(repo, repo.work_tree / 'new.txt')
    write_file(repo, 'file1.txt', 'edited\n')
    (repo.work_tree / 'file2.txt').unlink()
    write_file(repo, 'stray.txt', '?\n')

    status = repo.worktree.status()
    assert status.staged_added == ['new.txt']
    assert status.unstaged_modified == ['file1.txt']
    assert status.unstaged_deleted == ['file2.txt']
    assert status.untracked == ['stray.txt']
    assert not status.is_clean


def test_status_staged_modified_and_deleted(repo_with_commits):
    repo = repo_with_commits
    write_file(repo, 'file1.txt', 'edited\n')
    repo.index.add_file(repo, repo.work_tree / 'file1.txt')
    repo.index.remove('file2.txt')

    status = repo.worktree.status()
    assert status.staged_modified == ['file1.txt']
    assert status.staged_deleted == ['file2.txt']
    assert status.has_staged


def test_status_before_first_commit(repo, working_files):
    status = repo.worktree.status()
    assert status.head is None
    assert status.untracked == ['subdir/test3.txt', 'test1.txt', 'test2.txt']


def test_checkout_tree_prunes_empty_directories(repo):
    first = commit_files(repo, {'a.txt': 'a\n'}, 'a')
    commit_files(repo, {'deep/nested/b.txt': 'b\n'}, 'b')

    repo.worktree.checkout_tree(repo.store.read_commit(first).tree)
    assert not (repo.work_tree / 'deep').exists()
    assert sorted(repo.index) == ['a.txt']


def test_staged_paths_compares_index_with_head(repo_with_commits):
    repo = repo_with_commits
    assert repo.worktree.staged_paths() == []

    repo.index.add_file(repo, write_file(repo, 'file1.txt', 'edited\n'))
    repo.index.remove('file2.txt')
    repo.index.add_file(repo, write_file(repo, 'new.txt', 'new\n'))
    assert repo.worktree.staged_paths() == ['file1.txt', 'file2.txt', 'new.txt']
