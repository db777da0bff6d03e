"""Commit creation and graph traversal tests."""

import pytest

from twig.core.errors import MissingIdentityError, NothingStagedError
from twig.core.objects import Commit
from tests.conftest import TEST_IDENTITY, commit_files, write_file


def test_first_commit_is_root(repo):
    commit_hash = commit_files(repo, {'a.txt': 'a\n'}, 'Initial commit')
    commit = repo.store.read_commit(commit_hash)
    assert commit.parents == []
    assert commit.message == 'Initial commit'
    assert commit.author.identity == 'Test User <test@example.com>'
    assert repo.refs.branch_commit('main') == commit_hash


def test_commit_snapshot_matches_index(repo):
    commit_hash = commit_files(repo, {'a.txt': 'a\n', 'dir/b.txt': 'b\n'})
    tree = repo.store.read_commit(commit_hash).tree
    assert repo.store.flatten_tree(tree) == repo.index.entries


def test_commit_chain_parents(repo):
    c1 = commit_files(repo, {'f.txt': 'v1\n'}, 'one')
    c2 = commit_files(repo, {'f.txt': 'v2\n'}, 'two')
    c3 = commit_files(repo, {'f.txt': 'v3\n'}, 'three')
    assert repo.store.read_commit(c3).parent == c2
    assert repo.store.read_commit(c2).parent == c1
    assert repo.graph.history(c3) == [c3, c2, c1]


def test_index_survives_commit(repo):
    commit_files(repo, {'f.txt': 'v1\n'})
    assert len(repo.index) == 1
    assert repo.index_file.exists()


def test_commit_empty_index(repo):
    with pytest.raises(NothingStagedError):
        repo.graph.commit('nothing', TEST_IDENTITY)


def test_commit_unchanged_tree(repo_with_commits):
    with pytest.raises(NothingStagedError):
        repo_with_commits.graph.commit('again', TEST_IDENTITY)


def test_commit_requires_identity(repo):
    repo.index.add_file(repo, write_file(repo, 'a.txt', 'a'))
    with pytest.raises(MissingIdentityError):
        repo.graph.commit('anonymous', None)


def test_commit_with_separate_committer(repo):
    from twig.core.config import Identity
    repo.index.add_file(repo, write_file(repo, 'a.txt', 'a'))
    committer = Identity('Bot', 'bot@example.com')
    commit_hash = repo.graph.commit('msg', TEST_IDENTITY, committer=committer, timestamp=5)
    commit = repo.store.read_commit(commit_hash)
    assert commit.author.name == 'Test User'
    assert commit.committer.name == 'Bot'
    assert commit.author.time == commit.committer.time == 5


def test_walk_yields_commit_objects(repo_with_commits):
    walked = list(repo_with_commits.graph.walk(repo_with_commits.refs.resolve_head()))
    assert [c.message for _, c in walked] == ['Second commit', 'First commit']
    assert all(isinstance(c, Commit) for _, c in walked)


def test_history_of_nothing(repo):
    assert repo.graph.history(None) == []


def diverge(repo):
    """base -> (main: m1) and (feature: f1); returns (base, m1, f1)."""
    base = commit_files(repo, {'base.txt': 'base\n'}, 'base')
    repo.refs.create_branch('feature')
    m1 = commit_files(repo, {'main.txt': 'main\n'}, 'm1')
    repo.refs.checkout('feature')
    f1 = commit_files(repo, {'feature.txt': 'feature\n'}, 'f1')
    repo.refs.checkout('main')
    return base, m1, f1


def test_common_ancestor_same_commit(repo_with_commits):
    head = repo_with_commits.refs.resolve_head()
    assert repo_with_commits.graph.common_ancestor(head, head) == head


def test_common_ancestor_fast_forward(repo_with_commits):
    graph = repo_with_commits.graph
    head = repo_with_commits.refs.resolve_head()
    first = graph.history(head)[-1]
    assert graph.common_ancestor(first, head) == first
    assert graph.common_ancestor(head, first) == first


def test_common_ancestor_diverged(repo):
    base, m1, f1 = diverge(repo)
    assert repo.graph.common_ancestor(m1, f1) == base
    assert repo.graph.common_ancestor(f1, m1) == base


def test_common_ancestor_sees_second_parent(repo, identity):
    base, m1, f1 = diverge(repo)
    merged = repo.merge.merge('feature', identity)
    assert merged.success

    repo.refs.checkout('feature')
    f2 = commit_files(repo, {'feature.txt': 'more\n'}, 'f2')
    assert repo.graph.common_ancestor(merged.commit, f2) == f1


def test_common_ancestor_unrelated(repo):
    a = commit_files(repo, {'a.txt': 'a\n'}, 'a')
    tree = repo.store.build_tree({})
    orphan = repo.store.write(Commit.create(tree, [], TEST_IDENTITY.signature(1), 'orphan'))
    assert repo.graph.common_ancestor(a, orphan) is None


def test_is_ancestor(repo):
    base, m1, f1 = diverge(repo)
    graph = repo.graph
    assert graph.is_ancestor(base, m1)
    assert graph.is_ancestor(m1, m1)
    assert not graph.is_ancestor(m1, f1)


def test_commits_between(repo):
    base, m1, f1 = diverge(repo)
    repo.refs.checkout('feature')
    f2 = commit_files(repo, {'feature.txt': 'two\n'}, 'f2')
    assert repo.graph.commits_between(m1, f2) == [f1, f2]
    assert repo.graph.commits_between(None, f1) == [base, f1]
