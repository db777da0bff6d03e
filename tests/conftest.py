"""Shared pytest fixtures for Twig tests."""

import shutil
import tempfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from twig.core.config import Identity
from twig.core.objects import Blob, Tree, Commit, Signature
from twig.core.repository import Repository

TEST_IDENTITY = Identity("Test User", "test@example.com")


def write_file(repo, path, content):
    """Write a file into the work tree, creating parent directories."""
    full = repo.work_tree / path
    full.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        full.write_bytes(content)
    else:
        full.write_text(content)
    return full


def commit_files(repo, files, message="Test commit", author=TEST_IDENTITY, timestamp=None):
    """
    Write, stage and commit files in one go.

    Args:
        repo: Repository instance
        files: Dict of {path: content}
        message: Commit message

    Returns:
        str: Commit hash
    """
    for path, content in files.items():
        repo.index.add_file(repo, write_file(repo, path, content))
    repo.save_index()
    return repo.graph.commit(message, author, timestamp=timestamp)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep tests away from the user's global config and identity variables."""
    global_config = tmp_path_factory.mktemp("home") / ".twigconfig"
    monkeypatch.setenv("TWIG_GLOBAL_CONFIG", str(global_config))
    for var in ("TWIG_AUTHOR_NAME", "TWIG_AUTHOR_EMAIL", "TWIG_USER_NAME", "TWIG_USER_EMAIL"):
        monkeypatch.delenv(var, raising=False)
    return global_config


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    return Repository(str(temp_dir)).init()


@pytest.fixture
def identity():
    return TEST_IDENTITY


@pytest.fixture
def repo_with_config(repo):
    """Create a repository with a user identity in its config."""
    repo.config_file.write_text("""[user]
\tname = Test User
\temail = test@example.com
""")
    return repo


@pytest.fixture
def repo_with_commits(repo_with_config):
    """Repository on main with two commits: file1.txt, then file2.txt."""
    repo = repo_with_config
    commit_files(repo, {"file1.txt": "Hello, World!\n"}, "First commit", timestamp=1000)
    commit_files(repo, {"file2.txt": "Second file\n"}, "Second commit", timestamp=2000)
    return repo


@pytest.fixture
def working_files(repo):
    """Create sample file structure in repository."""
    return {
        'file1': write_file(repo, "test1.txt", "Content 1"),
        'file2': write_file(repo, "test2.txt", "Content 2"),
        'file3': write_file(repo, "subdir/test3.txt", "Content 3"),
    }


@pytest.fixture
def sample_blob():
    """Create a sample blob object."""
    return Blob(b"Hello, World!\n")


@pytest.fixture
def sample_tree(repo, sample_blob):
    """Create a sample tree with one blob."""
    blob_hash = repo.write_object(sample_blob)
    tree = Tree()
    tree.add_entry('100644', 'blob', blob_hash, 'test.txt')
    return tree


@pytest.fixture
def sample_commit(sample_tree, repo):
    """Sample commit object."""
    tree_hash = repo.write_object(sample_tree)
    return Commit.create(
        tree_hash=tree_hash,
        parent_hashes=[],
        author=Signature("Test User", "test@example.com", 1700000000, '+0000'),
        message="Test commit",
    )


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cli_repo(repo_with_config, monkeypatch):
    """An initialized repository that is also the current directory."""
    monkeypatch.chdir(repo_with_config.work_tree)
    return repo_with_config
