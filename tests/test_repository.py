"""Repository initialization tests."""

import shutil
import tempfile
from pathlib import Path

import pytest

from twig.core.errors import InvalidRepositoryError, TwigError
from twig.core.objects import Blob
from twig.core.repository import Repository


@pytest.fixture
def temp_repo():
    """Create temporary repository for testing."""
    temp_dir = tempfile.mkdtemp()
    repo = Repository(temp_dir)
    yield repo
    shutil.rmtree(temp_dir)


def test_repository_init(temp_repo):
    """Test repository initialization creates structure."""
    temp_repo.init()
    assert temp_repo.twig_dir.exists()
    assert temp_repo.objects_dir.exists()
    assert temp_repo.refs_dir.exists()
    assert temp_repo.heads_dir.exists()
    assert temp_repo.head_file.exists()
    assert temp_repo.config_file.exists()
    assert temp_repo.is_initialized()


def test_repository_head_content(temp_repo):
    """Test HEAD points to main branch."""
    temp_repo.init()
    assert temp_repo.head_file.read_text() == 'ref: refs/heads/main\n'


def test_repository_custom_default_branch(temp_repo):
    temp_repo.init(default_branch='trunk')
    assert temp_repo.refs.current_branch() == 'trunk'


def test_repository_config_content(temp_repo):
    """Test config file contains version."""
    temp_repo.init()
    assert 'repositoryformatversion' in temp_repo.config_file.read_text()


def test_repository_already_exists(temp_repo):
    """Test duplicate init raises error."""
    temp_repo.init()
    with pytest.raises(TwigError, match="already exists"):
        temp_repo.init()


def test_write_and_read_blob(temp_repo):
    """Test blob storage and retrieval."""
    temp_repo.init()
    hash_value = temp_repo.write_object(Blob(b'test data'))

    read_blob = temp_repo.read_object(hash_value)
    assert isinstance(read_blob, Blob)
    assert read_blob.data == b'test data'


def test_write_blob_creates_subdirectory(temp_repo):
    """Test object stored in subdirectory."""
    temp_repo.init()
    hash_value = temp_repo.write_object(Blob(b'test'))

    obj_path = temp_repo.store.object_path(hash_value)
    assert obj_path.exists()
    assert obj_path.parent.name == hash_value[:2]


def test_find_repository_in_subdirectory(temp_repo):
    """Test finding repo from nested directory."""
    temp_repo.init()
    subdir = temp_repo.work_tree / 'subdir' / 'nested'
    subdir.mkdir(parents=True)

    found_repo = Repository.find_repository(str(subdir))
    assert found_repo is not None
    assert found_repo.work_tree == temp_repo.work_tree


def test_find_repository_none():
    """Test no repo found returns None."""
    with tempfile.TemporaryDirectory() as temp_dir:
        assert Repository.find_repository(temp_dir) is None


def test_open_outside_repository():
    with tempfile.TemporaryDirectory() as temp_dir:
        with pytest.raises(InvalidRepositoryError):
            Repository.open(temp_dir)


def test_head_tree_unborn(temp_repo):
    temp_repo.init()
    assert temp_repo.head_tree() is None


def test_engines_are_cached(temp_repo):
    temp_repo.init()
    assert temp_repo.store is temp_repo.store
    assert temp_repo.merge is temp_repo.merge
    assert temp_repo.graph.repo is temp_repo
