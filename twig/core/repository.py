"""Repository management for Twig."""

import logging
from pathlib import Path
from typing import Optional

from .errors import InvalidRepositoryError, TwigError
from .objects import TwigObject
from twig.utils.fs import atomic_write_text

logger = logging.getLogger(__name__)

TWIG_DIR_NAME = '.twig'
IGNORE_FILE_NAME = '.twigignore'
DEFAULT_BRANCH = 'main'


class Repository:
    """
    Represents a Twig repository.

    A repository manages the .twig directory structure and gives access to
    the object store, the index, the refs and the engines working on them.
    """

    def __init__(self, path: str = '.'):
        """
        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.twig_dir = self.work_tree / TWIG_DIR_NAME
        self.objects_dir = self.twig_dir / 'objects'
        self.refs_dir = self.twig_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.head_file = self.twig_dir / 'HEAD'
        self.index_file = self.twig_dir / 'index'
        self.config_file = self.twig_dir / 'config'
        self.ignore_file = self.work_tree / IGNORE_FILE_NAME

        # Lazy loading to avoid circular imports
        self._store = None
        self._index = None
        self._ref_manager = None
        self._worktree = None
        self._graph = None
        self._diff_engine = None
        self._merge_engine = None
        self._rebase_engine = None
        self._blame_engine = None
        self._config = None

    @property
    def store(self):
        """Get ObjectStore instance."""
        if self._store is None:
            from .store import ObjectStore
            self._store = ObjectStore(self.objects_dir)
        return self._store

    @property
    def index(self):
        """Staging index, loaded from disk on first access."""
        if self._index is None:
            from .index import Index
            self._index = Index.load(self.index_file)
        return self._index

    def save_index(self) -> None:
        """Flush the staging index to disk."""
        if self._index is not None:
            self._index.write(self.index_file)

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def config(self):
        """Get Config instance for this repository."""
        if self._config is None:
            from .config import Config
            self._config = Config(self.config_file)
        return self._config

    @property
    def worktree(self):
        """Get WorkTree instance."""
        if self._worktree is None:
            from twig.operations.worktree import WorkTree
            self._worktree = WorkTree(self)
        return self._worktree

    @property
    def graph(self):
        """Get CommitGraph instance."""
        if self._graph is None:
            from twig.operations.history import CommitGraph
            self._graph = CommitGraph(self)
        return self._graph

    @property
    def diff(self):
        """Get DiffEngine instance."""
        if self._diff_engine is None:
            from twig.operations.diff import DiffEngine
            self._diff_engine = DiffEngine(self)
        return self._diff_engine

    @property
    def merge(self):
        """Get MergeEngine instance."""
        if self._merge_engine is None:
            from twig.operations.merge import MergeEngine
            self._merge_engine = MergeEngine(self)
        return self._merge_engine

    @property
    def rebase(self):
        """Get RebaseEngine instance."""
        if self._rebase_engine is None:
            from twig.operations.rebase import RebaseEngine
            self._rebase_engine = RebaseEngine(self)
        return self._rebase_engine

    @property
    def blame(self):
        """Get BlameEngine instance."""
        if self._blame_engine is None:
            from twig.operations.blame import BlameEngine
            self._blame_engine = BlameEngine(self)
        return self._blame_engine

    def init(self, default_branch: str = DEFAULT_BRANCH) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .twig directory structure:
        .twig/
        ├── objects/       # Object database
        ├── refs/
        │   └── heads/     # Branch references
        ├── HEAD           # Current branch/commit
        └── config         # Repository configuration

        Returns:
            Repository: self for method chaining

        Raises:
            TwigError: If repository already exists
        """
        if self.twig_dir.exists():
            raise TwigError(f"Repository already exists at {self.twig_dir}")

        self.work_tree.mkdir(parents=True, exist_ok=True)
        self.twig_dir.mkdir()
        self.objects_dir.mkdir()
        self.refs_dir.mkdir()
        self.heads_dir.mkdir()

        atomic_write_text(self.head_file, f'ref: refs/heads/{default_branch}\n')
        atomic_write_text(self.config_file, '[core]\n\trepositoryformatversion = 0\n')

        logger.debug("initialized repository at %s", self.twig_dir)
        return self

    def is_initialized(self) -> bool:
        return self.twig_dir.is_dir() and self.head_file.is_file()

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / TWIG_DIR_NAME).is_dir():
                return cls(str(current))
            if current == current.parent:
                return None
            current = current.parent

    @classmethod
    def open(cls, path: str = '.') -> 'Repository':
        """
        Like find_repository, but fails loudly.

        Raises:
            InvalidRepositoryError: If no repository contains path
        """
        repo = cls.find_repository(path)
        if repo is None or not repo.is_initialized():
            raise InvalidRepositoryError(Path(path).resolve())
        return repo

    def write_object(self, obj: TwigObject) -> str:
        """Write object to the store and return its hash."""
        return self.store.write(obj)

    def read_object(self, obj_hash: str) -> TwigObject:
        """Read a Blob, Tree or Commit from the store."""
        return self.store.get(obj_hash)

    def head_tree(self) -> Optional[str]:
        """Tree hash of the HEAD commit, or None when unborn."""
        head = self.refs.resolve_head()
        if not head:
            return None
        return self.store.read_commit(head).tree

    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
