"""Reference management for Twig."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .errors import (
    AlreadyExistsError,
    InvalidRefError,
    NotFoundError,
    RefNotFoundError,
    TwigError,
)
from .hash import is_valid_hash
from .objects import Commit
from twig.utils.fs import atomic_write_text

logger = logging.getLogger(__name__)

# Returned by current_branch() when HEAD holds a raw commit hash.
DETACHED = 'HEAD'

SYMREF_PREFIX = 'ref: '
HEADS_PREFIX = 'refs/heads/'


@dataclass
class BranchInfo:
    """A branch as listed by ``twig branch``."""
    name: str
    commit: str
    current: bool = False


@dataclass
class CheckoutResult:
    """Outcome of a checkout."""
    target: str
    commit: str
    detached: bool
    files: int


def validate_branch_name(name: str) -> None:
    """
    Raises:
        InvalidRefError: If name cannot be used as a branch name
    """
    if (not name or name == DETACHED or name.startswith(('-', '/')) or name.endswith('/')
            or '..' in name or '//' in name
            or any(c.isspace() or c in '~^:?*[\\' for c in name)):
        raise InvalidRefError(name)


class RefManager:
    """
    Manages branches and HEAD.

    Handles:
    - Symbolic HEAD (``ref: refs/heads/<branch>``)
    - Detached HEAD (raw commit hash)
    - Branch references (refs/heads/*)
    - Revision resolution (HEAD, branch names, full or abbreviated hashes)
    """

    def __init__(self, repo):
        self.repo = repo
        self.twig_dir = repo.twig_dir
        self.heads_dir = repo.heads_dir
        self.head_file = repo.head_file

    def _read_head(self) -> str:
        if not self.head_file.exists():
            return ''
        return self.head_file.read_text().strip()

    def _branch_path(self, name: str):
        return self.heads_dir / name

    def resolve_head(self) -> Optional[str]:
        """
        Resolve HEAD to a commit hash.

        Returns:
            Commit hash, or None for an unborn branch or empty HEAD
        """
        content = self._read_head()
        if content.startswith(SYMREF_PREFIX):
            ref_path = self.twig_dir / content[len(SYMREF_PREFIX):]
            if not ref_path.is_file():
                return None
            return ref_path.read_text().strip() or None
        return content or None

    def head_target(self) -> Optional[str]:
        """Branch name HEAD points at (even if unborn), or None when detached."""
        content = self._read_head()
        if content.startswith(SYMREF_PREFIX + HEADS_PREFIX):
            return content[len(SYMREF_PREFIX + HEADS_PREFIX):]
        return None

    def current_branch(self) -> str:
        """
        Get the current branch name.

        Returns:
            Branch name, or DETACHED ('HEAD') if HEAD holds a commit hash
        """
        return self.head_target() or DETACHED

    def is_detached(self) -> bool:
        return self.head_target() is None

    def branch_exists(self, name: str) -> bool:
        return self._branch_path(name).is_file()

    def branch_commit(self, name: str) -> str:
        """
        Get the commit a branch points to.

        Raises:
            RefNotFoundError: If the branch does not exist
        """
        path = self._branch_path(name)
        if not path.is_file():
            raise RefNotFoundError(name, f"Branch '{name}' not found")
        return path.read_text().strip()

    def _verify_commit(self, commit_hash: str) -> None:
        try:
            obj = self.repo.store.get(commit_hash)
        except NotFoundError:
            raise RefNotFoundError(commit_hash, f"Commit {commit_hash} not found") from None
        if not isinstance(obj, Commit):
            raise RefNotFoundError(commit_hash, f"{commit_hash} is a {obj.type}, not a commit")

    def update_branch(self, name: str, commit_hash: str) -> None:
        """
        Point a branch at a commit, creating it if needed.

        Raises:
            InvalidRefError: If the name is invalid
            RefNotFoundError: If commit_hash is not a stored commit
        """
        validate_branch_name(name)
        self._verify_commit(commit_hash)
        atomic_write_text(self._branch_path(name), commit_hash + '\n')
        logger.debug("branch %s -> %s", name, commit_hash)

    def create_branch(self, name: str, start: Optional[str] = None) -> str:
        """
        Create a new branch.

        Args:
            name: Branch name
            start: Revision to start from (defaults to HEAD)

        Returns:
            Commit hash the new branch points to

        Raises:
            AlreadyExistsError: If the branch exists
            RefNotFoundError: If there is no commit to start from
        """
        validate_branch_name(name)
        if self.branch_exists(name):
            raise AlreadyExistsError(name)

        commit_hash = self.resolve(start) if start else self.resolve_head()
        if not commit_hash:
            raise RefNotFoundError(
                DETACHED, f"Cannot create branch '{name}': no commits yet"
            )
        self.update_branch(name, commit_hash)
        return commit_hash

    def delete_branch(self, name: str) -> None:
        """
        Delete a branch.

        Raises:
            RefNotFoundError: If the branch does not exist
            TwigError: If it is the current branch
        """
        if not self.branch_exists(name):
            raise RefNotFoundError(name, f"Branch '{name}' not found")
        if self.head_target() == name:
            raise TwigError(f"Cannot delete the checked out branch '{name}'")
        self._branch_path(name).unlink()
        logger.debug("deleted branch %s", name)

    def list_branches(self) -> List[BranchInfo]:
        """List all branches, sorted by name, marking the current one."""
        if not self.heads_dir.exists():
            return []

        current = self.head_target()
        branches = []
        for branch_file in self.heads_dir.rglob('*'):
            if branch_file.is_file() and not branch_file.name.startswith('.'):
                name = branch_file.relative_to(self.heads_dir).as_posix()
                branches.append(BranchInfo(name, branch_file.read_text().strip(), name == current))
        return sorted(branches, key=lambda b: b.name)

    def branches_at(self, commit_hash: str) -> List[str]:
        return [b.name for b in self.list_branches() if b.commit == commit_hash]

    def set_head(self, target: str, symbolic: bool = True) -> None:
        """
        Point HEAD at a branch or detach it at a commit.

        Args:
            target: Branch name (if symbolic) or commit hash
            symbolic: Write a symbolic reference instead of a hash

        Raises:
            RefNotFoundError: If the branch or commit does not exist
        """
        if symbolic:
            if not self.branch_exists(target):
                raise RefNotFoundError(target, f"Branch '{target}' not found")
            atomic_write_text(self.head_file, f"{SYMREF_PREFIX}{HEADS_PREFIX}{target}\n")
        else:
            self._verify_commit(target)
            atomic_write_text(self.head_file, target + '\n')
        logger.debug("HEAD -> %s%s", target, '' if symbolic else ' (detached)')

    def advance_head(self, commit_hash: str) -> None:
        """Move whatever HEAD designates (its branch, or itself if detached) to commit_hash."""
        branch = self.head_target()
        if branch:
            self.update_branch(branch, commit_hash)
        else:
            self.set_head(commit_hash, symbolic=False)

    def resolve(self, ref: str) -> str:
        """
        Resolve a revision to a commit hash.

        Accepts 'HEAD', a branch name, a full hash or an unambiguous hash
        prefix of at least 4 characters.

        Raises:
            RefNotFoundError: If ref cannot be resolved to a commit
        """
        if ref == DETACHED:
            head = self.resolve_head()
            if not head:
                raise RefNotFoundError(ref, "HEAD does not point to a commit yet")
            return head

        if self.branch_exists(ref):
            return self.branch_commit(ref)

        lowered = ref.lower()
        if is_valid_hash(lowered):
            self._verify_commit(lowered)
            return lowered

        if len(lowered) >= 4 and all(c in '0123456789abcdef' for c in lowered):
            matches = [
                h for h in self.repo.store.iter_objects()
                if h.startswith(lowered) and isinstance(self.repo.store.get(h), Commit)
            ]
            if len(matches) == 1:
                return matches[0]
            if len(matches) > 1:
                raise RefNotFoundError(ref, f"Short hash '{ref}' is ambiguous")

        raise RefNotFoundError(ref, f"'{ref}' is not a branch or commit")

    def checkout(self, target: str) -> CheckoutResult:
        """
        Switch the working snapshot to a branch or commit.

        A branch name makes HEAD symbolic; anything else is resolved to a
        commit and HEAD is detached there. The work tree and index are
        rewritten to the target's tree.

        Staged changes are carried over untouched when the target has the
        same tree as HEAD; otherwise they would be lost and the checkout
        is refused.

        Raises:
            RefNotFoundError: If target cannot be resolved
            LocalChangesError: If staged changes differ from HEAD and the
                target's tree differs too
        """
        is_branch = self.branch_exists(target)
        commit_hash = self.branch_commit(target) if is_branch else self.resolve(target)
        commit = self.repo.store.read_commit(commit_hash)

        worktree = self.repo.worktree
        if worktree.staged_paths() and commit.tree == self.repo.head_tree():
            files = len(self.repo.index)
        else:
            worktree.require_no_staged_changes()
            files = worktree.checkout_tree(commit.tree)
        self.set_head(target if is_branch else commit_hash, symbolic=is_branch)

        return CheckoutResult(
            target=target,
            commit=commit_hash,
            detached=not is_branch,
            files=files,
        )
