"""Error types raised by the Twig core."""

from typing import Optional


class TwigError(Exception):
    """Base class for all Twig errors."""


class NotFoundError(TwigError):
    """Something that was asked for does not exist."""


class ObjectNotFoundError(NotFoundError):
    """No object is stored under the requested address."""

    def __init__(self, obj_hash: str):
        super().__init__(f"Object {obj_hash} not found")
        self.hash = obj_hash


class RefNotFoundError(NotFoundError):
    """A branch, HEAD or revision could not be resolved."""

    def __init__(self, ref: str, message: Optional[str] = None):
        super().__init__(message or f"Reference '{ref}' not found")
        self.ref = ref


class PathNotFoundError(NotFoundError):
    """A path is not present in a tree snapshot."""

    def __init__(self, path: str, where: str = 'HEAD'):
        super().__init__(f"Path '{path}' does not exist in {where}")
        self.path = path


class CorruptObjectError(TwigError):
    """A stored object cannot be decoded."""

    def __init__(self, obj_hash: str, reason: str):
        super().__init__(f"Corrupt object {obj_hash}: {reason}")
        self.hash = obj_hash
        self.reason = reason


class NothingStagedError(TwigError):
    """Commit attempted without staged changes."""

    def __init__(self, message: str = "Nothing to commit (staging area is empty)"):
        super().__init__(message)


class AlreadyExistsError(TwigError):
    """A branch with the requested name already exists."""

    def __init__(self, name: str):
        super().__init__(f"Branch '{name}' already exists")
        self.name = name


class MissingIdentityError(TwigError):
    """No author identity is configured."""

    def __init__(self):
        super().__init__(
            "Author identity unknown. Set it with "
            "'twig config set user.name \"Your Name\"' and "
            "'twig config set user.email you@example.com'"
        )


class InvalidRepositoryError(TwigError):
    """Operation attempted outside an initialized repository."""

    def __init__(self, path):
        super().__init__(f"Not a twig repository: {path}")
        self.path = path


class InvalidRefError(TwigError):
    """A branch name is not acceptable."""

    def __init__(self, name: str):
        super().__init__(f"'{name}' is not a valid branch name")
        self.name = name


class MergeInProgressError(TwigError):
    """A conflicted merge must be concluded or aborted first."""

    def __init__(self):
        super().__init__(
            "Merge in progress; resolve conflicts and commit, or run 'twig merge --abort'"
        )


class RebaseError(TwigError):
    """Replaying a commit failed; the rebase stopped at that commit."""

    def __init__(self, commit_hash: str, reason: str, partial_tip: Optional[str] = None):
        super().__init__(f"Could not apply {commit_hash[:7]}: {reason}")
        self.commit = commit_hash
        self.reason = reason
        self.partial_tip = partial_tip


class LocalChangesError(TwigError):
    """Staged changes would be overwritten by switching snapshots."""

    def __init__(self, paths):
        self.paths = list(paths)
        super().__init__(
            "Staged changes would be lost: " + ', '.join(self.paths)
            + ". Commit them first"
        )


class PathConflictError(TwigError):
    """A path is staged both as a file and as a directory."""

    def __init__(self, path: str):
        super().__init__(f"'{path}' is staged both as a file and as a directory")
        self.path = path
