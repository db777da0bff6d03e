"""Rebase operations for Twig."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from twig.core.config import Identity, require_identity
from twig.core.errors import MergeInProgressError, RebaseError, RefNotFoundError, TwigError
from twig.core.objects import Commit
from twig.utils.fs import atomic_write_text

logger = logging.getLogger(__name__)


@dataclass
class RebaseResult:
    """Outcome of a rebase."""
    branch: str
    onto: str
    orig_head: str
    new_head: str
    # (old hash, new hash) per replayed commit, oldest first
    replayed: List[tuple] = field(default_factory=list)
    up_to_date: bool = False


class RebaseEngine:
    """
    Replays the commits of the current branch on top of another branch.

    Each replayed commit's files are laid over the tree built so far; paths
    the commit does not mention keep their current version and nothing is
    ever deleted. This is a snapshot overlay, not a patch replay.
    """

    def __init__(self, repo):
        self.repo = repo
        self.orig_head_file = repo.twig_dir / 'ORIG_HEAD'

    def orig_head(self) -> Optional[str]:
        if self.orig_head_file.exists():
            return self.orig_head_file.read_text().strip() or None
        return None

    def rebase(self, branch: str, committer: Optional[Identity]) -> RebaseResult:
        """
        Rebase the current branch onto branch.

        Args:
            branch: Branch (or revision) to rebase onto; it is never moved
            committer: Identity recorded as committer of the new commits

        Returns:
            RebaseResult

        Raises:
            RefNotFoundError: If HEAD is detached or unborn, or branch is unknown
            MissingIdentityError: If committer is missing
            MergeInProgressError: If a conflicted merge is pending
            LocalChangesError: If the index holds changes not committed to HEAD
            RebaseError: If a commit cannot be replayed
        """
        repo = self.repo
        refs = repo.refs
        graph = repo.graph

        if repo.merge.is_merge_in_progress():
            raise MergeInProgressError()
        current_branch = refs.head_target()
        if current_branch is None:
            raise RefNotFoundError('HEAD', "Cannot rebase: HEAD is detached")
        head = refs.resolve_head()
        if not head:
            raise RefNotFoundError(current_branch, f"Branch '{current_branch}' has no commits")
        onto = refs.resolve(branch)

        base = graph.common_ancestor(head, onto)
        if head == onto or base == onto:
            logger.debug("rebase: %s already based on %s", current_branch, branch)
            return RebaseResult(current_branch, onto, head, head, up_to_date=True)

        committer = require_identity(committer)
        repo.worktree.require_no_staged_changes()
        to_replay = graph.commits_between(onto, head)
        atomic_write_text(self.orig_head_file, head + '\n')
        logger.debug("rebase %s onto %s: replaying %d commit(s)",
                     current_branch, onto, len(to_replay))

        refs.checkout(onto)
        tip = onto
        replayed = []
        for old_hash in to_replay:
            try:
                tip = self._replay(old_hash, tip, committer)
            except TwigError as e:
                self._finish(current_branch, tip)
                raise RebaseError(old_hash, str(e), partial_tip=tip) from e
            replayed.append((old_hash, tip))

        self._finish(current_branch, tip)
        return RebaseResult(current_branch, onto, head, tip, replayed)

    def _replay(self, commit_hash: str, tip: str, committer: Identity) -> str:
        """Lay commit_hash's snapshot over tip and commit the result on a detached HEAD."""
        store = self.repo.store
        original = store.read_commit(commit_hash)

        files = store.flatten_tree(store.read_commit(tip).tree)
        files.update(store.flatten_tree(original.tree))
        tree_hash = store.build_tree(files)

        commit = Commit.create(
            tree_hash=tree_hash,
            parent_hashes=[tip],
            author=original.author,
            committer=committer.signature(),
            message=original.message,
        )
        commit.extra_headers = list(original.extra_headers)
        new_hash = store.write(commit)

        self.repo.worktree.checkout_tree(tree_hash)
        self.repo.refs.set_head(new_hash, symbolic=False)
        logger.debug("replayed %s as %s", commit_hash, new_hash)
        return new_hash

    def _finish(self, branch: str, tip: str) -> None:
        self.repo.refs.update_branch(branch, tip)
        self.repo.refs.checkout(branch)
