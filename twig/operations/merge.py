"""Merge operations for Twig."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from twig.core.config import Identity, require_identity
from twig.core.errors import MergeInProgressError, RefNotFoundError
from twig.core.objects import Blob, Commit
from twig.utils.fs import atomic_write_text

logger = logging.getLogger(__name__)


@dataclass
class MergeConflict:
    """A path whose content diverged on both sides of a merge."""
    path: str
    base_content: Optional[bytes]
    ours_content: Optional[bytes]
    theirs_content: Optional[bytes]

    def __repr__(self) -> str:
        return f"MergeConflict({self.path})"


@dataclass
class TreeMergeResult:
    """Outcome of a three-way tree merge."""
    tree: str
    files: Dict[str, str]
    conflicts: List[MergeConflict] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.conflicts


@dataclass
class MergeResult:
    """Result of merging a branch into HEAD."""
    success: bool
    conflicts: List[MergeConflict] = field(default_factory=list)
    commit: Optional[str] = None
    up_to_date: bool = False
    message: str = ""

    def __repr__(self) -> str:
        if self.up_to_date:
            return "MergeResult(up-to-date)"
        if self.success:
            return f"MergeResult(success, commit={self.commit[:7] if self.commit else None})"
        return f"MergeResult(conflicts={len(self.conflicts)})"


def conflict_markers(conflict: MergeConflict, branch: str) -> bytes:
    """
    Build file content showing both sides of a conflict.

    Format:
    <<<<<<< HEAD
    <ours>
    =======
    <theirs>
    >>>>>>> <branch>
    """
    result = [b"<<<<<<< HEAD\n"]
    if conflict.ours_content:
        result.append(conflict.ours_content)
        if not conflict.ours_content.endswith(b'\n'):
            result.append(b'\n')
    result.append(b"=======\n")
    if conflict.theirs_content:
        result.append(conflict.theirs_content)
        if not conflict.theirs_content.endswith(b'\n'):
            result.append(b'\n')
    result.append(f">>>>>>> {branch}\n".encode('utf-8'))
    return b''.join(result)


class MergeEngine:
    """
    Handles merge operations for Twig.

    Supports:
    - Three-way per-path tree merges
    - Conflict detection with markers written to the work tree and index
    - Merge state (MERGE_HEAD / MERGE_MSG) so a later commit concludes the merge
    """

    def __init__(self, repo):
        self.repo = repo
        self.merge_head_file = repo.twig_dir / 'MERGE_HEAD'
        self.merge_msg_file = repo.twig_dir / 'MERGE_MSG'

    def merge_trees(
        self,
        ours: Optional[str],
        theirs: Optional[str],
        base: Optional[str],
        branch: str = 'theirs',
    ) -> TreeMergeResult:
        """
        Three-way merge of tree snapshots, path by path.

        - unchanged on both sides: keep base
        - changed on exactly one side: take that side (deletion included)
        - changed identically on both sides: take that version
        - changed differently: conflict; the merged tree gets a blob with
          conflict markers in that path's place

        Args:
            ours: Our tree hash
            theirs: Their tree hash
            base: Common ancestor's tree hash (None for unrelated histories)
            branch: Name shown in the closing conflict marker

        Returns:
            TreeMergeResult
        """
        store = self.repo.store
        base_files = store.flatten_tree(base)
        ours_files = store.flatten_tree(ours)
        theirs_files = store.flatten_tree(theirs)

        merged: Dict[str, str] = {}
        conflicts: List[MergeConflict] = []

        for path in sorted(set(base_files) | set(ours_files) | set(theirs_files)):
            base_hash = base_files.get(path)
            ours_hash = ours_files.get(path)
            theirs_hash = theirs_files.get(path)

            if ours_hash == theirs_hash:
                chosen = ours_hash
            elif ours_hash == base_hash:
                chosen = theirs_hash
            elif theirs_hash == base_hash:
                chosen = ours_hash
            else:
                conflict = MergeConflict(
                    path=path,
                    base_content=self._blob_data(base_hash),
                    ours_content=self._blob_data(ours_hash),
                    theirs_content=self._blob_data(theirs_hash),
                )
                conflicts.append(conflict)
                chosen = store.write(Blob(conflict_markers(conflict, branch)))

            if chosen:
                merged[path] = chosen

        tree_hash = store.build_tree(merged)
        logger.debug("merged trees ours=%s theirs=%s base=%s: %d conflict(s)",
                     ours, theirs, base, len(conflicts))
        return TreeMergeResult(tree=tree_hash, files=merged, conflicts=conflicts)

    def _blob_data(self, blob_hash: Optional[str]) -> Optional[bytes]:
        if not blob_hash:
            return None
        return self.repo.store.read_blob(blob_hash).data

    def merge(self, branch: str, author: Optional[Identity]) -> MergeResult:
        """
        Merge a branch into the current HEAD.

        Args:
            branch: Branch name (or any revision) to merge
            author: Identity recorded on the merge commit

        Returns:
            MergeResult; conflicts are a normal outcome, not an exception

        Raises:
            MergeInProgressError: If a conflicted merge is pending
            RefNotFoundError: If HEAD is unborn or branch is unknown
            MissingIdentityError: If author is missing
            LocalChangesError: If the index holds changes not committed to HEAD
        """
        if self.is_merge_in_progress():
            raise MergeInProgressError()

        repo = self.repo
        graph = repo.graph
        current = repo.refs.resolve_head()
        if not current:
            raise RefNotFoundError('HEAD', "No commits on current branch")
        target = repo.refs.resolve(branch)

        if current == target or graph.is_ancestor(target, current):
            return MergeResult(success=True, up_to_date=True, message="Already up to date.")

        author = require_identity(author)
        repo.worktree.require_no_staged_changes()
        base = graph.common_ancestor(current, target)
        store = repo.store
        base_tree = store.read_commit(base).tree if base else None
        result = self.merge_trees(
            store.read_commit(current).tree,
            store.read_commit(target).tree,
            base_tree,
            branch=branch,
        )

        current_branch = repo.refs.current_branch()
        if result.conflicts:
            self._write_conflicts(result)
            self.save_merge_state(target, branch, result.conflicts)
            return MergeResult(
                success=False,
                conflicts=result.conflicts,
                message=f"Merge conflicts in {len(result.conflicts)} file(s)",
            )

        signature = author.signature()
        commit = Commit.create(
            tree_hash=result.tree,
            parent_hashes=[current, target],
            author=signature,
            message=f"Merge branch '{branch}' into {current_branch}",
        )
        commit_hash = store.write(commit)
        repo.worktree.checkout_tree(result.tree)
        repo.refs.advance_head(commit_hash)

        logger.debug("merge commit %s (%s + %s, base %s)", commit_hash, current, target, base)
        return MergeResult(
            success=True,
            commit=commit_hash,
            message=f"Merged '{branch}' into {current_branch}",
        )

    def _write_conflicts(self, result: TreeMergeResult) -> None:
        """Bring the work tree and index to the merged state, markers included."""
        self.repo.worktree.checkout_tree(result.tree)

    def save_merge_state(self, theirs_hash: str, branch: str, conflicts: List[MergeConflict]) -> None:
        """Record MERGE_HEAD and MERGE_MSG for a later commit or abort."""
        atomic_write_text(self.merge_head_file, theirs_hash + '\n')
        lines = [f"Merge branch '{branch}'\n", "\n", "Conflicts:\n"]
        lines.extend(f"\t{c.path}\n" for c in conflicts)
        atomic_write_text(self.merge_msg_file, ''.join(lines))

    def clear_merge_state(self) -> None:
        for path in (self.merge_head_file, self.merge_msg_file):
            if path.exists():
                path.unlink()

    def is_merge_in_progress(self) -> bool:
        return self.merge_head_file.exists()

    def merge_head(self) -> Optional[str]:
        """The commit being merged in, or None."""
        if self.merge_head_file.exists():
            return self.merge_head_file.read_text().strip() or None
        return None

    def merge_message(self) -> Optional[str]:
        if self.merge_msg_file.exists():
            return self.merge_msg_file.read_text().split('\n', 1)[0]
        return None

    def abort(self) -> bool:
        """
        Abandon a conflicted merge, restoring HEAD's tree.

        Returns:
            False if no merge was in progress
        """
        if not self.is_merge_in_progress():
            return False
        head_tree = self.repo.head_tree()
        if head_tree:
            self.repo.worktree.checkout_tree(head_tree)
        self.clear_merge_state()
        return True
