"""Commit creation and commit graph traversal."""

import logging
from collections import deque
from typing import Dict, Iterator, List, Optional, Set, Tuple

from twig.core.config import Identity, require_identity
from twig.core.errors import NothingStagedError
from twig.core.objects import Commit

logger = logging.getLogger(__name__)


class CommitGraph:
    """
    Creates commits and answers questions about their ancestry.

    Two traversals are offered:
    - history(): the first-parent chain, used for log and blame
    - ancestors(): breadth-first reachability over both parent links,
      used for merge bases and rebase planning
    """

    def __init__(self, repo):
        self.repo = repo

    def commit(
        self,
        message: str,
        author: Optional[Identity],
        committer: Optional[Identity] = None,
        timestamp: Optional[int] = None,
    ) -> str:
        """
        Record the staged snapshot as a new commit.

        HEAD becomes the parent. If a conflicted merge is being concluded,
        the merged-in commit becomes the second parent. The current branch
        (or HEAD itself when detached) advances to the new commit and the
        index keeps mirroring the committed tree.

        Args:
            message: Commit message
            author: Who wrote the change
            committer: Who records it (defaults to author)
            timestamp: Unix time (defaults to now)

        Returns:
            str: Hash of the new commit

        Raises:
            MissingIdentityError: If no author identity is given
            NothingStagedError: If the index is empty or unchanged since HEAD
        """
        author = require_identity(author)
        committer = require_identity(committer) if committer else author

        repo = self.repo
        index = repo.index
        if len(index) == 0:
            raise NothingStagedError()

        tree_hash = index.write_tree(repo)
        parent = repo.refs.resolve_head()
        merge_head = repo.merge.merge_head()

        if parent and not merge_head and repo.store.read_commit(parent).tree == tree_hash:
            raise NothingStagedError("Nothing to commit, working tree matches HEAD")

        parents = [parent] if parent else []
        if merge_head and parent:
            parents.append(merge_head)

        author_sig = author.signature(timestamp)
        commit = Commit.create(
            tree_hash=tree_hash,
            parent_hashes=parents,
            author=author_sig,
            committer=committer.signature(author_sig.time),
            message=message,
        )
        commit_hash = repo.store.write(commit)
        repo.refs.advance_head(commit_hash)

        if merge_head:
            repo.merge.clear_merge_state()
        repo.save_index()

        logger.debug("committed %s (tree %s, parents %s)", commit_hash, tree_hash, parents)
        return commit_hash

    def history(self, commit_hash: Optional[str]) -> List[str]:
        """
        First-parent chain starting at commit_hash, newest first.

        Second parents are not followed.
        """
        return [h for h, _ in self.walk(commit_hash)]

    def walk(self, commit_hash: Optional[str]) -> Iterator[Tuple[str, Commit]]:
        """Yield (hash, Commit) along the first-parent chain."""
        seen: Set[str] = set()
        current = commit_hash
        while current and current not in seen:
            seen.add(current)
            commit = self.repo.store.read_commit(current)
            yield current, commit
            current = commit.parent

    def ancestors(self, commit_hash: str) -> Set[str]:
        """All commits reachable from commit_hash (inclusive), via both parents."""
        return set(self._distances(commit_hash))

    def _distances(self, commit_hash: str) -> Dict[str, int]:
        """Breadth-first distance from commit_hash to every reachable commit."""
        distances = {commit_hash: 0}
        queue = deque([commit_hash])
        while queue:
            current = queue.popleft()
            for parent in self.repo.store.read_commit(current).parents:
                if parent not in distances:
                    distances[parent] = distances[current] + 1
                    queue.append(parent)
        return distances

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        """Whether ancestor is reachable from descendant (a commit is its own ancestor)."""
        return ancestor in self.ancestors(descendant)

    def common_ancestor(self, commit1: str, commit2: str) -> Optional[str]:
        """
        Lowest common ancestor of two commits.

        Common ancestors that are themselves ancestors of another common
        ancestor are discarded. If several remain (criss-cross history), the
        one closest to commit1 wins, then the lowest hash.

        Returns:
            Merge base hash, or None for unrelated histories
        """
        if commit1 == commit2:
            return commit1

        distances1 = self._distances(commit1)
        common = set(distances1) & self.ancestors(commit2)
        if not common:
            return None

        redundant: Set[str] = set()
        for candidate in common:
            if candidate in redundant:
                continue
            for parent in self.repo.store.read_commit(candidate).parents:
                if parent in common:
                    redundant |= self.ancestors(parent) & common

        best = sorted(common - redundant, key=lambda h: (distances1[h], h))
        return best[0]

    def commits_between(self, base: Optional[str], head: str) -> List[str]:
        """
        First-parent commits from head back to (excluding) the first one
        reachable from base, oldest first.
        """
        excluded = self.ancestors(base) if base else set()
        commits = []
        for commit_hash, _ in self.walk(head):
            if commit_hash in excluded:
                break
            commits.append(commit_hash)
        commits.reverse()
        return commits
