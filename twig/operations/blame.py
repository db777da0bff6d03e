"""Line attribution for Twig."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from twig.core.errors import PathNotFoundError
from twig.operations.diff import split_lines

logger = logging.getLogger(__name__)


@dataclass
class BlameLine:
    """One line of a file with the commit that introduced it."""
    line_no: int
    text: str
    commit: str
    author: str
    time: int


class BlameEngine:
    """
    Attributes each line of a file to a commit.

    Lines are matched by position, not content: walking first-parent
    history back from the starting commit, a line is credited to the
    oldest commit of the unbroken run in which the file still holds the
    same text at the same index. Moved lines therefore look modified.
    """

    def __init__(self, repo):
        self.repo = repo

    def _lines_at(self, tree_hash: str, path: str) -> Optional[List[str]]:
        blob_hash = self.repo.store.find_entry(tree_hash, path)
        if blob_hash is None:
            return None
        return split_lines(self.repo.store.read_blob(blob_hash).data)

    def blame(self, path: str, commit: Optional[str] = None) -> List[BlameLine]:
        """
        Blame path as of commit (default HEAD).

        Raises:
            RefNotFoundError: If commit (or HEAD) does not resolve
            PathNotFoundError: If the starting snapshot lacks path
        """
        start = self.repo.refs.resolve(commit or 'HEAD')
        store = self.repo.store
        graph = self.repo.graph

        target = self._lines_at(store.read_commit(start).tree, path)
        if target is None:
            raise PathNotFoundError(path, commit or 'HEAD')

        owners: List[Optional[str]] = [start] * len(target)
        open_lines = set(range(len(target)))
        commits = {}

        for commit_hash, obj in graph.walk(start):
            commits[commit_hash] = obj
            if not open_lines:
                break
            lines = self._lines_at(obj.tree, path)
            if lines is None:
                break
            for i in list(open_lines):
                if i < len(lines) and lines[i] == target[i]:
                    owners[i] = commit_hash
                else:
                    open_lines.discard(i)

        logger.debug("blame %s from %s: %d line(s) across %d commit(s)",
                     path, start, len(target), len(commits))
        result = []
        for i, text in enumerate(target):
            owner = commits[owners[i]]
            author = owner.author
            result.append(BlameLine(
                line_no=i + 1,
                text=text,
                commit=owners[i],
                author=author.name if author else '',
                time=author.time if author else 0,
            ))
        return result
