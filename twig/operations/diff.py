"""Diff engine for comparing files and trees.

Line diffs use a greedy alignment rather than a minimal edit script:
both sequences advance together while lines are equal; on a mismatch the
left side's lines that occur nowhere on the right are deleted, then the
right side's lines that occur nowhere on the left are inserted, and
synchronized scanning resumes. Leftover tails become pure deletions or
insertions. The result always turns the left sequence into the right one,
but it is not guaranteed to be the shortest such script.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

EQUAL = 'equal'
DELETE = 'delete'
INSERT = 'insert'


@dataclass(frozen=True)
class DiffOp:
    """One step of an edit script."""
    tag: str
    line: str


def diff_lines(a: Sequence[str], b: Sequence[str]) -> List[DiffOp]:
    """
    Compute an edit script turning a into b.

    Args:
        a: Left (old) lines
        b: Right (new) lines

    Returns:
        List of DiffOp in application order
    """
    ops: List[DiffOp] = []
    in_a = set(a)
    in_b = set(b)
    i = j = 0

    while i < len(a) and j < len(b):
        if a[i] == b[j]:
            ops.append(DiffOp(EQUAL, a[i]))
            i += 1
            j += 1
            continue

        start_i, start_j = i, j
        while i < len(a) and a[i] not in in_b:
            ops.append(DiffOp(DELETE, a[i]))
            i += 1
        while j < len(b) and b[j] not in in_a:
            ops.append(DiffOp(INSERT, b[j]))
            j += 1

        # Both heads occur elsewhere on the other side (e.g. swapped lines).
        if i == start_i and j == start_j:
            ops.append(DiffOp(DELETE, a[i]))
            i += 1

    ops.extend(DiffOp(DELETE, line) for line in a[i:])
    ops.extend(DiffOp(INSERT, line) for line in b[j:])
    return ops


def apply_script(a: Sequence[str], ops: Sequence[DiffOp]) -> List[str]:
    """
    Replay an edit script against a.

    Raises:
        ValueError: If the script does not match a
    """
    result: List[str] = []
    pos = 0
    for op in ops:
        if op.tag == INSERT:
            result.append(op.line)
            continue
        if pos >= len(a) or a[pos] != op.line:
            raise ValueError(f"Edit script does not apply at line {pos + 1}")
        if op.tag == EQUAL:
            result.append(op.line)
        pos += 1
    if pos != len(a):
        raise ValueError("Edit script does not consume the whole input")
    return result


def split_lines(content: Optional[bytes]) -> List[str]:
    """Decode content and split it into lines without line terminators."""
    if not content:
        return []
    return content.decode('utf-8', errors='replace').splitlines()


def is_binary(content: Optional[bytes]) -> bool:
    return content is not None and b'\0' in content


class FileDiff:
    """Represents the diff for a single file."""

    def __init__(self, path: str, old_content: Optional[bytes], new_content: Optional[bytes]):
        self.path = path
        self.old_content = old_content
        self.new_content = new_content
        self.is_new = old_content is None
        self.is_deleted = new_content is None
        self.is_modified = old_content is not None and new_content is not None
        self.is_binary = is_binary(old_content) or is_binary(new_content)
        self.ops: List[DiffOp] = []

    def compute_diff(self) -> 'FileDiff':
        """Compute the line edit script (skipped for binary content)."""
        if not self.is_binary:
            self.ops = diff_lines(split_lines(self.old_content), split_lines(self.new_content))
        return self

    @property
    def insertions(self) -> int:
        return sum(1 for op in self.ops if op.tag == INSERT)

    @property
    def deletions(self) -> int:
        return sum(1 for op in self.ops if op.tag == DELETE)

    def __repr__(self) -> str:
        return f"FileDiff({self.path}, +{self.insertions}, -{self.deletions})"


class DiffEngine:
    """
    Engine for computing diffs between files, trees, commits, the index
    and the working directory.
    """

    def __init__(self, repo):
        self.repo = repo

    def diff_blobs(self, path: str, old_content: Optional[bytes], new_content: Optional[bytes]) -> FileDiff:
        """
        Compute diff between two blob contents.

        Args:
            path: File path
            old_content: Old file content (None for new files)
            new_content: New file content (None for deleted files)
        """
        return FileDiff(path, old_content, new_content).compute_diff()

    def _blob_data(self, blob_hash: Optional[str]) -> Optional[bytes]:
        if not blob_hash:
            return None
        return self.repo.store.read_blob(blob_hash).data

    def diff_trees(self, old_files: Dict[str, str], new_files: Dict[str, str]) -> List[FileDiff]:
        """
        Compute diff between two flattened trees.

        Args:
            old_files: Dict of {path: blob_hash} for old tree
            new_files: Dict of {path: blob_hash} for new tree
        """
        diffs = []
        for path in sorted(set(old_files) | set(new_files)):
            old_hash = old_files.get(path)
            new_hash = new_files.get(path)
            if old_hash == new_hash:
                continue
            diffs.append(self.diff_blobs(path, self._blob_data(old_hash), self._blob_data(new_hash)))
        return diffs

    def diff_commits(self, old_ref: Optional[str], new_ref: str) -> List[FileDiff]:
        """
        Compute diff between two revisions (branch names, hashes or HEAD).

        Args:
            old_ref: Old revision (None for the empty tree)
            new_ref: New revision
        """
        store = self.repo.store
        refs = self.repo.refs

        old_files: Dict[str, str] = {}
        if old_ref:
            old_files = store.flatten_tree(store.read_commit(refs.resolve(old_ref)).tree)
        new_files = store.flatten_tree(store.read_commit(refs.resolve(new_ref)).tree)
        return self.diff_trees(old_files, new_files)

    def diff_index_to_head(self) -> List[FileDiff]:
        """Staged changes: HEAD tree versus index."""
        head_files = self.repo.store.flatten_tree(self.repo.head_tree())
        return self.diff_trees(head_files, dict(self.repo.index.entries))

    def diff_worktree_to_index(self) -> List[FileDiff]:
        """Unstaged changes: index versus files on disk (tracked files only)."""
        diffs = []
        for path, blob_hash in sorted(self.repo.index.entries.items()):
            full = self.repo.work_tree / path
            new_content = full.read_bytes() if full.is_file() else None
            old_content = self._blob_data(blob_hash)
            if old_content != new_content:
                diffs.append(self.diff_blobs(path, old_content, new_content))
        return diffs

    def format_diff(self, diffs: List[FileDiff], color: bool = True) -> str:
        """
        Format diffs for display.

        Args:
            diffs: List of FileDiff objects
            color: Whether to use color output
        """
        from colorama import Fore, Style

        def paint(text: str, colour: str) -> str:
            return f"{colour}{text}{Style.RESET_ALL}" if color else text

        output = []
        for diff in diffs:
            output.append(paint(f"diff --twig a/{diff.path} b/{diff.path}", Style.BRIGHT))
            if diff.is_new:
                output.append("new file mode 100644")
                output.append("--- /dev/null")
                output.append(f"+++ b/{diff.path}")
            elif diff.is_deleted:
                output.append("deleted file mode 100644")
                output.append(f"--- a/{diff.path}")
                output.append("+++ /dev/null")
            else:
                output.append(f"--- a/{diff.path}")
                output.append(f"+++ b/{diff.path}")

            if diff.is_binary:
                output.append(f"Binary files a/{diff.path} and b/{diff.path} differ")
                continue

            for op in diff.ops:
                if op.tag == INSERT:
                    output.append(paint(f"+{op.line}", Fore.GREEN))
                elif op.tag == DELETE:
                    output.append(paint(f"-{op.line}", Fore.RED))
                else:
                    output.append(f" {op.line}")

        return '\n'.join(output)
