"""Operations module for high-level Twig operations.

This module contains the business logic for Twig operations like:
- Commit creation and history traversal
- Working tree checkout and status
- Diff computation
- Merge and rebase
- Blame
"""

from twig.operations.history import CommitGraph
from twig.operations.worktree import WorkTree, Status
from twig.operations.diff import DiffEngine, FileDiff, DiffOp, diff_lines, apply_script
from twig.operations.merge import MergeEngine, MergeResult, MergeConflict, TreeMergeResult
from twig.operations.rebase import RebaseEngine, RebaseResult
from twig.operations.blame import BlameEngine, BlameLine

__all__ = [
    'CommitGraph',
    'WorkTree', 'Status',
    'DiffEngine', 'FileDiff', 'DiffOp', 'diff_lines', 'apply_script',
    'MergeEngine', 'MergeResult', 'MergeConflict', 'TreeMergeResult',
    'RebaseEngine', 'RebaseResult',
    'BlameEngine', 'BlameLine',
]
