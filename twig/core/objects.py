"""Twig objects: blobs, trees and commits."""

import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .hash import object_id, is_valid_hash

SIGNATURE_PATTERN = re.compile(r'^(.*) <(.*)> (\d+) (\S+)$')

MODE_FILE = '100644'
MODE_DIR = '040000'


class TwigObject(ABC):
    """Base class for all Twig objects."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object to bytes.

        Returns:
            bytes: Serialized object data
        """

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Deserialize object from bytes.

        Args:
            data: Serialized object data

        Raises:
            ValueError: If data is not a valid encoding of this type
        """

    @property
    def type(self) -> str:
        """
        Return object type name.

        Returns:
            str: Object type (blob, tree, commit)
        """
        return self.__class__.__name__.lower()

    def compute_hash(self) -> str:
        """
        Compute and cache object hash.

        Objects are hashed with a header containing the type and size.
        Format: <type> <size>\\0<content>

        Returns:
            str: 40-character SHA-1 hash
        """
        if self._hash is None:
            self._hash = object_id(self.type, self.serialize())
        return self._hash

    @property
    def hash(self) -> str:
        """40-character SHA-1 hash of the object."""
        return self.compute_hash()

    def __eq__(self, other) -> bool:
        if not isinstance(other, TwigObject):
            return NotImplemented
        return self.type == other.type and self.serialize() == other.serialize()


class Blob(TwigObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''

    @property
    def size(self) -> int:
        return len(self.data)

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data
        self._hash = None

    @classmethod
    def from_file(cls, filepath) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(f.read())

    def __repr__(self) -> str:
        return f"Blob(hash={self.hash[:7]}, size={self.size})"


class TreeEntry:
    """
    Represents a single entry in a tree.

    Each entry contains:
    - mode: File permissions ('100644' for file, '040000' for directory)
    - type: Object type ('blob' or 'tree')
    - hash: SHA-1 hash of the object
    - name: File or directory name (a single path segment)
    """

    def __init__(self, mode: str, obj_type: str, obj_hash: str, name: str):
        self.mode = mode
        self.type = obj_type
        self.hash = obj_hash
        self.name = name

    def __eq__(self, other) -> bool:
        if not isinstance(other, TreeEntry):
            return NotImplemented
        return (self.mode, self.type, self.hash, self.name) == \
            (other.mode, other.type, other.hash, other.name)

    def __lt__(self, other: 'TreeEntry') -> bool:
        """Sort entries by name for consistent ordering."""
        return self.name < other.name

    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.type} {self.hash[:7]} {self.name})"


class Tree(TwigObject):
    """
    Represents one directory level.

    Entries point to blobs (files) and other trees (subdirectories).
    Serialized as one text record per entry: ``<mode> <type> <hash>\\t<name>\\n``.
    """

    def __init__(self):
        super().__init__()
        self.entries: List[TreeEntry] = []

    def add_entry(self, mode: str, obj_type: str, obj_hash: str, name: str) -> None:
        """
        Add entry to tree, replacing any entry with the same name.

        Raises:
            ValueError: If the entry cannot be encoded
        """
        if obj_type not in ('blob', 'tree'):
            raise ValueError(f"Invalid tree entry type: {obj_type}")
        if not name or '/' in name or '\t' in name or '\n' in name:
            raise ValueError(f"Invalid tree entry name: {name!r}")
        if not is_valid_hash(obj_hash):
            raise ValueError(f"Invalid object hash in tree entry: {obj_hash}")

        self.entries = [e for e in self.entries if e.name != name]
        self.entries.append(TreeEntry(mode, obj_type, obj_hash, name))
        self.entries.sort()
        self._hash = None

    def get(self, name: str) -> Optional[TreeEntry]:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def serialize(self) -> bytes:
        lines = [f"{e.mode} {e.type} {e.hash}\t{e.name}\n" for e in sorted(self.entries)]
        return ''.join(lines).encode()

    def deserialize(self, data: bytes) -> None:
        self.entries = []
        for record in data.decode().split('\n'):
            if not record:
                continue
            meta, sep, name = record.partition('\t')
            parts = meta.split(' ')
            if not sep or len(parts) != 3:
                raise ValueError(f"Malformed tree record: {record!r}")
            mode, obj_type, obj_hash = parts
            self.add_entry(mode, obj_type, obj_hash, name)
        self._hash = None

    def __repr__(self) -> str:
        return f"Tree(entries={len(self.entries)})"


@dataclass(frozen=True)
class Signature:
    """Who made a commit and when: ``name <email> unixTime timezone``."""
    name: str
    email: str
    time: int
    timezone: str = '+0000'

    @classmethod
    def parse(cls, value: str) -> 'Signature':
        match = SIGNATURE_PATTERN.match(value)
        if not match:
            raise ValueError(f"Malformed signature: {value!r}")
        return cls(match.group(1), match.group(2), int(match.group(3)), match.group(4))

    @property
    def identity(self) -> str:
        """Name and email in ``Name <email>`` form."""
        return f"{self.name} <{self.email}>"

    def __str__(self) -> str:
        return f"{self.name} <{self.email}> {self.time} {self.timezone}"


class Commit(TwigObject):
    """
    Represents a commit with metadata.

    A commit captures:
    - Snapshot of project (tree hash)
    - Up to two parents (the second one only on merge commits)
    - Author and committer signatures
    - Commit message
    - Any other header lines, kept verbatim
    """

    MAX_PARENTS = 2

    def __init__(self):
        super().__init__()
        self.tree: str = ''
        self.parents: List[str] = []
        self.author: Optional[Signature] = None
        self.committer: Optional[Signature] = None
        self.extra_headers: List[Tuple[str, str]] = []
        self.message: str = ''

    @property
    def parent(self) -> Optional[str]:
        """First parent, or None for a root commit."""
        return self.parents[0] if self.parents else None

    @property
    def second_parent(self) -> Optional[str]:
        """Merged-in parent, or None unless this is a merge commit."""
        return self.parents[1] if len(self.parents) > 1 else None

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    def serialize(self) -> bytes:
        """
        Serialize commit.

        Format:
        tree <tree-hash>
        parent <parent-hash>  (zero to two)
        author Name <email> <timestamp> <timezone>
        committer Name <email> <timestamp> <timezone>
        <other headers>

        <commit message>
        """
        lines = [f'tree {self.tree}']
        for parent in self.parents:
            lines.append(f'parent {parent}')
        if self.author is not None:
            lines.append(f'author {self.author}')
        if self.committer is not None:
            lines.append(f'committer {self.committer}')
        for key, value in self.extra_headers:
            lines.append(f'{key} {value}')
        lines.append('')
        lines.append(self.message)
        return ('\n'.join(lines) + '\n').encode()

    def deserialize(self, data: bytes) -> None:
        content = data.decode()
        header, sep, message = content.partition('\n\n')
        if not sep:
            raise ValueError("Commit has no message separator")

        self.tree = ''
        self.parents = []
        self.author = None
        self.committer = None
        self.extra_headers = []

        for line in header.split('\n'):
            key, _, value = line.partition(' ')
            if key == 'tree':
                self.tree = value
            elif key == 'parent':
                self.parents.append(value)
            elif key == 'author':
                self.author = Signature.parse(value)
            elif key == 'committer':
                self.committer = Signature.parse(value)
            else:
                self.extra_headers.append((key, value))

        if not is_valid_hash(self.tree):
            raise ValueError("Commit has no valid tree")
        if len(self.parents) > self.MAX_PARENTS:
            raise ValueError(f"Commit has {len(self.parents)} parents")

        self.message = message[:-1] if message.endswith('\n') else message
        self._hash = None

    @classmethod
    def create(
        cls,
        tree_hash: str,
        parent_hashes: List[str],
        author: Signature,
        message: str,
        committer: Optional[Signature] = None,
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            tree_hash: Hash of tree object
            parent_hashes: Zero, one or two parent commit hashes
            author: Author signature
            message: Commit message
            committer: Committer signature (defaults to author)

        Returns:
            Commit: New commit object
        """
        if len(parent_hashes) > cls.MAX_PARENTS:
            raise ValueError("A commit can have at most two parents")

        commit = cls()
        commit.tree = tree_hash
        commit.parents = list(parent_hashes)
        commit.author = author
        commit.committer = committer or author
        commit.message = message
        return commit

    def __repr__(self) -> str:
        parent_info = f", parents={len(self.parents)}" if self.parents else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"


OBJECT_TYPES = {
    'blob': Blob,
    'tree': Tree,
    'commit': Commit,
}


def now() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())
