"""Content-addressable object store."""

import logging
import zlib
from pathlib import Path
from typing import Dict, Iterator, Optional

from .errors import ObjectNotFoundError, CorruptObjectError, PathConflictError
from .hash import object_header, object_id, is_valid_hash
from .objects import TwigObject, Blob, Tree, Commit, OBJECT_TYPES, MODE_FILE, MODE_DIR
from twig.utils.fs import atomic_write

logger = logging.getLogger(__name__)


class ObjectStore:
    """
    Persists blobs, trees and commits under their SHA-1 address.

    Objects are stored zlib-compressed as ``<type> <size>\\0<content>`` in
    subdirectories named by the first 2 characters of the hash, with the
    remaining 38 characters as the filename. An object is never rewritten
    once present.
    """

    def __init__(self, objects_dir: Path):
        self.objects_dir = Path(objects_dir)

    def object_path(self, obj_hash: str) -> Path:
        """
        Get filesystem path for an object.

        Example: ab/cdef0123456789... for hash abcdef0123456789...
        """
        return self.objects_dir / obj_hash[:2] / obj_hash[2:]

    def exists(self, obj_hash: str) -> bool:
        return is_valid_hash(obj_hash) and self.object_path(obj_hash).is_file()

    def put(self, content: bytes, obj_type: str) -> str:
        """
        Store raw object content.

        Args:
            content: Serialized object body
            obj_type: 'blob', 'tree' or 'commit'

        Returns:
            str: Address of the object
        """
        if obj_type not in OBJECT_TYPES:
            raise ValueError(f"Unknown object type: {obj_type}")

        obj_hash = object_id(obj_type, content)
        path = self.object_path(obj_hash)
        if path.exists():
            return obj_hash

        atomic_write(path, zlib.compress(object_header(obj_type, len(content)) + content))
        logger.debug("stored %s %s (%d bytes)", obj_type, obj_hash, len(content))
        return obj_hash

    def write(self, obj: TwigObject) -> str:
        """Store an object and return its address."""
        return self.put(obj.serialize(), obj.type)

    def read_raw(self, obj_hash: str):
        """
        Read and decode the envelope of an object.

        Returns:
            Tuple of (type, body bytes)

        Raises:
            ObjectNotFoundError: If nothing is stored under obj_hash
            CorruptObjectError: If the envelope cannot be decoded
        """
        if not is_valid_hash(obj_hash):
            raise ObjectNotFoundError(obj_hash)
        path = self.object_path(obj_hash)
        if not path.is_file():
            raise ObjectNotFoundError(obj_hash)

        try:
            content = zlib.decompress(path.read_bytes())
        except zlib.error as e:
            raise CorruptObjectError(obj_hash, f"cannot decompress: {e}") from e

        null_idx = content.find(b'\0')
        if null_idx < 0:
            raise CorruptObjectError(obj_hash, "header has no separator")

        header = content[:null_idx].decode('ascii', errors='replace')
        body = content[null_idx + 1:]

        obj_type, _, size_str = header.partition(' ')
        if obj_type not in OBJECT_TYPES:
            raise CorruptObjectError(obj_hash, f"unknown object type '{obj_type}'")
        if not size_str.isdigit():
            raise CorruptObjectError(obj_hash, f"invalid header '{header}'")
        if int(size_str) != len(body):
            raise CorruptObjectError(
                obj_hash, f"size mismatch: expected {size_str}, got {len(body)}"
            )
        return obj_type, body

    def get(self, obj_hash: str) -> TwigObject:
        """
        Read and parse an object.

        Returns:
            Blob, Tree or Commit

        Raises:
            ObjectNotFoundError: If nothing is stored under obj_hash
            CorruptObjectError: If the object cannot be parsed
        """
        obj_type, body = self.read_raw(obj_hash)
        obj = OBJECT_TYPES[obj_type]()
        try:
            obj.deserialize(body)
        except (ValueError, UnicodeDecodeError) as e:
            raise CorruptObjectError(obj_hash, str(e)) from e
        return obj

    def _read_typed(self, obj_hash: str, cls):
        obj = self.get(obj_hash)
        if not isinstance(obj, cls):
            raise CorruptObjectError(obj_hash, f"expected {cls.__name__.lower()}, found {obj.type}")
        return obj

    def read_blob(self, obj_hash: str) -> Blob:
        return self._read_typed(obj_hash, Blob)

    def read_tree(self, obj_hash: str) -> Tree:
        return self._read_typed(obj_hash, Tree)

    def read_commit(self, obj_hash: str) -> Commit:
        return self._read_typed(obj_hash, Commit)

    def build_tree(self, files: Dict[str, str]) -> str:
        """
        Build nested trees from a flat ``{path: blob_hash}`` mapping.

        One tree per directory is written, deepest first, so every
        subtree is content-addressed on its own.

        Returns:
            str: Hash of the root tree

        Raises:
            PathConflictError: If a path is both a file and a parent directory
        """
        children: Dict[str, Dict[str, tuple]] = {'': {}}
        for path in files:
            parts = path.split('/')
            for i in range(1, len(parts)):
                children.setdefault('/'.join(parts[:i]), {})

        for path, blob_hash in files.items():
            if path in children:
                raise PathConflictError(path)
            parent, _, name = path.rpartition('/')
            children[parent][name] = (MODE_FILE, 'blob', blob_hash)

        subdirs = sorted((p for p in children if p), key=lambda p: p.count('/'), reverse=True)
        for dir_path in subdirs:
            parent, _, name = dir_path.rpartition('/')
            children[parent][name] = (MODE_DIR, 'tree', self._write_tree(children[dir_path]))
        return self._write_tree(children[''])

    def _write_tree(self, entries: Dict[str, tuple]) -> str:
        tree = Tree()
        for name, (mode, obj_type, obj_hash) in entries.items():
            tree.add_entry(mode, obj_type, obj_hash, name)
        return self.write(tree)

    def flatten_tree(self, tree_hash: Optional[str], prefix: str = '') -> Dict[str, str]:
        """
        Recursively list every blob of a tree.

        Returns:
            Dict mapping slash-separated paths to blob hashes
        """
        files: Dict[str, str] = {}
        if not tree_hash:
            return files

        for entry in self.read_tree(tree_hash).entries:
            path = f"{prefix}{entry.name}"
            if entry.type == 'tree':
                files.update(self.flatten_tree(entry.hash, f"{path}/"))
            else:
                files[path] = entry.hash
        return files

    def find_entry(self, tree_hash: str, path: str) -> Optional[str]:
        """Hash of the blob at path inside tree_hash, or None."""
        parts = path.strip('/').split('/')
        current = tree_hash
        for i, part in enumerate(parts):
            entry = self.read_tree(current).get(part)
            if entry is None:
                return None
            if i == len(parts) - 1:
                return entry.hash if entry.type == 'blob' else None
            if entry.type != 'tree':
                return None
            current = entry.hash
        return None

    def iter_objects(self) -> Iterator[str]:
        """Yield the address of every stored object."""
        if not self.objects_dir.exists():
            return
        for shard in sorted(self.objects_dir.iterdir()):
            if not shard.is_dir() or len(shard.name) != 2:
                continue
            for obj_file in sorted(shard.iterdir()):
                obj_hash = shard.name + obj_file.name
                if is_valid_hash(obj_hash):
                    yield obj_hash

    def count(self) -> int:
        return sum(1 for _ in self.iter_objects())

    def __repr__(self) -> str:
        return f"ObjectStore(path={self.objects_dir})"
