"""Hash utilities for Twig."""

import hashlib
import re

HASH_PATTERN = re.compile(r'^[0-9a-f]{40}$')


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.

    Args:
        data: Bytes to hash

    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def object_header(obj_type: str, size: int) -> bytes:
    """Header prepended to every stored object: ``<type> <size>\\0``."""
    return f"{obj_type} {size}\0".encode()


def object_id(obj_type: str, content: bytes) -> str:
    """
    Compute the address of an object.

    Args:
        obj_type: 'blob', 'tree' or 'commit'
        content: Serialized object body

    Returns:
        40-character hex string
    """
    return hash_object(object_header(obj_type, len(content)) + content)


def hash_file(filepath) -> str:
    """
    Compute the blob address of a file's content.

    Args:
        filepath: Path to file

    Returns:
        40-character hex string
    """
    with open(filepath, 'rb') as f:
        return object_id('blob', f.read())


def is_valid_hash(value: str) -> bool:
    """Whether value is a full lowercase 40-character hex hash."""
    return bool(value) and HASH_PATTERN.match(value) is not None
