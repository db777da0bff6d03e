"""Object model tests."""

import pytest

from twig.core.objects import Blob, Tree, TreeEntry, Commit, Signature

HASH_A = 'a' * 40
HASH_B = 'b' * 40


def test_blob_creation():
    """Test blob creation with data."""
    blob = Blob(b'hello world')
    assert blob.data == b'hello world'
    assert blob.type == 'blob'
    assert blob.size == 11


def test_blob_roundtrip():
    """Test blob serialize/deserialize cycle."""
    blob = Blob()
    blob.deserialize(Blob(b'test content').serialize())
    assert blob.data == b'test content'


def test_blob_from_file(tmp_path):
    path = tmp_path / 'f.bin'
    path.write_bytes(b'\x00\x01binary')
    assert Blob.from_file(path).data == b'\x00\x01binary'


def test_equal_objects_share_hash():
    assert Blob(b'same data') == Blob(b'same data')
    assert Blob(b'same data').hash == Blob(b'same data').hash


def test_tree_entries_sorted_by_name():
    tree = Tree()
    tree.add_entry('100644', 'blob', HASH_A, 'zeta.txt')
    tree.add_entry('040000', 'tree', HASH_B, 'alpha')
    assert [e.name for e in tree.entries] == ['alpha', 'zeta.txt']


def test_tree_add_entry_replaces_same_name():
    tree = Tree()
    tree.add_entry('100644', 'blob', HASH_A, 'file.txt')
    tree.add_entry('100644', 'blob', HASH_B, 'file.txt')
    assert len(tree.entries) == 1
    assert tree.get('file.txt').hash == HASH_B


@pytest.mark.parametrize('name', ['', 'a/b', 'tab\tname', 'new\nline'])
def test_tree_rejects_bad_names(name):
    with pytest.raises(ValueError):
        Tree().add_entry('100644', 'blob', HASH_A, name)


def test_tree_rejects_bad_hash():
    with pytest.raises(ValueError):
        Tree().add_entry('100644', 'blob', 'not-a-hash', 'file.txt')


def test_tree_text_format():
    tree = Tree()
    tree.add_entry('100644', 'blob', HASH_A, 'file.txt')
    assert tree.serialize() == f'100644 blob {HASH_A}\tfile.txt\n'.encode()


def test_tree_roundtrip():
    tree = Tree()
    tree.add_entry('100644', 'blob', HASH_A, 'file with spaces.txt')
    tree.add_entry('040000', 'tree', HASH_B, 'src')

    restored = Tree()
    restored.deserialize(tree.serialize())
    assert restored.entries == tree.entries
    assert restored == tree


def test_tree_entry_equality():
    assert TreeEntry('100644', 'blob', HASH_A, 'x') == TreeEntry('100644', 'blob', HASH_A, 'x')
    assert TreeEntry('100644', 'blob', HASH_A, 'x') != TreeEntry('100644', 'blob', HASH_B, 'x')


def test_signature_parse_and_format():
    sig = Signature.parse('Jane Doe <jane@example.com> 1700000000 +0100')
    assert sig.name == 'Jane Doe'
    assert sig.email == 'jane@example.com'
    assert sig.time == 1700000000
    assert sig.timezone == '+0100'
    assert str(sig) == 'Jane Doe <jane@example.com> 1700000000 +0100'
    assert sig.identity == 'Jane Doe <jane@example.com>'


def test_signature_parse_rejects_garbage():
    with pytest.raises(ValueError):
        Signature.parse('no email here')


def test_commit_serialize_format(sample_commit):
    text = sample_commit.serialize().decode()
    lines = text.split('\n')
    assert lines[0] == f'tree {sample_commit.tree}'
    assert lines[1] == 'author Test User <test@example.com> 1700000000 +0000'
    assert lines[2] == 'committer Test User <test@example.com> 1700000000 +0000'
    assert lines[3] == ''
    assert text.endswith('Test commit\n')


def test_commit_roundtrip_with_parents_and_extra_headers(sample_commit):
    sample_commit.parents = [HASH_A, HASH_B]
    sample_commit.extra_headers = [('encoding', 'utf-8')]
    sample_commit.message = 'Subject\n\nBody line\n'

    restored = Commit()
    restored.deserialize(sample_commit.serialize())
    assert restored.tree == sample_commit.tree
    assert restored.parents == [HASH_A, HASH_B]
    assert restored.parent == HASH_A
    assert restored.second_parent == HASH_B
    assert restored.is_merge
    assert restored.author == sample_commit.author
    assert restored.extra_headers == [('encoding', 'utf-8')]
    assert restored.message == 'Subject\n\nBody line\n'
    assert restored == sample_commit


def test_commit_root_has_no_parent(sample_commit):
    assert sample_commit.parent is None
    assert sample_commit.second_parent is None
    assert not sample_commit.is_merge


def test_commit_create_rejects_three_parents(sample_commit):
    with pytest.raises(ValueError):
        Commit.create(sample_commit.tree, [HASH_A, HASH_B, HASH_A], sample_commit.author, 'x')


def test_commit_deserialize_requires_tree():
    with pytest.raises(ValueError):
        Commit().deserialize(b'author A <a@b> 1 +0000\n\nmsg\n')


def test_commit_committer_defaults_to_author(sample_commit):
    assert sample_commit.committer == sample_commit.author
