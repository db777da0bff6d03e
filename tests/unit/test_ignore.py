"""Ignore rule tests."""

from twig.utils.ignore import IgnoreMatcher, IgnorePattern, get_ignore_matcher


def make_matcher(*lines):
    matcher = IgnoreMatcher()
    matcher.add_patterns(lines)
    return matcher


def test_exact_name():
    matcher = make_matcher('build')
    assert matcher.is_ignored('build')
    assert matcher.is_ignored('build', is_dir=True)


def test_segment_prefix():
    matcher = make_matcher('build')
    assert matcher.is_ignored('build/out.o')
    assert not matcher.is_ignored('builder.py')
    assert not matcher.is_ignored('src/build')


def test_directory_only_pattern():
    matcher = make_matcher('logs/')
    assert matcher.is_ignored('logs/today.txt')
    assert matcher.is_ignored('logs', is_dir=True)
    assert not matcher.is_ignored('logs')


def test_comments_and_blank_lines():
    matcher = make_matcher('', '   ', '# comment', 'tmp')
    assert len(matcher.patterns) == 1
    assert not matcher.is_ignored('# comment')


def test_nested_path_pattern():
    matcher = make_matcher('src/generated')
    assert matcher.is_ignored('src/generated/x.py')
    assert not matcher.is_ignored('src/gen.py')


def test_pattern_repr():
    assert repr(IgnorePattern('out', directory_only=True)) == 'IgnorePattern(out/)'


def test_metadata_dir_always_ignored(tmp_path):
    matcher = get_ignore_matcher(tmp_path)
    assert matcher.is_ignored('.twig', is_dir=True)
    assert matcher.is_ignored('.twig/HEAD')
    assert not matcher.is_ignored('.twigignore')


def test_loads_ignore_file(tmp_path):
    (tmp_path / '.twigignore').write_text('secrets.txt\n# note\nnode_modules/\n')
    matcher = get_ignore_matcher(tmp_path)
    assert matcher.is_ignored('secrets.txt')
    assert matcher.is_ignored('node_modules/pkg/index.js')
    assert not matcher.is_ignored('README.md')
