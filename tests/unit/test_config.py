"""Configuration and identity tests."""

import pytest

from twig.core.config import Config, Identity, get_config, require_identity
from twig.core.errors import MissingIdentityError


def test_repo_config_identity(repo_with_config):
    assert repo_with_config.config.get_user_identity() == Identity('Test User', 'test@example.com')


def test_no_identity(repo):
    assert repo.config.get_user_identity() is None


def test_env_overrides_config(repo_with_config, monkeypatch):
    monkeypatch.setenv('TWIG_AUTHOR_NAME', 'Env Name')
    monkeypatch.setenv('TWIG_AUTHOR_EMAIL', 'env@example.com')
    assert repo_with_config.config.get_user_identity() == Identity('Env Name', 'env@example.com')


def test_env_section_key_override(repo_with_config, monkeypatch):
    monkeypatch.setenv('TWIG_USER_NAME', 'From Env')
    assert repo_with_config.config.get('user', 'name') == 'From Env'


def test_repo_overrides_global(repo_with_config, isolated_config):
    Config().set('user', 'name', 'Global Name', global_config=True)
    assert isolated_config.exists()
    assert get_config(repo_with_config).get('user', 'name') == 'Test User'
    assert get_config().get('user', 'name') == 'Global Name'


def test_global_identity_used_when_repo_silent(repo):
    config = Config()
    config.set('user', 'name', 'Global', global_config=True)
    config.set('user', 'email', 'global@example.com', global_config=True)
    assert get_config(repo).get_user_identity() == Identity('Global', 'global@example.com')


def test_set_and_unset_repo_value(repo):
    repo.config.set('core', 'editor', 'vim')
    assert Config(repo.config_file).get('core', 'editor') == 'vim'
    assert repo.config.unset('core', 'editor') is True
    assert repo.config.unset('core', 'editor') is False


def test_list_all_merges_scopes(repo_with_config):
    Config().set('alias', 'co', 'checkout', global_config=True)
    values = get_config(repo_with_config).list_all()
    assert values['alias']['co'] == 'checkout'
    assert values['user']['email'] == 'test@example.com'


def test_identity_parse():
    assert Identity.parse('Jane Doe <jane@example.com>') == Identity('Jane Doe', 'jane@example.com')
    assert str(Identity('A', 'a@b')) == 'A <a@b>'


@pytest.mark.parametrize('value', ['Jane', '<jane@example.com>', 'Jane <jane@example.com'])
def test_identity_parse_rejects(value):
    with pytest.raises(ValueError):
        Identity.parse(value)


def test_identity_signature():
    sig = Identity('A', 'a@b').signature(42)
    assert (sig.name, sig.email, sig.time, sig.timezone) == ('A', 'a@b', 42, '+0000')


def test_require_identity():
    with pytest.raises(MissingIdentityError):
        require_identity(None)
    with pytest.raises(MissingIdentityError):
        require_identity(Identity('', 'a@b'))
