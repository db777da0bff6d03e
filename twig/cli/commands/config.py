"""Config command - manage repository and global configuration."""

import click

from twig.core.config import get_config
from twig.core.repository import Repository
from twig.cli.output import success, error, info


def split_key(key):
    section, option = key.split('.', 1) if '.' in key else ('core', key)
    return section, option


def _config(is_global):
    repo = None if is_global else Repository.find_repository()
    if not is_global and repo is None:
        click.echo(error("Not a twig repository (use --global for global config)"))
        raise click.Abort()
    return get_config(repo)


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'is_global', is_flag=True, help='Set global config')
def config_set(key, value, is_global):
    """
    Set a config value.

    Examples:
        twig config set user.name "Your Name"
        twig config set user.email "your@email.com"
        twig config set --global user.name "Your Name"
    """
    section, option = split_key(key)
    _config(is_global).set(section, option, value, global_config=is_global)
    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {key} = {value}"))


@config_cmd.command('get')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Get global config only')
def config_get(key, is_global):
    """
    Get a config value.

    Examples:
        twig config get user.name
    """
    repo = None if is_global else Repository.find_repository()
    section, option = split_key(key)
    value = get_config(repo).get(section, option)
    if value is None:
        click.echo(error(f"Config key not found: {key}"))
        raise click.Abort()
    click.echo(value)


@config_cmd.command('unset')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Unset in global config')
def config_unset(key, is_global):
    """Remove a config value."""
    section, option = split_key(key)
    if not _config(is_global).unset(section, option, global_config=is_global):
        click.echo(error(f"Config key not found: {key}"))
        raise click.Abort()
    click.echo(success(f"Removed {key}"))


@config_cmd.command('list')
@click.option('--global', 'is_global', is_flag=True, help='List global config only')
def config_list(is_global):
    """
    List all config values (repository values override global ones).

    Examples:
        twig config list
        twig config list --global
    """
    repo = None if is_global else Repository.find_repository()
    values = get_config(repo).list_all()
    if not values:
        click.echo(info("No configuration set"))
        return
    for section in sorted(values):
        for key, value in sorted(values[section].items()):
            click.echo(f"{section}.{key}={value}")
