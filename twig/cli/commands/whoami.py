"""Whoami command - show the identity used for new commits."""

import click

from twig.core.config import get_config
from twig.core.repository import Repository
from twig.cli.output import info, warning


@click.command('whoami')
def whoami_cmd():
    """
    Show the identity recorded on new commits.

    Resolved from TWIG_AUTHOR_NAME / TWIG_AUTHOR_EMAIL, then the
    repository config, then the global config.
    """
    identity = get_config(Repository.find_repository()).get_user_identity()
    if identity is None:
        click.echo(warning("No identity configured"))
        click.echo(info("Use 'twig config set --global user.name \"Your Name\"'"))
        click.echo(info("and 'twig config set --global user.email you@example.com'"))
        raise click.Abort()
    click.echo(str(identity))
