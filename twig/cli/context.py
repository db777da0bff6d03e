"""Helpers shared by CLI commands."""

from typing import Optional

import click

from twig.core.config import Identity
from twig.core.errors import TwigError
from twig.core.repository import Repository
from twig.cli.output import error


def open_repository() -> Repository:
    """Find the repository containing the current directory or abort."""
    try:
        return Repository.open()
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()


def resolve_identity(repo: Repository, override: Optional[str] = None) -> Optional[Identity]:
    """
    Identity for a new commit: an explicit ``Name <email>`` wins over
    environment and config.
    """
    if override:
        try:
            return Identity.parse(override)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="'--author'")
    return repo.config.get_user_identity()
