"""Initialize a new Twig repository."""

from pathlib import Path

import click

from twig.core.errors import TwigError
from twig.core.repository import Repository, TWIG_DIR_NAME
from twig.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
def init_cmd(path):
    """
    Initialize a new Twig repository.

    Creates a .twig directory with the necessary structure for version control.

    Examples:
        twig init                    # Initialize in current directory
        twig init my-project         # Initialize in my-project directory
    """
    repo_path = Path(path).resolve()
    if (repo_path / TWIG_DIR_NAME).exists():
        click.echo(error(f"Repository already exists at {repo_path}"))
        click.echo(info("Use an empty directory or different path"))
        raise click.Abort()

    try:
        repo = Repository(str(repo_path)).init()
    except PermissionError:
        click.echo(error(f"Permission denied: Cannot create repository at {path}"))
        raise click.Abort()
    except TwigError as e:
        click.echo(error(f"Failed to initialize repository: {e}"))
        raise click.Abort()

    click.echo(success(f"Initialized empty Twig repository in {repo.twig_dir}"))
    click.echo(info("You can now start tracking files with:"))
    click.echo(info("  twig add <file>"))
    click.echo(info("  twig commit -m 'message'"))
