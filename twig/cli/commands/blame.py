"""Blame command - show which commit last changed each line."""

import click
from colorama import Fore, Style

from twig.core.errors import TwigError
from twig.cli.context import open_repository
from twig.cli.output import error, short, format_timestamp


@click.command('blame')
@click.argument('path')
@click.option('-r', '--revision', help='Blame as of this revision instead of HEAD')
def blame_cmd(path, revision):
    """
    Show the commit each line of a file is attributed to.

    Lines are matched by position along the first-parent history, so a
    moved line is attributed to the commit that moved it.

    Examples:
        twig blame README.md
        twig blame -r feature src/app.py
    """
    repo = open_repository()
    try:
        lines = repo.blame.blame(path, revision)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    width = len(str(len(lines)))
    for line in lines:
        date = format_timestamp(line.time)
        click.echo(
            f"{Fore.YELLOW}{short(line.commit)}{Style.RESET_ALL} "
            f"({line.author} {date} {line.line_no:>{width}}) {line.text}"
        )
