"""Checkout command - switch branches or detach HEAD at a commit."""

import click

from twig.core.errors import TwigError
from twig.cli.context import open_repository
from twig.cli.output import success, error, info, warning, short


@click.command('checkout')
@click.argument('target')
@click.option('-b', 'create', is_flag=True, help='Create the branch at HEAD before switching')
def checkout_cmd(target, create):
    """
    Switch to a branch or commit.

    The working tree and index are rewritten to the target's snapshot.
    Files that are not tracked are left alone. Checking out anything
    other than a branch name detaches HEAD.

    Examples:
        twig checkout main
        twig checkout -b feature
        twig checkout a1b2c3d
    """
    repo = open_repository()
    if repo.merge.is_merge_in_progress():
        click.echo(error("Cannot checkout during a merge"))
        click.echo(info("Commit the merge or run 'twig merge --abort'"))
        raise click.Abort()

    try:
        if create:
            repo.refs.create_branch(target)
        result = repo.refs.checkout(target)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if result.detached:
        click.echo(warning(f"HEAD is now detached at {short(result.commit)}"))
    elif create:
        click.echo(success(f"Switched to a new branch '{target}'"))
    else:
        click.echo(success(f"Switched to branch '{target}'"))
    click.echo(info(f"{result.files} file(s) in working tree"))
