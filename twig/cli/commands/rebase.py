"""Rebase command - replay the current branch on top of another."""

import click

from twig.core.errors import RebaseError, TwigError
from twig.cli.context import open_repository, resolve_identity
from twig.cli.output import success, error, info, short


@click.command('rebase')
@click.argument('branch')
@click.option('--committer', help='Committer of the new commits (format: "Name <email>")')
def rebase_cmd(branch, committer):
    """
    Reapply the current branch's commits on top of BRANCH.

    Each commit's files are laid over the new base, so a path touched on
    both sides keeps the replayed commit's version. BRANCH itself is not
    moved. The previous tip is saved as ORIG_HEAD.

    Examples:
        twig rebase main
    """
    repo = open_repository()
    identity = resolve_identity(repo, committer)

    try:
        result = repo.rebase.rebase(branch, identity)
    except RebaseError as e:
        click.echo(error(str(e)))
        if e.partial_tip:
            click.echo(info(f"Branch left at partially rebased commit {short(e.partial_tip)}"))
        raise click.Abort()
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if result.up_to_date:
        click.echo(info(f"Current branch {result.branch} is up to date."))
        return

    for old, new in result.replayed:
        click.echo(info(f"  {short(old)} -> {short(new)}"))
    click.echo(success(
        f"Successfully rebased {result.branch} onto {branch} "
        f"({len(result.replayed)} commit(s), now at {short(result.new_head)})"
    ))
