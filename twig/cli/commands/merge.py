"""Merge command - join another branch into the current one."""

import sys

import click

from twig.core.errors import TwigError
from twig.cli.context import open_repository, resolve_identity
from twig.cli.output import success, error, info, warning, short


@click.command('merge')
@click.argument('branch', required=False)
@click.option('--abort', is_flag=True, help='Abort the current merge operation')
@click.option('--author', help='Author of the merge commit (format: "Name <email>")')
def merge_cmd(branch, abort, author):
    """
    Merge a branch into the current branch.

    A clean merge always records a commit with two parents. When both
    sides changed a file differently, conflict markers are written to the
    working tree and staged; fix the files, 'twig add' them and run
    'twig commit' to conclude the merge.

    Examples:
        twig merge feature
        twig merge --abort
    """
    repo = open_repository()

    if abort:
        if repo.merge.abort():
            click.echo(success("Merge aborted"))
            click.echo(info("Working tree has been reset to HEAD"))
            return
        click.echo(error("No merge in progress"))
        raise click.Abort()

    if not branch:
        click.echo(error("Missing branch name"))
        click.echo(info("Usage: twig merge <branch>"))
        click.echo(info("       twig merge --abort"))
        raise click.Abort()

    identity = resolve_identity(repo, author)
    click.echo(info(f"Merging branch '{branch}' into '{repo.refs.current_branch()}'..."))
    try:
        result = repo.merge.merge(branch, identity)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if result.up_to_date:
        click.echo(info(result.message))
        return

    if result.success:
        click.echo(success(f"{result.message} ({short(result.commit)})"))
        return

    click.echo(warning(f"Automatic merge failed: {result.message}"))
    for conflict in result.conflicts:
        click.echo(error(f"  CONFLICT (content): {conflict.path}"))
    click.echo(info("Fix conflicts, 'twig add' the files, then run 'twig commit'"))
    click.echo(info("Or run 'twig merge --abort' to give up"))
    sys.exit(1)
