"""Diff command - show changes between commits, index and working tree."""

import click

from twig.core.errors import TwigError
from twig.cli.context import open_repository
from twig.cli.output import error, info


@click.command('diff')
@click.argument('revisions', nargs=-1)
@click.option('--cached', '--staged', 'cached', is_flag=True, help='Show staged changes (index vs HEAD)')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.option('--stat', is_flag=True, help='Show only per-file insertion/deletion counts')
def diff_cmd(revisions, cached, no_color, stat):
    """
    Show changes between commits, the index and the working tree.

    \b
    twig diff                  Working tree vs index (unstaged changes)
    twig diff --cached         Index vs HEAD (staged changes)
    twig diff <rev>            <rev> vs HEAD
    twig diff <rev1> <rev2>    <rev1> vs <rev2>
    """
    repo = open_repository()
    if len(revisions) > 2:
        raise click.UsageError("diff takes at most two revisions")
    if revisions and cached:
        raise click.UsageError("--cached cannot be combined with revisions")

    try:
        if len(revisions) == 2:
            diffs = repo.diff.diff_commits(revisions[0], revisions[1])
        elif len(revisions) == 1:
            diffs = repo.diff.diff_commits(revisions[0], 'HEAD')
        elif cached:
            diffs = repo.diff.diff_index_to_head()
        else:
            diffs = repo.diff.diff_worktree_to_index()
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if not diffs:
        click.echo(info("No differences"))
        return

    if stat:
        for d in diffs:
            changes = "binary" if d.is_binary else f"+{d.insertions} -{d.deletions}"
            click.echo(f" {d.path} | {changes}")
        click.echo(f" {len(diffs)} file(s) changed")
        return

    click.echo(repo.diff.format_diff(diffs, color=not no_color))
