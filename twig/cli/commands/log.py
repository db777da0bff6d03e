"""Log command - show commit history."""

import click
from colorama import Fore, Style

from twig.core.errors import TwigError
from twig.cli.context import open_repository
from twig.cli.output import error, info, short, format_timestamp


@click.command('log')
@click.option('-n', '--max-count', type=int, help='Limit number of commits to show')
@click.option('--oneline', is_flag=True, help='Show each commit on a single line')
@click.argument('revision', required=False)
def log_cmd(max_count, oneline, revision):
    """
    Show commit history.

    Follows first parents from HEAD (or REVISION), newest first.

    Examples:
        twig log
        twig log -n 5
        twig log --oneline feature
    """
    repo = open_repository()
    try:
        start = repo.refs.resolve(revision) if revision else repo.refs.resolve_head()
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if not start:
        click.echo(info(f"Your current branch '{repo.refs.current_branch()}' does not have any commits yet"))
        return

    head = repo.refs.resolve_head()
    current = repo.refs.head_target()
    for count, (commit_hash, commit) in enumerate(repo.graph.walk(start)):
        if max_count is not None and count >= max_count:
            break

        labels = []
        if commit_hash == head:
            labels.append(f"HEAD -> {current}" if current else "HEAD")
        labels.extend(b for b in repo.refs.branches_at(commit_hash) if b != current or commit_hash != head)
        decoration = f" ({', '.join(labels)})" if labels else ""
        summary = commit.message.split('\n')[0]

        if oneline:
            click.echo(f"{Fore.YELLOW}{short(commit_hash)}{Style.RESET_ALL}{decoration} {summary}")
            continue

        click.echo(f"{Fore.YELLOW}commit {commit_hash}{Style.RESET_ALL}{decoration}")
        if commit.is_merge:
            click.echo(f"Merge: {' '.join(short(p) for p in commit.parents)}")
        if commit.author:
            click.echo(f"Author: {commit.author.identity}")
            click.echo(f"Date:   {format_timestamp(commit.author.time)}")
        click.echo()
        for line in commit.message.split('\n'):
            click.echo(f"    {line}")
        click.echo()
