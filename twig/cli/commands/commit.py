"""Commit command - create a commit from staged changes."""

import click

from twig.core.errors import TwigError
from twig.cli.context import open_repository, resolve_identity
from twig.cli.output import success, error, info, short


@click.command('commit')
@click.option('-m', '--message', help='Commit message')
@click.option('--author', help='Author name and email (format: "Name <email>")')
def commit_cmd(message, author):
    """
    Record changes to the repository.

    Creates a commit from the staged changes in the index.

    During a conflicted merge, this command completes the merge by
    creating a commit with two parents.

    Examples:
        twig commit -m "Initial commit"
        twig commit -m "Add feature" --author "Jane <jane@example.com>"
    """
    repo = open_repository()
    merging = repo.merge.is_merge_in_progress()

    if not message:
        if not merging:
            click.echo(error("Commit message required. Use -m \"message\""))
            raise click.Abort()
        message = repo.merge.merge_message() or "Merge commit"
        click.echo(info(f"Using merge message: {message}"))

    identity = resolve_identity(repo, author)
    try:
        commit_hash = repo.graph.commit(message, identity)
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    commit = repo.store.read_commit(commit_hash)
    branch = repo.refs.current_branch()
    if merging:
        click.echo(success(f"Merge completed! Created merge commit {short(commit_hash)}"))
    else:
        click.echo(success(f"[{branch} {short(commit_hash)}] {message.splitlines()[0] if message else ''}"))
    click.echo(info(f"Author: {commit.author.identity}"))
    if commit.is_merge:
        click.echo(info(f"Parents: {', '.join(short(p) for p in commit.parents)}"))
    elif commit.parent:
        click.echo(info(f"Parent: {short(commit.parent)}"))
    else:
        click.echo(info("(root commit)"))
