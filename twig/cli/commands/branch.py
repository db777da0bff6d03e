"""Branch command - manage branches."""

import click
from colorama import Fore, Style

from twig.core.errors import TwigError
from twig.cli.context import open_repository
from twig.cli.output import success, error, warning, short


@click.command('branch')
@click.option('-d', '--delete', 'delete_name', metavar='BRANCH', help='Delete a branch')
@click.option('-v', '--verbose', is_flag=True, help='Show commit hash and message')
@click.argument('branch_name', required=False)
@click.argument('start_point', required=False)
def branch_cmd(delete_name, verbose, branch_name, start_point):
    """
    List, create, or delete branches.

    With no arguments, lists all branches. Current branch is highlighted with *.
    With one argument, creates a new branch at HEAD.
    With two arguments, creates a new branch at the specified commit.

    Examples:
        twig branch                    # List branches
        twig branch feature            # Create 'feature' branch at HEAD
        twig branch hotfix abc123      # Create 'hotfix' branch at commit abc123
        twig branch -d feature         # Delete 'feature' branch
    """
    repo = open_repository()

    try:
        if delete_name:
            repo.refs.delete_branch(delete_name)
            click.echo(success(f"Deleted branch {delete_name}"))
            return

        if branch_name:
            commit_hash = repo.refs.create_branch(branch_name, start_point)
            click.echo(success(f"Created branch '{branch_name}' at {short(commit_hash)}"))
            return
    except TwigError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    branches = repo.refs.list_branches()
    if not branches:
        click.echo(warning("No branches yet"))
        return

    for branch in branches:
        if branch.current:
            prefix = f"{Fore.GREEN}* {Style.RESET_ALL}"
            name_color = Fore.GREEN
        else:
            prefix = "  "
            name_color = ""

        if verbose:
            summary = repo.store.read_commit(branch.commit).message.split('\n')[0]
            if len(summary) > 50:
                summary = summary[:47] + "..."
            click.echo(f"{prefix}{name_color}{branch.name:<20}{Style.RESET_ALL} {short(branch.commit)} {summary}")
        else:
            click.echo(f"{prefix}{name_color}{branch.name}{Style.RESET_ALL}")
