"""Status command - show the working tree status."""

import click
from colorama import Fore, Style

from twig.core.refs import DETACHED
from twig.cli.context import open_repository
from twig.cli.output import info, short


@click.command('status')
def status_cmd():
    """
    Show the working tree status.

    Displays paths that differ between HEAD and the index (staged),
    between the index and the working tree (unstaged), and files that
    are neither tracked nor ignored (untracked).
    """
    repo = open_repository()
    status = repo.worktree.status()

    if status.branch == DETACHED:
        click.echo(f"{Fore.YELLOW}HEAD detached at {short(status.head)}{Style.RESET_ALL}")
    else:
        click.echo(f"On branch {Fore.CYAN}{status.branch}{Style.RESET_ALL}")
    if not status.head:
        click.echo("\nNo commits yet")

    if status.merge_in_progress:
        click.echo()
        click.echo(f"{Fore.YELLOW}You have unmerged paths.{Style.RESET_ALL}")
        click.echo(info("  (fix conflicts, 'twig add' them, then run 'twig commit')"))
        click.echo(info("  (use \"twig merge --abort\" to abort the merge)"))

    if status.has_staged:
        click.echo()
        click.echo(Fore.GREEN + "Changes to be committed:" + Style.RESET_ALL)
        for path in status.staged_added:
            click.echo(f"  {Fore.GREEN}new file:   {path}{Style.RESET_ALL}")
        for path in status.staged_modified:
            click.echo(f"  {Fore.GREEN}modified:   {path}{Style.RESET_ALL}")
        for path in status.staged_deleted:
            click.echo(f"  {Fore.GREEN}deleted:    {path}{Style.RESET_ALL}")

    if status.unstaged_modified or status.unstaged_deleted:
        click.echo()
        click.echo(Fore.YELLOW + "Changes not staged for commit:" + Style.RESET_ALL)
        click.echo(info("  (use \"twig add <file>...\" to update what will be committed)"))
        for path in status.unstaged_modified:
            click.echo(f"  {Fore.RED}modified:   {path}{Style.RESET_ALL}")
        for path in status.unstaged_deleted:
            click.echo(f"  {Fore.RED}deleted:    {path}{Style.RESET_ALL}")

    if status.untracked:
        click.echo()
        click.echo(Fore.RED + "Untracked files:" + Style.RESET_ALL)
        click.echo(info("  (use \"twig add <file>...\" to include in what will be committed)"))
        for path in status.untracked:
            click.echo(f"  {Fore.RED}{path}{Style.RESET_ALL}")

    if status.is_clean:
        click.echo()
        click.echo("nothing to commit, working tree clean")
