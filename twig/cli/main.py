"""Main CLI entry point for Twig."""

import logging

import click
from colorama import init

from twig import __version__
from twig.cli.output import BANNER
from twig.cli.commands import (init_cmd, add_cmd, commit_cmd, config_cmd, status_cmd,
                               log_cmd, branch_cmd, checkout_cmd, diff_cmd, blame_cmd,
                               merge_cmd, rebase_cmd, whoami_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class TwigGroup(click.Group):
    """Custom Group class to display banner before help."""

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=TwigGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log debug information to stderr')
def cli(verbose):
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(levelname)s %(name)s: %(message)s',
        )


# Register commands
cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(config_cmd)
cli.add_command(status_cmd)
cli.add_command(log_cmd)
cli.add_command(branch_cmd)
cli.add_command(checkout_cmd)
cli.add_command(diff_cmd)
cli.add_command(blame_cmd)
cli.add_command(merge_cmd)
cli.add_command(rebase_cmd)
cli.add_command(whoami_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
