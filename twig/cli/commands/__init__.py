"""CLI commands for Twig."""

from twig.cli.commands.init import init_cmd
from twig.cli.commands.add import add_cmd
from twig.cli.commands.commit import commit_cmd
from twig.cli.commands.config import config_cmd
from twig.cli.commands.status import status_cmd
from twig.cli.commands.log import log_cmd
from twig.cli.commands.branch import branch_cmd
from twig.cli.commands.checkout import checkout_cmd
from twig.cli.commands.diff import diff_cmd
from twig.cli.commands.blame import blame_cmd
from twig.cli.commands.merge import merge_cmd
from twig.cli.commands.rebase import rebase_cmd
from twig.cli.commands.whoami import whoami_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'config_cmd', 'status_cmd', 'log_cmd',
           'branch_cmd', 'checkout_cmd', 'diff_cmd', 'blame_cmd', 'merge_cmd',
           'rebase_cmd', 'whoami_cmd']
