"""CLI output utilities and formatting."""

from datetime import datetime, timezone

from colorama import Fore, Style

# ASCII art banner for the Twig CLI
BANNER = f"""
{Fore.YELLOW}╔════════════════════════════════════════════════╗{Style.RESET_ALL}
{Fore.YELLOW}║{Style.RESET_ALL}                                                {Fore.YELLOW}║{Style.RESET_ALL}
{Fore.YELLOW}║{Style.RESET_ALL}   {Fore.GREEN}{Style.BRIGHT}████████╗██╗    ██╗██╗ ██████╗ {Style.RESET_ALL}             {Fore.YELLOW}║{Style.RESET_ALL}
{Fore.YELLOW}║{Style.RESET_ALL}   {Fore.GREEN}{Style.BRIGHT}╚══██╔══╝██║    ██║██║██╔════╝ {Style.RESET_ALL}             {Fore.YELLOW}║{Style.RESET_ALL}
{Fore.YELLOW}║{Style.RESET_ALL}   {Fore.GREEN}{Style.BRIGHT}   ██║   ██║ █╗ ██║██║██║  ███╗{Style.RESET_ALL}             {Fore.YELLOW}║{Style.RESET_ALL}
{Fore.YELLOW}║{Style.RESET_ALL}   {Fore.GREEN}{Style.BRIGHT}   ██║   ██║███╗██║██║██║   ██║{Style.RESET_ALL}             {Fore.YELLOW}║{Style.RESET_ALL}
{Fore.YELLOW}║{Style.RESET_ALL}   {Fore.GREEN}{Style.BRIGHT}   ██║   ╚███╔███╔╝██║╚██████╔╝{Style.RESET_ALL}             {Fore.YELLOW}║{Style.RESET_ALL}
{Fore.YELLOW}║{Style.RESET_ALL}   {Fore.GREEN}{Style.BRIGHT}   ╚═╝    ╚══╝╚══╝ ╚═╝ ╚═════╝ {Style.RESET_ALL}             {Fore.YELLOW}║{Style.RESET_ALL}
{Fore.YELLOW}║{Style.RESET_ALL}                                                {Fore.YELLOW}║{Style.RESET_ALL}
{Fore.YELLOW}║{Style.RESET_ALL}   {Fore.WHITE}{Style.BRIGHT}A small content-addressed version control{Style.RESET_ALL}    {Fore.YELLOW}║{Style.RESET_ALL}
{Fore.YELLOW}║{Style.RESET_ALL}                                                {Fore.YELLOW}║{Style.RESET_ALL}
{Fore.YELLOW}╚════════════════════════════════════════════════╝{Style.RESET_ALL}
"""


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def warning(message: str) -> str:
    """Format warning message in yellow."""
    return f"{Fore.YELLOW}⚠ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"


def short(obj_hash: str) -> str:
    return obj_hash[:7]


def format_timestamp(timestamp: int) -> str:
    """Format a Unix timestamp as a UTC date."""
    dt = datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
    return dt.strftime("%a %b %d %H:%M:%S %Y +0000")
