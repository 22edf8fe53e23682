from functools import wraps
import sys

from rich.console import Console
from rich.markup import escape

from pgtables.common.errors import PgTablesError
from pgtables.common.logger import get_logger

logger = get_logger("cli")

err_console = Console(stderr=True, highlight=False)


def handle_cli_errors(func):
    """
    Decorator to wrap CLI commands with unified error handling.

    - PgTablesError: Prints a clean error message and exits 1.
    - KeyboardInterrupt: Exits with 130 without printing a partial summary.
    - Unexpected Exception: Prints the error and exits 1.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except PgTablesError as e:
            err_console.print(f"[bold red]Failed to list tables:[/bold red] {escape(str(e))}")
            sys.exit(1)
        except KeyboardInterrupt:
            err_console.print("\n[yellow]Operation cancelled by user.[/yellow]")
            sys.exit(130)  # Standard SIGINT exit code
        except Exception as e:
            logger.debug("Unexpected failure", exc_info=True)
            err_console.print(f"[bold red]Failed to list tables:[/bold red] {escape(str(e))}")
            sys.exit(1)

    return wrapper
