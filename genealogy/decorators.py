"""Decorators for genealogy CLI commands."""

import functools
import logging
from typing import Callable, Any
import typer
from rich.console import Console

from .exceptions import GenealogyError, StrategyFailure

logger = logging.getLogger(__name__)
console = Console(stderr=True)


def handle_genealogy_errors(func: Callable) -> Callable:
    """
    Decorator to turn pipeline errors into a message and an exit code.

    Handles:
    - StrategyFailure: a genealogist failed for a pair of posts
    - GenealogyError: invalid scores, weights or relation types
    - FileNotFoundError / NotADirectoryError: bad post folders or config file
    - ValueError: invalid posts or options
    - General exceptions: unexpected errors, logged with traceback
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except StrategyFailure as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            console.print(
                f"[yellow]Genealogist:[/yellow] {e.genealogist}  "
                f"[yellow]Posts:[/yellow] {e.post1} -> {e.post2}"
            )
            raise typer.Exit(code=1)
        except GenealogyError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(code=1)
        except (FileNotFoundError, NotADirectoryError) as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(code=1)
        except ValueError as e:
            console.print(f"[bold red]Error:[/bold red] Invalid input: {e}")
            raise typer.Exit(code=1)
        except KeyboardInterrupt:
            console.print("\n[yellow]Operation cancelled by user[/yellow]")
            raise typer.Exit(code=130)
        except typer.Exit:
            raise
        except Exception as e:
            logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
            console.print(f"[bold red]Unexpected error:[/bold red] {e}")
            raise typer.Exit(code=1)

    return wrapper
