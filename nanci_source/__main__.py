"""
Entry point for the nanci-source command line.
"""

import logging
import sys

from rich.console import Console

from nanci_source.cli.app import app
from nanci_source.cli.formatters import format_error_with_suggestions
from nanci_source.exceptions import NanciSourceError

log = logging.getLogger("nanci_source")


def main() -> None:
    """
    Runs the CLI. Typer handles exit codes and Ctrl+C itself; plugin errors
    (such as a broken config file) and anything unforeseen become an error
    panel on stderr and exit code 1.
    """
    try:
        app()
    except NanciSourceError as e:
        Console(stderr=True).print(format_error_with_suggestions(e))
        sys.exit(1)
    except Exception as e:
        Console(stderr=True).print(
            format_error_with_suggestions(e, {"type": "Unexpected"})
        )
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
