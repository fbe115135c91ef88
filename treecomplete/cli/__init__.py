"""treecomplete CLI implementation."""

import cyclopts

from treecomplete.cli._common import error_console

# Create the main CLI app
app = cyclopts.App(
    name="treecomplete",
    help="Generate shell completion scripts from command tree definition files.",
    error_console=error_console,
)


# Explicitly import command modules
from treecomplete.cli import (
    generate,  # noqa: F401
    install,  # noqa: F401
)

__all__ = ["app"]
