"""
elsewhere

Run a shell command in a new terminal surface: a tmux or zellij pane, or a
Terminal.app, iTerm2, kitty, Ghostty or Warp tab or window. Planning is pure
and can be inspected with --dry-run before anything is executed.
"""

__version__ = "0.1.0"


def main():
    """Entry point for the elsewhere command."""
    from .cli import main as cli_main
    cli_main()


def mcp_main():
    """Entry point for the elsewhere-mcp command."""
    from .server import run_server
    run_server()
