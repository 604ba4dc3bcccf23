"""
git-grab CLI - Clone git repositories into a standard location.
"""

import logging
import sys
from pathlib import Path
from typing import List, Sequence, Tuple

import typer
from rich.console import Console
from rich.markup import escape

from .clipboard import Clipboard, clipboard_url, provide
from .core import GrabCore
from .errors import ClipboardError, ConfigurationError, PatternError
from .pattern import compile_pattern
from .settings import get_settings

HELP = """Clone a git repository into a standard location organised by domain and path.

E.g. https://github.com/wezm/git-grab.git would be cloned to ~/src/github.com/wezm/git-grab

Arguments after `--` are passed to the git clone invocation, e.g. --recurse-submodules.
"""

# Setup
app = typer.Typer(
    name="git-grab",
    help=HELP,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()
err_console = Console(stderr=True)


def configure_logging():
    """Configure logging based on settings."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Configure logging on module import
configure_logging()


def version_string() -> str:
    from . import __version__

    return f"git-grab version {__version__}"


def split_git_args(argv: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Split arguments at the first ``--``; everything after it is for git."""
    argv = list(argv)
    if "--" in argv:
        index = argv.index("--")
        return argv[:index], argv[index + 1:]
    return argv, []


def _say(message: str) -> None:
    console.print(message, markup=False, emoji=False, highlight=False, soft_wrap=True)


def _error(message: str) -> None:
    err_console.print(
        f"[bold red]Error:[/bold red] {escape(message)}", emoji=False, soft_wrap=True
    )


def _version_callback(value: bool):
    if value:
        _say(version_string())
        raise typer.Exit()


def _paste_url(provider: Clipboard) -> str:
    """Read the URL to grab from the clipboard.

    Raises:
        typer.Exit: If the clipboard is empty or unreadable
    """
    try:
        url = clipboard_url(provider)
    except ClipboardError as e:
        _error(f"failed to paste from clipboard: {e}")
        raise typer.Exit(code=1)
    if url is None:
        _error("no URL on clipboard")
        raise typer.Exit(code=1)
    return url


@app.command()
def grab(
    ctx: typer.Context,
    urls: List[str] = typer.Argument(
        None,
        help="One or more git URLs to clone. Any URL accepted by git is valid, "
        "as are URLs without a scheme such as github.com/wezm/git-grab",
        show_default=False,
    ),
    dry_run: bool = typer.Option(
        False, "-n", "--dry-run", help="Don't clone, print what would be done"
    ),
    home: Path = typer.Option(
        None,
        "--home",
        help="Directory substituted for ~ and {home} in the pattern (overrides GRAB_HOME)",
    ),
    pattern: str = typer.Option(
        None,
        "--pattern",
        help="Destination pattern, e.g. '~/src/{host/}{owner/}{repo}' (overrides GRAB_PATTERN)",
    ),
    clipboard: bool = typer.Option(
        False, "-c", "--clipboard", help="Paste a URL to clone from the clipboard"
    ),
    copy_path: bool = typer.Option(
        False,
        "-p",
        "--copy-path",
        help="Copy the destination path to the clipboard after cloning (or set GRAB_COPY_PATH)",
    ),
    version: bool = typer.Option(
        None,
        "-V",
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version information",
    ),
):
    """Clone git repositories into a directory layout derived from their URLs."""
    settings = get_settings()
    git_args = (ctx.obj or {}).get("git_args", [])
    copy_path = copy_path or settings.copy_path

    try:
        compiled = compile_pattern(pattern if pattern is not None else settings.pattern)
    except PatternError as e:
        _error(f"invalid pattern: {e}")
        raise typer.Exit(code=1)

    if (clipboard or copy_path) and not settings.clipboard_support:
        _error("this git-grab was not built with clipboard support.")
        raise typer.Exit(code=1)

    try:
        grab_home = home if home is not None else settings.resolve_home()
    except ConfigurationError as e:
        _error(str(e))
        raise typer.Exit(code=1)

    provider = None
    all_urls = list(urls or [])
    if clipboard:
        try:
            provider = provide()
        except ClipboardError as e:
            _error(f"failed to paste from clipboard: {e}")
            raise typer.Exit(code=1)
        all_urls.append(_paste_url(provider))

    if not all_urls:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=2)

    core = GrabCore(
        pattern=compiled,
        home=grab_home,
        git_command=settings.git_command,
        git_args=git_args,
        dry_run=dry_run,
    )

    success = True
    last_dest = None
    for _raw_url, result, error in core.grab_all(all_urls):
        if error is not None:
            _error(str(error))
            success = False
        elif result.cloned:
            _say(f"Grabbed {result.url} to {result.dest}")
            last_dest = result.dest
        else:
            _say(f"Grab {result.url} to {result.dest}")

    if copy_path and last_dest is not None:
        try:
            (provider or provide()).copy(str(last_dest))
        except ClipboardError as e:
            _error(f"failed to copy path to clipboard: {e}")
            success = False

    if not success:
        raise typer.Exit(code=1)


def main(argv: Sequence[str] | None = None):
    """Console script entry point."""
    args, git_args = split_git_args(sys.argv[1:] if argv is None else argv)
    app(args=args, prog_name="git-grab", obj={"git_args": git_args})


if __name__ == "__main__":
    main()
