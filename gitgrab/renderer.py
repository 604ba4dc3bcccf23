"""Render a compiled pattern into a destination path."""

from pathlib import Path

from .pattern import GrabPattern, LiteralText, Placeholder, PlaceholderKind
from .url import UrlComponents


def resolve_placeholder(
    placeholder: Placeholder, home: str | None, components: UrlComponents
) -> str | None:
    """Look up the value for a placeholder, None if it is absent."""
    if placeholder.kind is PlaceholderKind.HOME:
        return home
    if placeholder.kind is PlaceholderKind.HOST:
        return components.host
    if placeholder.kind is PlaceholderKind.PATH:
        return components.path
    if placeholder.kind is PlaceholderKind.OWNER:
        return components.owner
    return components.repo


def render_path(
    pattern: GrabPattern, home: str | Path | None, components: UrlComponents
) -> Path:
    """
    Substitute URL components into a pattern.

    A ``~`` at the very start of the pattern is replaced with ``home`` when one
    is given. Placeholders whose value is absent are dropped together with
    their slash markers. A trailing ``.git`` extension on the result is
    removed.

    Args:
        pattern: Compiled destination pattern
        home: Directory substituted for ``~`` and ``{home}``
        components: Values extracted from the URL

    Returns:
        Destination path
    """
    home_string = str(home) if home is not None else None
    parts = []

    for index, component in enumerate(pattern):
        if isinstance(component, LiteralText):
            text = component.text
            if index == 0 and home_string is not None and text.startswith("~"):
                text = home_string + text[1:]
            parts.append(text)
            continue

        value = resolve_placeholder(component, home_string, components)
        if value is None:
            continue
        if component.leading_slash:
            parts.append("/")
        parts.append(value)
        if component.trailing_slash:
            parts.append("/")

    path = Path("".join(parts))
    if path.suffix == ".git":
        path = path.with_suffix("")
    return path
