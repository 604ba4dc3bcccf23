"""
Destination pattern compiler.

A pattern describes where a repository is cloned, e.g. ``~/src/{host/}{path/}``.
Text outside braces is copied verbatim. ``{name}`` is a placeholder, optionally
written ``{/name}`` or ``{name/}`` to emit a slash before or after the value
only when the value is present. ``{{`` starts an escape that runs until ``}}``,
so ``{{owner}}`` produces the literal text ``{owner}``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from .errors import (
    BlankPatternError,
    EmptyPlaceholderError,
    UnclosedPlaceholderError,
    UnknownPlaceholderError,
)


class PlaceholderKind(str, Enum):
    """Supported placeholder names."""
    HOME = "home"
    HOST = "host"
    PATH = "path"
    OWNER = "owner"
    REPO = "repo"


@dataclass(frozen=True)
class LiteralText:
    """Text emitted verbatim."""
    text: str


@dataclass(frozen=True)
class Placeholder:
    """A value substituted at render time."""
    kind: PlaceholderKind
    leading_slash: bool = False
    trailing_slash: bool = False


PatternComponent = Union[LiteralText, Placeholder]


class _Mode(Enum):
    LITERAL = "literal"
    PLACEHOLDER = "placeholder"
    ESCAPE = "escape"


@dataclass(frozen=True)
class GrabPattern:
    """A compiled destination pattern."""
    components: Tuple[PatternComponent, ...]

    @classmethod
    def parse(cls, template: str) -> "GrabPattern":
        return compile_pattern(template)

    def __iter__(self):
        return iter(self.components)

    def __len__(self) -> int:
        return len(self.components)


def _placeholder_from_body(body: str) -> Placeholder:
    """Build a placeholder from the text between the braces."""
    if not body.strip("/"):
        raise EmptyPlaceholderError()

    leading_slash = body.startswith("/")
    trailing_slash = body.endswith("/")
    name = body[1 if leading_slash else 0:len(body) - 1 if trailing_slash else len(body)]

    if not name:
        raise EmptyPlaceholderError()

    try:
        kind = PlaceholderKind(name)
    except ValueError:
        raise UnknownPlaceholderError(name) from None

    return Placeholder(kind=kind, leading_slash=leading_slash, trailing_slash=trailing_slash)


def compile_pattern(template: str) -> GrabPattern:
    """
    Compile a destination pattern.

    Args:
        template: Pattern text, e.g. ``~/src/{host/}{owner/}{repo}``

    Returns:
        The compiled GrabPattern

    Raises:
        EmptyPlaceholderError: A placeholder has no name
        UnknownPlaceholderError: A placeholder name is not supported
        UnclosedPlaceholderError: The template ends inside a placeholder
        BlankPatternError: The template is empty or only whitespace
    """
    components = []
    current = []
    mode = _Mode.LITERAL
    chars = iter(template)
    pending = None

    while True:
        if pending is not None:
            c, pending = pending, None
        else:
            c = next(chars, None)
            if c is None:
                break

        if mode is _Mode.LITERAL:
            if c == "{":
                if current:
                    components.append(LiteralText("".join(current)))
                    current = []
                mode = _Mode.PLACEHOLDER
            else:
                current.append(c)

        elif mode is _Mode.PLACEHOLDER:
            if c == "{" and not current:
                # "{{" escape
                current.append("{")
                mode = _Mode.ESCAPE
            elif c == "}":
                components.append(_placeholder_from_body("".join(current)))
                current = []
                mode = _Mode.LITERAL
            else:
                current.append(c)

        else:
            current.append(c)
            if c == "}":
                following = next(chars, None)
                if following == "}":
                    mode = _Mode.LITERAL
                elif following is not None:
                    pending = following

    if mode is _Mode.PLACEHOLDER:
        raise UnclosedPlaceholderError("".join(current))

    if current:
        components.append(LiteralText("".join(current)))

    if all(isinstance(c, LiteralText) and not c.text.strip() for c in components):
        raise BlankPatternError()

    return GrabPattern(tuple(components))


DEFAULT_PATTERN_TEXT = "~/src/{host/}{path/}"

DEFAULT_PATTERN = GrabPattern(
    (
        LiteralText("~/src/"),
        Placeholder(PlaceholderKind.HOST, trailing_slash=True),
        Placeholder(PlaceholderKind.PATH, trailing_slash=True),
    )
)
