"""
git-grab errors.
"""


class GrabError(Exception):
    """Base exception for all git-grab errors."""
    pass


class ConfigurationError(GrabError):
    """Errors in configuration."""
    pass


class PatternError(GrabError):
    """A destination pattern could not be compiled."""
    pass


class EmptyPlaceholderError(PatternError):
    """A placeholder has no name, e.g. ``{}`` or ``{/}``."""

    def __init__(self):
        super().__init__("empty placeholder")


class UnknownPlaceholderError(PatternError):
    """A placeholder name is not one of the supported names."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown placeholder: {name}")


class UnclosedPlaceholderError(PatternError):
    """The pattern ended inside a placeholder."""

    def __init__(self, partial: str):
        self.partial = partial
        super().__init__(f"unclosed placeholder: {{{partial}")


class BlankPatternError(PatternError):
    """The pattern is empty or only whitespace."""

    def __init__(self):
        super().__init__("pattern is blank")


class UrlError(GrabError):
    """A URL could not be understood."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"'{url}': {reason}")


class CloneError(GrabError):
    """The clone command failed."""
    pass


class ClipboardError(GrabError):
    """Reading from or writing to the clipboard failed."""
    pass
