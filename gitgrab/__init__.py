"""
git-grab - Clone git repositories into a standard location.

git-grab works out where a repository should live from its URL, using a
destination pattern such as ``~/src/{host/}{path/}``, then runs ``git clone``
into that directory. URLs without a scheme (``github.com/wezm/git-grab``) and
SSH shorthand (``git@github.com:wezm/git-grab.git``) are accepted.
"""

from .core import GrabCore, GrabResult
from .pattern import DEFAULT_PATTERN, GrabPattern, compile_pattern
from .renderer import render_path
from .settings import GrabSettings, get_settings, reload_settings
from .url import UrlComponents, extract_url_components, normalize_url

__version__ = "0.4.0"
__all__ = [
    "DEFAULT_PATTERN",
    "GrabCore",
    "GrabPattern",
    "GrabResult",
    "GrabSettings",
    "UrlComponents",
    "compile_pattern",
    "extract_url_components",
    "get_settings",
    "normalize_url",
    "reload_settings",
    "render_path",
]
