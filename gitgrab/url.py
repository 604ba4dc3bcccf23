"""
URL normalisation and component extraction.

Users type things like ``github.com/wezm/git-grab`` or paste SSH remotes such as
``git@github.com:wezm/git-grab.git``. ``normalize_url`` turns these into an
absolute URL that can be handed to git, and ``extract_url_components`` pulls out
the pieces a destination pattern can refer to.
"""

import logging
import re
from urllib.parse import SplitResult, quote, urlsplit, urlunsplit

from pydantic import BaseModel, ConfigDict

from .errors import UrlError

logger = logging.getLogger(__name__)

HTTPS = "https://"

# Hosts whose first two path segments are always owner/repo
KNOWN_HOSTS = frozenset({"github.com", "gitlab.com", "bitbucket.org", "git.sr.ht"})

SPECIAL_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss", "file"})

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
_FORBIDDEN_HOST_CHARS = frozenset(" \t\r\n\"<>\\^|")
_SINGLE_DOT = frozenset({".", "%2e"})
_DOUBLE_DOT = frozenset({"..", ".%2e", "%2e.", "%2e%2e"})
# Existing escapes are kept, so "%" is safe
_PATH_SAFE = "/%:@!$&'()*+,;=~"


class RelativeUrlError(ValueError):
    """The input has no scheme."""

    def __init__(self):
        super().__init__("relative URL without a base")


class UrlComponents(BaseModel):
    """Values a destination pattern can substitute for a URL."""

    model_config = ConfigDict(frozen=True)

    host: str | None = None
    path: str | None = None
    owner: str | None = None
    repo: str | None = None


def _split_netloc(netloc: str) -> tuple[str, str]:
    """Split a netloc into the userinfo (with its ``@``) and host:port."""
    userinfo, at, hostport = netloc.rpartition("@")
    return f"{userinfo}{at}", hostport


def _host_of(netloc: str) -> str | None:
    """Host from a netloc, case preserved, port and userinfo removed."""
    _userinfo, hostport = _split_netloc(netloc)
    if hostport.startswith("[") and "]" in hostport:
        return hostport[: hostport.index("]") + 1]
    return hostport.partition(":")[0] or None


def _canonical_netloc(parts: SplitResult, special: bool) -> str:
    userinfo, hostport = _split_netloc(parts.netloc)
    if special:
        hostport = hostport.lower()
        if not hostport.isascii():
            try:
                hostport = hostport.encode("idna").decode("ascii")
            except UnicodeError as e:
                raise ValueError("invalid international domain name") from e
    return f"{userinfo}{hostport}"


def _remove_dot_segments(path: str) -> str:
    """Resolve ``.`` and ``..`` segments; ``..`` never climbs above the root."""
    if not path.startswith("/"):
        return path

    segments = path[1:].split("/")
    output = []
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        lowered = segment.lower()
        if lowered in _SINGLE_DOT:
            if last:
                output.append("")
        elif lowered in _DOUBLE_DOT:
            if output:
                output.pop()
            if last:
                output.append("")
        else:
            output.append(segment)
    return "/" + "/".join(output)


def parse_absolute_url(raw: str) -> str:
    """
    Parse an absolute URL and return its canonical form.

    Dot segments are resolved and the path is percent-encoded. For special
    schemes backslashes count as slashes and the host is lower-cased and
    IDNA encoded.

    Raises:
        RelativeUrlError: The input has no scheme
        ValueError: The input has a scheme but is otherwise invalid
    """
    text = raw.strip()
    match = _SCHEME_RE.match(text)
    if not match:
        raise RelativeUrlError()

    scheme = match.group(0)[:-1].lower()
    special = scheme in SPECIAL_SCHEMES
    if special:
        text = text.replace("\\", "/")

    parts = urlsplit(text)
    # Accessing port validates it
    parts.port

    hostname = parts.hostname or ""
    if any(c in _FORBIDDEN_HOST_CHARS for c in hostname):
        raise ValueError("invalid domain character")

    if special and scheme != "file" and not hostname:
        raise ValueError("empty host")

    path = quote(_remove_dot_segments(parts.path), safe=_PATH_SAFE)
    if special and not path:
        path = "/"

    return urlunsplit(
        (scheme, _canonical_netloc(parts, special), path, parts.query, parts.fragment)
    )


def looks_like_ssh_url(url: str) -> bool:
    """True if there is an ``@`` before the first ``:``."""
    before, colon, _after = url.partition(":")
    return bool(colon) and "@" in before


def normalise_ssh_url(url: str) -> str | None:
    """
    Rewrite SSH shorthand as an ``ssh://`` URL.

    ``git@github.com:wezm/grab.git`` becomes ``ssh://git@github.com/wezm/grab.git``
    and ``git@github.com:2222:wezm/grab.git`` becomes
    ``ssh://git@github.com:2222/wezm/grab.git``. Returns None for any other
    number of colons.
    """
    parts = url.split(":")
    if len(parts) == 2:
        return f"ssh://{parts[0]}/{parts[1]}"
    if len(parts) == 3:
        return f"ssh://{parts[0]}:{parts[1]}/{parts[2]}"
    return None


def normalize_url(raw: str) -> str:
    """
    Turn user input into an absolute URL.

    Args:
        raw: URL, scheme-less URL (``github.com/owner/repo``) or SSH shorthand

    Returns:
        Canonical absolute URL

    Raises:
        UrlError: The input could not be understood
    """
    try:
        return parse_absolute_url(raw)
    except RelativeUrlError as e:
        relative_error = e
    except ValueError as e:
        raise UrlError(raw, str(e)) from e

    if looks_like_ssh_url(raw):
        rewritten = normalise_ssh_url(raw)
        if rewritten is None:
            raise UrlError(raw, "unable to normalise")
        logger.debug(f"Treating '{raw}' as SSH shorthand: {rewritten}")
    elif "." in raw:
        rewritten = HTTPS + raw
        logger.debug(f"Treating '{raw}' as scheme-less URL: {rewritten}")
    else:
        raise UrlError(raw, str(relative_error))

    try:
        return parse_absolute_url(rewritten)
    except ValueError as e:
        raise UrlError(raw, str(e)) from e


def extract_url_components(url: str) -> UrlComponents:
    """
    Derive host, path, owner and repo from an absolute URL.

    Owner and repo are only filled in for KNOWN_HOSTS with at least two path
    segments; use the ``path`` placeholder for other hosts.
    """
    parts = urlsplit(url)
    host = _host_of(parts.netloc)

    if parts.path.startswith("/"):
        segments = parts.path[1:].split("/")
    else:
        segments = []

    owner = None
    repo = None
    if host in KNOWN_HOSTS and len(segments) >= 2:
        owner = segments[0]
        repo = segments[1]
        if repo.endswith(".git"):
            repo = repo[: -len(".git")]

    return UrlComponents(
        host=host,
        path="/".join(segments).strip("/"),
        owner=owner,
        repo=repo,
    )
