"""
git-grab Core - resolve where a URL should be cloned and clone it there.

Pipeline per URL: normalise URL → extract components → render destination → git clone
"""

import logging
import subprocess
from pathlib import Path
from typing import Iterable, Iterator, Sequence, Tuple

from pydantic import BaseModel

from .errors import CloneError, GrabError
from .pattern import DEFAULT_PATTERN, GrabPattern
from .renderer import render_path
from .url import extract_url_components, normalize_url

logger = logging.getLogger(__name__)


class GrabResult(BaseModel):
    """Outcome of grabbing a single URL."""
    url: str
    dest: Path
    cloned: bool = False


class GrabCore:
    """Main coordinator for the grab pipeline."""

    def __init__(
        self,
        pattern: GrabPattern = DEFAULT_PATTERN,
        home: str | Path | None = None,
        git_command: str = "git",
        git_args: Sequence[str] = (),
        dry_run: bool = False,
    ):
        """
        Initialize GrabCore.

        Args:
            pattern: Compiled destination pattern, shared by every URL
            home: Directory substituted for ~ and {home}
            git_command: Executable used to clone
            git_args: Extra arguments passed to ``git clone``
            dry_run: If True, only resolve destinations without cloning
        """
        self.pattern = pattern
        self.home = home
        self.git_command = git_command
        self.git_args = list(git_args)
        self.dry_run = dry_run

    def resolve(self, raw_url: str) -> GrabResult:
        """
        Work out the canonical URL and destination for ``raw_url``.

        Raises:
            UrlError: The URL could not be normalised
        """
        url = normalize_url(raw_url)
        components = extract_url_components(url)
        dest = render_path(self.pattern, self.home, components)
        logger.debug(f"Resolved {raw_url} to {url} -> {dest}")
        return GrabResult(url=url, dest=dest)

    def grab(self, raw_url: str) -> GrabResult:
        """
        Clone ``raw_url`` into its destination.

        Returns:
            GrabResult; ``cloned`` is False for dry runs

        Raises:
            UrlError: The URL could not be normalised
            CloneError: The destination could not be created or git failed
        """
        result = self.resolve(raw_url)

        if self.dry_run:
            logger.info(f"Dry run - not cloning {result.url}")
            return result

        try:
            result.dest.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CloneError(f"unable to create {result.dest}: {e}") from e

        self.clone(result.url, result.dest)
        result.cloned = True
        return result

    def clone(self, url: str, dest: Path) -> None:
        """
        Run the clone command.

        Raises:
            CloneError: git could not be run or exited unsuccessfully
        """
        cmd = [self.git_command, "clone", *self.git_args, url, str(dest)]
        logger.info(f"Running: {' '.join(cmd)}")

        try:
            process = subprocess.run(cmd)
        except OSError as e:
            raise CloneError(f"unable to run {self.git_command}: {e}") from e

        if process.returncode < 0:
            raise CloneError(f"{self.git_command} killed by signal")
        if process.returncode != 0:
            raise CloneError(
                f"{self.git_command} exited with status {process.returncode}"
            )

    def grab_all(
        self, raw_urls: Iterable[str]
    ) -> Iterator[Tuple[str, GrabResult | None, GrabError | None]]:
        """
        Grab each URL in order, continuing past failures.

        Yields:
            (raw_url, result, error) with exactly one of result/error set
        """
        for raw_url in raw_urls:
            try:
                result = self.grab(raw_url)
            except GrabError as e:
                logger.info(f"Failed to grab {raw_url}: {e}")
                yield raw_url, None, e
                continue
            yield raw_url, result, None
