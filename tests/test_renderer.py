"""Tests for rendering patterns into destination paths."""

from pathlib import Path

import pytest

from gitgrab.pattern import DEFAULT_PATTERN, compile_pattern
from gitgrab.renderer import render_path
from gitgrab.url import UrlComponents, extract_url_components, normalize_url


def clone_path(template, url, home=None):
    """Render template for url the way GrabCore does."""
    components = extract_url_components(normalize_url(url))
    return render_path(compile_pattern(template), home, components)


INFLUX = "https://github.com/influxdata/influxdb2-sample-data.git"


class TestClonePath:
    """Rendering realistic URLs."""

    @pytest.mark.parametrize(
        "template,url,expected",
        [
            (
                "/src/{host/}{owner/}{repo}",
                INFLUX,
                "/src/github.com/influxdata/influxdb2-sample-data",
            ),
            (
                "/src/{host/}{owner/}{repo}",
                "https://github.com/influxdata/influxdb2-sample-data",
                "/src/github.com/influxdata/influxdb2-sample-data",
            ),
            (
                "/src/{host/}{owner/}{repo}",
                "github.com/zesterer/tao",
                "/src/github.com/zesterer/tao",
            ),
            (
                "/src/{host/}{owner/}{repo}",
                "github.com/denoland/deno/",
                "/src/github.com/denoland/deno",
            ),
            (
                "/src/{host/}{owner/}{repo}",
                "git@github.com:wezm/git-grab.git",
                "/src/github.com/wezm/git-grab",
            ),
            (
                "/src/{host/}{owner/}{repo}",
                "git.sr.ht/~wezm/lobsters",
                "/src/git.sr.ht/~wezm/lobsters",
            ),
            (
                "/src/{host/}{owner/}{repo}",
                "git@git.sr.ht:~wezm/lobsters",
                "/src/git.sr.ht/~wezm/lobsters",
            ),
            (
                "/src/{host/}{owner/}{repo}",
                "bitbucket.org/egrange/dwscript",
                "/src/bitbucket.org/egrange/dwscript",
            ),
            ("/src/{host/}{path/}", "git://c9x.me/qbe.git", "/src/c9x.me/qbe"),
            (
                "/src/{host/}{path}",
                "https://example.com/group/sub/project.git",
                "/src/example.com/group/sub/project",
            ),
            ("/src/{host/}{owner/}{repo}", "git://c9x.me/qbe.git", "/src/c9x.me"),
            ("{host}/", INFLUX, "github.com"),
            ("{owner}/", INFLUX, "influxdata"),
            ("{repo}/", INFLUX, "influxdb2-sample-data"),
            ("{home}/", INFLUX, "/"),
            ("{/owner}", INFLUX, "/influxdata"),
            ("{owner/}", INFLUX, "influxdata"),
            ("{owner/}/", INFLUX, "influxdata"),
            (
                "/test/~/{repo}",
                "https://github.com/owner/example_repo.git",
                "/test/~/example_repo",
            ),
        ],
    )
    def test_clone_path(self, template, url, expected):
        assert clone_path(template, url) == Path(expected)

    def test_round_trip_slash_example(self):
        assert str(clone_path("/src/{host/}{owner/}{repo}", INFLUX)) == (
            "/src/github.com/influxdata/influxdb2-sample-data"
        )


class TestSlashSuppression:
    """Absent values drop their slash markers."""

    def test_absent_owner_with_trailing_slash(self):
        assert clone_path("{owner/}", "git://c9x.me/qbe.git") == Path("")

    def test_absent_owner_with_leading_slash(self):
        assert clone_path("{/owner}", "git://c9x.me/qbe.git") == Path("")

    def test_absent_values_leave_no_separators(self):
        components = UrlComponents(host="example.com", path="x")
        path = render_path(
            compile_pattern("/src{/host}{/owner/}{/repo/}{/path}"), None, components
        )
        assert str(path) == "/src/example.com/x"

    def test_empty_value_keeps_slashes(self):
        pattern = compile_pattern("/src/{host}{/path/}end")
        present = render_path(pattern, None, UrlComponents(host="example.com", path=""))
        absent = render_path(pattern, None, UrlComponents(host="example.com"))
        assert str(present) == "/src/example.com/end"
        assert str(absent) == "/src/example.comend"


class TestEscapedPlaceholders:
    """Escaped placeholders are never substituted."""

    def test_escaped_owner(self):
        assert clone_path(
            "/test/{{owner}}/{repo}", "https://github.com/someone/example_repo.git"
        ) == Path("/test/{owner}/example_repo")

    @pytest.mark.parametrize(
        "components",
        [
            UrlComponents(),
            UrlComponents(host="github.com", path="a/b", owner="a", repo="b"),
        ],
    )
    def test_escape_ignores_components(self, components):
        path = render_path(compile_pattern("{{owner}}"), "/home/me", components)
        assert str(path) == "{owner}"


class TestHomeExpansion:
    """Tilde and {home} expansion."""

    def test_tilde_with_home(self):
        assert clone_path(
            "~/src/{host/}{owner/}{repo}", INFLUX, home="/custom/home"
        ) == Path("/custom/home/src/github.com/influxdata/influxdb2-sample-data")

    def test_home_placeholder(self):
        assert clone_path(
            "{home}/src/{host/}{owner/}{repo}", INFLUX, home=Path("/custom/home")
        ) == Path("/custom/home/src/github.com/influxdata/influxdb2-sample-data")

    def test_tilde_without_home_is_literal(self):
        assert str(clone_path("~/src/{repo}", INFLUX)) == "~/src/influxdb2-sample-data"

    def test_tilde_only_consumes_one_character(self):
        assert str(clone_path("~~/{repo}", INFLUX, home="/h")) == "/h~/influxdb2-sample-data"

    def test_tilde_later_in_pattern_is_untouched(self):
        assert str(clone_path("/test/~/{repo}", INFLUX, home="/h")) == (
            "/test/~/influxdb2-sample-data"
        )

    def test_tilde_after_placeholder_is_untouched(self):
        assert str(clone_path("{host}~/{repo}", INFLUX, home="/h")) == (
            "github.com~/influxdb2-sample-data"
        )

    def test_default_pattern(self):
        components = extract_url_components(
            normalize_url("https://gitlab.com/group/project.git")
        )
        path = render_path(DEFAULT_PATTERN, "/home/me", components)
        assert path == Path("/home/me/src/gitlab.com/group/project")


class TestGitSuffix:
    """A trailing .git extension is removed from the rendered path."""

    def test_path_git_suffix(self):
        assert clone_path("/src/{path}", "https://example.com/a/b.git") == Path("/src/a/b")

    def test_dot_git_directory_is_kept(self):
        components = UrlComponents(path=".git")
        assert str(render_path(compile_pattern("/src/{path}"), None, components)) == (
            "/src/.git"
        )

    def test_other_suffixes_kept(self):
        assert clone_path("/src/{path}", "https://example.com/a/b.tar") == Path(
            "/src/a/b.tar"
        )


class TestDotSegments:
    """Dot segments in the URL cannot move the destination outside the pattern."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/a/../../../../etc/evil",
            "https://example.com/%2e%2e/%2e%2e/etc/evil",
            "example.com/../../etc/evil",
        ],
    )
    def test_parent_segments_stay_under_prefix(self, url):
        components = extract_url_components(normalize_url(url))
        path = render_path(DEFAULT_PATTERN, "/home/me", components)
        assert path == Path("/home/me/src/example.com/etc/evil")
        assert ".." not in path.parts
        assert path.is_relative_to(Path("/home/me/src"))
