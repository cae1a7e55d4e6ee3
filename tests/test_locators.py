"""Tests for the locator codec."""

import logging

import pytest

from depmap_cli.locators import Locator
from depmap_cli.locators import make_locator
from depmap_cli.locators import normalize_git_project


class TestNormalizeGitProject:
    """Canonicalization of git remotes."""

    def test_github_ssh_remote(self):
        assert normalize_git_project("git@github.com:org/repo.git") == "github.com/org/repo"

    def test_https_with_git_suffix(self):
        assert normalize_git_project("https://github.com/org/repo.git") == "github.com/org/repo"

    def test_http_without_suffix(self):
        assert normalize_git_project("http://github.com/org/repo") == "github.com/org/repo"

    def test_strips_fetcher_prefix_from_split_locator(self):
        assert normalize_git_project("git+https://github.com/org/repo.git") == "github.com/org/repo"

    def test_only_first_ssh_pattern_replaced(self):
        project = "git@github.com:org/git@github.com:repo"
        assert normalize_git_project(project) == "github.com/org/git@github.com:repo"

    def test_other_ssh_hosts_left_alone(self):
        assert normalize_git_project("git@gitlab.com:org/repo.git") == "git@gitlab.com:org/repo"

    def test_suffix_stripped_before_protocol(self):
        # .git is removed while the protocol is still attached
        assert normalize_git_project("https://example.org/repo.git") == "example.org/repo"

    def test_only_one_git_suffix_stripped(self):
        assert normalize_git_project("github.com/org/repo.git.git") == "github.com/org/repo.git"

    def test_https_checked_after_http(self):
        assert normalize_git_project("http://https://host/repo") == "host/repo"

    @pytest.mark.parametrize("value", ["", "github.com/org/repo", "plain-name", "/local/path"])
    def test_passthrough(self, value):
        assert normalize_git_project(value) == value

    @pytest.mark.parametrize(
        "value",
        [
            "git@github.com:org/repo.git",
            "https://github.com/org/repo.git",
            "http://github.com/org/repo",
            "git+git@github.com:org/repo.git",
            "git+https://github.com/org/repo",
            "github.com/org/repo",
            "git@bitbucket.org:team/repo.git",
            "",
        ],
    )
    def test_idempotent(self, value):
        once = normalize_git_project(value)
        assert normalize_git_project(once) == once


class TestMakeLocator:
    """Encoding (fetcher, project, revision) triples."""

    def test_non_git_is_verbatim(self):
        assert make_locator("npm", "https://registry/pkg.git", "1.0.0") == "npm+https://registry/pkg.git$1.0.0"

    def test_git_is_normalized(self):
        assert make_locator("git", "git@github.com:org/repo.git", "abc123") == "git+github.com/org/repo$abc123"

    def test_ssh_and_https_spellings_agree(self):
        ssh = make_locator("git", "git@github.com:org/repo.git", "v1")
        https = make_locator("git", "https://github.com/org/repo", "v1")
        assert ssh == https

    def test_empty_parts(self):
        assert make_locator("", "", "") == "+$"
        assert make_locator("git", "", "") == "git+$"

    def test_logs_normalization_to_given_logger(self, caplog):
        log = logging.getLogger("test.locators")
        with caplog.at_level(logging.DEBUG, logger="test.locators"):
            make_locator("git", "https://github.com/org/repo", "v1", log=log)

        assert any(r.name == "test.locators" and "github.com/org/repo" in r.getMessage() for r in caplog.records)

    def test_no_log_when_already_canonical(self, caplog):
        with caplog.at_level(logging.DEBUG):
            make_locator("git", "github.com/org/repo", "v1")

        assert not caplog.records


class TestLocator:
    """The Locator value type."""

    def test_str_is_encoded_form(self):
        assert str(Locator("mvn", "org.example:lib", "2.1")) == "mvn+org.example:lib$2.1"

    def test_equality_uses_canonical_key(self):
        a = Locator("git", "git@github.com:org/repo.git", "v1")
        b = Locator("git", "https://github.com/org/repo", "v1")
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_revisions_differ(self):
        assert Locator("npm", "left-pad", "1.0.0") != Locator("npm", "left-pad", "1.0.1")

    def test_non_git_not_normalized_for_equality(self):
        assert Locator("npm", "https://x/y.git", "1") != Locator("npm", "x/y", "1")

    def test_parse(self):
        parsed = Locator.parse("git+github.com/org/repo$abc123")
        assert parsed.fetcher == "git"
        assert parsed.project == "github.com/org/repo"
        assert parsed.revision == "abc123"

    def test_parse_splits_on_first_separators(self):
        parsed = Locator.parse("npm+@scope/pkg+extra$1.0.0$beta")
        assert parsed.fetcher == "npm"
        assert parsed.project == "@scope/pkg+extra"
        assert parsed.revision == "1.0.0$beta"

    def test_parse_missing_fetcher(self):
        parsed = Locator.parse("github.com/org/repo$v1")
        assert parsed.fetcher == ""
        assert parsed.project == "github.com/org/repo"
        assert parsed.revision == "v1"

    def test_parse_missing_revision(self):
        parsed = Locator.parse("go+example.org/pkg")
        assert parsed == Locator("go", "example.org/pkg", "")

    def test_parse_empty(self):
        assert Locator.parse("") == Locator("", "", "")

    def test_parse_of_encoded_round_trips_key(self):
        key = make_locator("git", "git@github.com:org/repo.git", "v2")
        assert Locator.parse(key).key == key

    def test_normalized(self):
        loc = Locator("git", "https://github.com/org/repo.git", "v1").normalized()
        assert loc.project == "github.com/org/repo"
        npm = Locator("npm", "https://x.git", "1")
        assert npm.normalized() is npm

    def test_immutable(self):
        loc = Locator("npm", "a", "1")
        with pytest.raises(AttributeError):
            loc.fetcher = "mvn"  # type: ignore[misc]
