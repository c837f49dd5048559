"""Parsing and validation of git repository URLs.

Git accepts three URL shapes:
- URL transports: ssh://git@host/org/repo.git, https://host/org/repo.git
- scp-like syntax: git@host:org/repo.git (an SSH URL without a scheme)
- local paths: /srv/repos/repo.git

parse_git_url normalises all three into a GitURL so the predicates below
only look at scheme, host and path.
"""

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from gitops_writeback.git.errors import (
    EmptyGitURLError,
    EmptyRepoPathError,
    GitURLParseError,
    InvalidGitURLError,
    UnsupportedTransportError,
)

# Schemes git itself understands as "<scheme>://..."
TRANSPORT_SCHEMES = frozenset(
    {"ssh", "git", "git+ssh", "ssh+git", "http", "https", "ftp", "ftps", "rsync", "file"}
)

# Transports this client is willing to push through
SUPPORTED_SCHEMES = frozenset({"ssh", "git"})

# [user@]host:path, where host has no slash and path does not start with "//"
_SCP_PATTERN = re.compile(r"^(?:(?P<user>[^@\s]+)@)?(?P<host>[^@:/\s]+):(?!//)(?P<path>.*)$")


@dataclass(frozen=True)
class GitURL:
    """A git URL normalised to its transport components."""

    scheme: str
    user: str | None
    host: str
    port: int | None
    path: str

    @property
    def is_absolute(self) -> bool:
        return self.scheme != ""


def parse_git_url(url: str) -> GitURL:
    """Parse a git URL in transport, scp-like or local-path form.

    Args:
        url: Repository URL as given by the user

    Returns:
        The normalised GitURL. scp-like URLs get scheme "ssh", local paths
        get scheme "file" and an empty host.

    Raises:
        GitURLParseError: If the string is empty, uses an unknown
            "<scheme>://" transport, or is rejected by the URL splitter
    """
    if not url:
        raise GitURLParseError("unable to parse an empty git URL")

    if "://" in url:
        return _parse_transport_url(url)

    match = _SCP_PATTERN.match(url)
    if match is not None:
        return GitURL(
            scheme="ssh",
            user=match.group("user"),
            host=match.group("host"),
            port=None,
            path=match.group("path"),
        )

    return GitURL(scheme="file", user=None, host="", port=None, path=url)


def _parse_transport_url(url: str) -> GitURL:
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise GitURLParseError(f"unable to parse git URL '{url}': {e}") from e

    if parts.scheme not in TRANSPORT_SCHEMES:
        raise GitURLParseError(
            f"unable to parse git URL '{url}': unknown transport '{parts.scheme}'"
        )

    return GitURL(
        scheme=parts.scheme,
        user=parts.username,
        host=parts.hostname or "",
        port=port,
        path=parts.path,
    )


def is_git_url(url: str) -> bool:
    """Return True if the string parses as a git URL with a scheme and a host.

    HTTP(S) URLs count; use validate_url to also enforce the SSH policy.
    """
    try:
        parsed = parse_git_url(url)
    except GitURLParseError:
        return False
    return parsed.is_absolute and parsed.host != ""


def validate_url(url: str) -> None:
    """Check that a URL is a well-formed SSH git URL.

    Raises:
        EmptyGitURLError: If url is empty
        InvalidGitURLError: If url is not shaped like a git URL
        UnsupportedTransportError: If url uses a transport other than ssh/git
    """
    if url == "":
        raise EmptyGitURLError("empty Git URL")
    if not is_git_url(url):
        raise InvalidGitURLError(f"invalid Git URL '{url}'")
    scheme = parse_git_url(url).scheme
    if scheme not in SUPPORTED_SCHEMES:
        raise UnsupportedTransportError(
            f"got a {scheme.upper()} Git URL, but only SSH Git URLs are supported"
        )


def repo_name(url: str) -> str:
    """Return the short name of a repository given its URL.

    "ssh://git@example.com/org/myrepo.git" -> "myrepo". Only a literal
    ".git" suffix is removed, so "org/digit" stays "digit".

    Raises:
        GitURLParseError: If the URL cannot be parsed
        EmptyRepoPathError: If the URL path has no segments
    """
    parsed = parse_git_url(url)
    segments = [segment for segment in parsed.path.split("/") if segment]
    if not segments:
        raise EmptyRepoPathError(f"could not find name of repository {url}")
    return segments[-1].removesuffix(".git")
