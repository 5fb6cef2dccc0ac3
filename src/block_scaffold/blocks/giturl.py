"""Parse git hosting URLs into owner/name references."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlparse

_SCP_PATTERN = re.compile(r"^(?:(?P<user>[^@/]+)@)?(?P<host>[^:/]+):(?P<path>[^/].*)$")


@dataclass(frozen=True)
class GitRepoRef:
    """Repository coordinates extracted from a git or browse URL."""

    host: str
    owner: str
    name: str
    branch: str | None = None
    path: str = ""
    scheme: str = "https"

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def https_url(self) -> str:
        return f"https://{self.host}/{self.owner}/{self.name}"

    @property
    def clone_url(self) -> str:
        """http(s) clone URL, keeping the scheme the repository was given with."""
        return f"{self.scheme}://{self.host}/{self.owner}/{self.name}.git"


def _split_repo_path(host: str, raw_path: str, url: str, scheme: str = "https") -> GitRepoRef:
    parts = [part for part in raw_path.split("/") if part]
    if len(parts) < 2:
        raise ValueError(f"Invalid git URL '{url}'. Expected <host>/<owner>/<name>")

    owner, name = parts[0], parts[1]
    if name.endswith(".git"):
        name = name[: -len(".git")]

    branch = None
    path = ""
    # Browse URLs: /<owner>/<name>/tree/<branch>/<path...>
    if len(parts) >= 4 and parts[2] in ("tree", "blob"):
        branch = parts[3]
        path = "/".join(parts[4:])

    return GitRepoRef(host=host, owner=owner, name=name, branch=branch, path=path, scheme=scheme)


def parse_git_url(url: str) -> GitRepoRef:
    """Parse https, ssh:// and scp-style (``git@host:owner/name.git``) URLs."""
    url = url.strip()
    if "://" in url:
        parsed = urlparse(url)
        if not parsed.hostname:
            raise ValueError(f"Invalid git URL '{url}'. Missing host")
        scheme = parsed.scheme if parsed.scheme in ("http", "https") else "https"
        return _split_repo_path(parsed.hostname, parsed.path, url, scheme)

    match = _SCP_PATTERN.match(url)
    if match:
        return _split_repo_path(match.group("host"), match.group("path"), url)

    raise ValueError(f"Invalid git URL '{url}'")


__all__ = ["GitRepoRef", "parse_git_url"]
