"""Data models for the neocities_cli library."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class KeyCredential:
    """API key credential, sent as a bearer token."""

    key: str = field(repr=False)


@dataclass(frozen=True)
class PasswordCredential:
    """Username and password credential, sent as HTTP basic auth."""

    user: str
    password: str = field(repr=False)


Credential = Union[KeyCredential, PasswordCredential]


@dataclass(frozen=True)
class SiteInfo:
    """Information about a site, as reported by the info endpoint."""

    sitename: str
    views: int
    hits: int
    created_at: str
    last_updated: str | None = None
    domain: str | None = None
    tags: tuple[str, ...] = ()
    latest_ipfs_hash: str | None = None


@dataclass(frozen=True)
class RemoteFile:
    """A file or directory stored on the site."""

    path: str
    is_directory: bool
    size: int
    updated_at: str


@dataclass(frozen=True)
class Config:
    """Settings merged from the global and project config files."""

    site_root: Path | None = None
    default_site: str | None = None
    sites: dict[str, Credential] = field(default_factory=dict)
