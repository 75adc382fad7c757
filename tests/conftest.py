"""Pytest fixtures for neocities_cli tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import httpx
import pytest
from helpers import RecordingHandler

from neocities_cli import KeyCredential, PasswordCredential, SiteClient


@pytest.fixture
def handler() -> RecordingHandler:
    """Create a recording handler for the mock transport."""
    return RecordingHandler()


@pytest.fixture
def http_client(handler: RecordingHandler) -> Iterator[httpx.Client]:
    """Create an httpx client that never touches the network."""
    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        yield client


@pytest.fixture
def key_client(http_client: httpx.Client) -> SiteClient:
    """Create a SiteClient authenticated with an API key."""
    return SiteClient(KeyCredential("abc123"), http_client=http_client)


@pytest.fixture
def password_client(http_client: httpx.Client) -> SiteClient:
    """Create a SiteClient authenticated with a username and password."""
    return SiteClient(PasswordCredential("mysite", "hunter2"), http_client=http_client)


@pytest.fixture
def site_tree(tmp_path: Path) -> Path:
    """Create a small local site with a file outside of it.

    Layout:
        tmp/site/index.html
        tmp/site/css/style.css
        tmp/outside.html
    """
    root = tmp_path / "site"
    (root / "css").mkdir(parents=True)
    (root / "index.html").write_text("<h1>hello</h1>")
    (root / "css" / "style.css").write_text("body { color: red; }")
    (tmp_path / "outside.html").write_text("<p>not part of the site</p>")
    return root


@pytest.fixture
def global_config(tmp_path: Path) -> Path:
    """Path for a global config file that is isolated from the real user one."""
    config_dir = tmp_path / "user-config"
    config_dir.mkdir()
    return config_dir / "conf.toml"
