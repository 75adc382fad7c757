"""Neocities CLI - A Python library and command-line tool for managing Neocities sites.

Example usage:
    from neocities_cli import KeyCredential, SiteClient

    # Using context manager (recommended)
    with SiteClient(KeyCredential("0123abcd")) as client:
        print(client.info().sitename)
        client.upload("about.html", "public/about.html")
        client.delete(["old.html"])

    # Resolving the credential the way the `neo` command does
    from neocities_cli import build_config, resolve_auth

    config = build_config()
    site, credential = resolve_auth(config, no_interactive=True)
    client = SiteClient(credential)
    files = client.list_files()
    client.close()
"""

from neocities_cli._version import __version__
from neocities_cli.auth import resolve_auth, select_credential, select_site
from neocities_cli.client import SiteClient
from neocities_cli.config import build_config, load_config
from neocities_cli.exceptions import (
    AuthenticationError,
    ConfigError,
    MissingCredentialError,
    MissingSiteError,
    NeocitiesError,
    NotUnderRootError,
    PathError,
    ServerError,
    UnexpectedResponseError,
    UploadError,
)
from neocities_cli.models import (
    Config,
    Credential,
    KeyCredential,
    PasswordCredential,
    RemoteFile,
    SiteInfo,
)
from neocities_cli.paths import delete_path, to_relative, upload_path

__all__ = [
    "__version__",
    # Main client
    "SiteClient",
    # Config and auth resolution
    "build_config",
    "load_config",
    "resolve_auth",
    "select_site",
    "select_credential",
    # Path mapping
    "to_relative",
    "upload_path",
    "delete_path",
    # Models
    "Config",
    "Credential",
    "KeyCredential",
    "PasswordCredential",
    "RemoteFile",
    "SiteInfo",
    # Exceptions
    "NeocitiesError",
    "ConfigError",
    "AuthenticationError",
    "MissingSiteError",
    "MissingCredentialError",
    "PathError",
    "NotUnderRootError",
    "ServerError",
    "UnexpectedResponseError",
    "UploadError",
]
