"""Main SiteClient class for interacting with a Neocities site."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import httpx

from neocities_cli._internal.api import DEFAULT_BASE_URL, ApiSession
from neocities_cli.exceptions import UnexpectedResponseError, UploadError
from neocities_cli.models import Credential, KeyCredential, PasswordCredential, RemoteFile, SiteInfo

logger = logging.getLogger(__name__)


def _parse_info(data: dict[str, Any]) -> SiteInfo:
    try:
        info = data["info"]
        return SiteInfo(
            sitename=str(info["sitename"]),
            views=int(info["views"]),
            hits=int(info["hits"]),
            created_at=str(info["created_at"]),
            last_updated=info.get("last_updated"),
            domain=info.get("domain"),
            tags=tuple(info.get("tags") or ()),
            latest_ipfs_hash=info.get("latest_ipfs_hash"),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise UnexpectedResponseError(f"malformed info response: {e!r}") from e


def _parse_files(data: dict[str, Any]) -> list[RemoteFile]:
    try:
        return [
            RemoteFile(
                path=str(item["path"]),
                is_directory=bool(item["is_directory"]),
                size=int(item.get("size") or 0),
                updated_at=str(item["updated_at"]),
            )
            for item in data["files"]
        ]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise UnexpectedResponseError(f"malformed list response: {e!r}") from e


class SiteClient:
    """Client for managing the files of one Neocities site.

    Each operation performs exactly one HTTP request, authenticated with
    the credential given at construction: bearer auth for an API key,
    basic auth for a username and password.

    Example (context manager - recommended):
        with SiteClient(KeyCredential("0123abcd")) as client:
            for remote in client.list_files():
                print(remote.path)

    Example (manual):
        client = SiteClient(PasswordCredential("mysite", "hunter2"))
        client.upload("index.html", "public/index.html")
        client.close()
    """

    def __init__(
        self,
        credential: Credential,
        *,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            credential: API key or username/password for the site
            base_url: API host, without the /api prefix
            http_client: Optional httpx client to send requests through
            timeout: Optional request timeout in seconds for a client
                created here
        """
        if not isinstance(credential, (KeyCredential, PasswordCredential)):
            raise TypeError(f"Unsupported credential type: {type(credential).__name__}")
        self._credential = credential
        self._api = ApiSession(
            credential,
            base_url=base_url,
            client=http_client,
            timeout=timeout,
        )

    def __enter__(self) -> SiteClient:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit context manager."""
        self.close()

    @property
    def credential(self) -> Credential:
        """The credential every request is authenticated with."""
        return self._credential

    def info(self) -> SiteInfo:
        """Fetch information about the site.

        Raises:
            ServerError: If the server rejects the request
            UnexpectedResponseError: On transport failure or a malformed response
        """
        return _parse_info(self._api.request("GET", "/api/info"))

    def list_files(self, path: str | None = None) -> list[RemoteFile]:
        """List the files on the site, in the order the server returns them.

        Args:
            path: Optional remote directory to limit the listing to

        Raises:
            ServerError: If the server rejects the request
            UnexpectedResponseError: On transport failure or a malformed response
        """
        params = {"path": path} if path else None
        return _parse_files(self._api.request("GET", "/api/list", params=params))

    def upload(self, remote_path: str, local_file: str | Path) -> None:
        """Upload a local file to remote_path on the site.

        Raises:
            UploadError: If the local file cannot be read
            ServerError: If the server rejects the upload
            UnexpectedResponseError: On transport failure or a malformed response
        """
        self.upload_many({remote_path: local_file})

    def upload_many(self, files: Mapping[str, str | Path]) -> None:
        """Upload several files in a single request.

        Args:
            files: Mapping of remote path to local file

        Each file is read fully into memory before the request is sent.
        """
        if not files:
            logger.debug("Nothing to upload")
            return

        parts = []
        for remote_path, local_file in files.items():
            local_file = Path(local_file)
            try:
                content = local_file.read_bytes()
            except OSError as e:
                raise UploadError(f"Failed to read {local_file}") from e
            logger.debug(f"Read {len(content)} bytes from {local_file} for {remote_path}")
            parts.append((remote_path, (remote_path, content)))

        self._api.request("POST", "/api/upload", files=parts)
        logger.info(f"Uploaded {', '.join(files)}")

    def delete(self, remote_paths: Sequence[str]) -> None:
        """Delete files from the site in a single request.

        An empty sequence is a no-op and sends nothing.

        Raises:
            ServerError: If the server rejects the request
            UnexpectedResponseError: On transport failure or a malformed response
        """
        if isinstance(remote_paths, str):
            raise TypeError("remote_paths must be a sequence of paths, not a single string")

        paths = list(remote_paths)
        if not paths:
            logger.debug("Nothing to delete")
            return

        params = [("filenames[]", path) for path in paths]
        self._api.request("POST", "/api/delete", params=params)
        logger.info(f"Deleted {', '.join(paths)}")

    def close(self) -> None:
        """Close the client and clean up resources."""
        self._api.close()
