"""Exception hierarchy for the neocities_cli library."""

from __future__ import annotations


class NeocitiesError(Exception):
    """Base exception for all neocities_cli errors."""

    pass


class ConfigError(NeocitiesError):
    """Raised when a config file cannot be read or understood."""

    pass


class AuthenticationError(NeocitiesError):
    """Raised when no usable site or credential could be determined."""

    pass


class MissingSiteError(AuthenticationError):
    """Raised when the site name is not given and cannot be prompted for."""

    pass


class MissingCredentialError(AuthenticationError):
    """Raised when no credential is available for the site."""

    pass


class PathError(NeocitiesError):
    """Raised when a local path cannot be mapped to a remote path."""

    pass


class NotUnderRootError(PathError):
    """Raised when a file lies outside the site root."""

    def __init__(self, root: object, target: object) -> None:
        super().__init__(f"'{target}' is not under site root '{root}'")
        self.root = root
        self.target = target


class ServerError(NeocitiesError):
    """Raised when the server rejects a request with a structured error.

    The error_type and message attributes are passed through verbatim from
    the response body.
    """

    def __init__(self, error_type: str, message: str) -> None:
        super().__init__(f"[{error_type}] {message}")
        self.error_type = error_type
        self.message = message


class UnexpectedResponseError(NeocitiesError):
    """Raised on transport failures or response bodies that cannot be decoded."""

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        if status_code is not None:
            super().__init__(f"unexpected response (HTTP {status_code}): {detail}")
        else:
            super().__init__(f"unexpected response: {detail}")
        self.detail = detail
        self.status_code = status_code


class UploadError(NeocitiesError):
    """Raised when a local file cannot be read for upload."""

    pass
