"""Mapping of local file paths to remote site paths."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from neocities_cli.exceptions import NotUnderRootError, PathError

logger = logging.getLogger(__name__)

# Prefix marking a delete argument as an already-remote path
EXPLICIT_REMOTE_MARKER = ":"


def _canonicalize(path: Path) -> Path:
    try:
        return path.resolve(strict=True)
    except OSError as e:
        raise PathError(f"Cannot resolve '{path}'") from e


def to_relative(root: str | Path, target: str | Path) -> PurePosixPath:
    """Return target relative to root as a slash-separated path.

    Both paths are canonicalized first, so symlinks and `..` segments are
    resolved before the comparison.

    Raises:
        PathError: If either path does not exist
        NotUnderRootError: If target is not inside root
    """
    root_path = _canonicalize(Path(root))
    target_path = _canonicalize(Path(target))

    logger.debug(f"root: {root_path}")
    logger.debug(f"file: {target_path}")

    try:
        relative = target_path.relative_to(root_path)
    except ValueError as e:
        raise NotUnderRootError(root_path, target_path) from e
    if not relative.parts:
        raise NotUnderRootError(root_path, target_path)

    logger.debug(f"relative path: {relative}")
    return PurePosixPath(*relative.parts)


def upload_path(
    local_file: str | Path,
    remote_path: str | None = None,
    site_root: Path | None = None,
) -> str:
    """Choose the remote path for an upload.

    An explicit remote path is used as given. Otherwise the file's path
    relative to the site root is used, or the local path itself when no
    site root is known.
    """
    if remote_path:
        return remote_path
    if site_root is not None:
        return str(to_relative(site_root, local_file))
    return PurePosixPath(*Path(local_file).parts).as_posix()


def delete_path(path: str, site_root: Path | None = None) -> str:
    """Choose the remote path for a delete.

    A leading ':' marks an explicit remote path, which is used without
    normalization once the marker is stripped.
    """
    if path.startswith(EXPLICIT_REMOTE_MARKER):
        return path[len(EXPLICIT_REMOTE_MARKER):]
    if site_root is not None:
        return str(to_relative(site_root, path))
    return path
