"""
Path resolution for SecureFiles

Turns an untrusted relative path into a ResolvedFile proven to live inside
the configured MediaRoot. Containment is checked on the canonical path, after
symlinks are resolved, so a link inside the root pointing outside of it is
rejected like any other escape.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigError, InvalidPath, NotFound


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MediaRoot:
    """Canonical absolute directory that all served files must live under"""

    path: str

    @classmethod
    def from_config(cls, value: Optional[str]) -> 'MediaRoot':
        """
        Build a MediaRoot from the configured base path string

        Args:
            value: Absolute directory path as stored in configuration

        Returns:
            MediaRoot holding the canonical form of the directory

        Raises:
            ConfigError: If the value is unset, relative, or not a directory
        """
        if not value or not value.strip():
            raise ConfigError("base path setting is not configured")

        value = value.strip()
        if not os.path.isabs(value):
            raise ConfigError(f"base path is not absolute: {value!r}")

        return cls(_canonical_root(value))


@dataclass(frozen=True)
class FileRequest:
    """Untrusted relative path as supplied by the caller"""

    relative_path: str

    @property
    def extension(self) -> str:
        return file_extension(self.relative_path)


@dataclass(frozen=True)
class ResolvedFile:
    """A regular, readable file proven to lie inside the MediaRoot"""

    path: str
    size: int

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def extension(self) -> str:
        return file_extension(self.path)


def file_extension(path: str) -> str:
    """Lowercase extension without the dot ('' if there is none)"""
    return os.path.splitext(path)[1][1:].lower()


def has_traversal_marker(relative_path: str) -> bool:
    """True if the literal '..' appears anywhere in the path"""
    return '..' in relative_path


def is_contained(root: str, candidate: str) -> bool:
    """Containment check on canonical paths"""
    if candidate == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return candidate.startswith(prefix)


def _canonical_root(path: str) -> str:
    real = os.path.realpath(path)
    if not os.path.isdir(real):
        raise ConfigError(f"base path {path!r} is invalid or not accessible")
    return real


def resolve_path(root: MediaRoot, relative_path: str) -> ResolvedFile:
    """
    Resolve an untrusted relative path against the media root

    Args:
        root: Configured MediaRoot
        relative_path: Caller supplied path, already URL-decoded

    Returns:
        ResolvedFile for the canonical target

    Raises:
        InvalidPath: Empty path, NUL byte, or a '..' marker
        ConfigError: The root no longer resolves to a directory
        NotFound: Missing, outside the root, not a regular file, or unreadable
    """
    request = FileRequest(relative_path or '')

    if not request.relative_path or '\x00' in request.relative_path:
        raise InvalidPath("empty or NUL-containing path")

    # Reject outright; the canonical containment check below still applies
    if has_traversal_marker(request.relative_path):
        logger.warning("Directory traversal attempt blocked for path: %r", relative_path)
        raise InvalidPath(f"traversal marker in {relative_path!r}")

    real_root = _canonical_root(root.path)

    # A file addressed as a directory does not exist
    if request.relative_path.endswith(('/', '\\')):
        logger.warning("Trailing separator on path: %r", relative_path)
        raise NotFound(f"trailing separator in {relative_path!r}")

    candidate = os.path.join(real_root, request.relative_path.lstrip('/\\'))
    real_candidate = os.path.realpath(candidate)

    if not os.path.exists(real_candidate):
        logger.warning("File not found: %r", relative_path)
        raise NotFound(f"missing: {real_candidate}")

    if not is_contained(real_root, real_candidate):
        logger.warning("Path %r resolves outside base path: %s", relative_path, real_candidate)
        raise NotFound(f"outside root: {real_candidate}")

    if not os.path.isfile(real_candidate) or not os.access(real_candidate, os.R_OK):
        logger.warning("Not a regular readable file: %s", real_candidate)
        raise NotFound(f"not a readable file: {real_candidate}")

    try:
        size = os.path.getsize(real_candidate)
    except OSError as exc:
        raise NotFound(f"stat failed for {real_candidate}: {exc}") from exc

    return ResolvedFile(path=real_candidate, size=size)
