"""
SecureFiles

Authenticated file-serving gateway: resolves caller supplied relative paths
against a configured media root, decides content type, disposition and
caching, and streams the bytes back.
"""

__version__ = "1.0.0"

from .auth import AuthGate, Identity
from .exceptions import (
    SecureFilesError, ConfigError, InvalidPath, NotFound, AccessDenied, StreamError
)
from .mime import MimeResolver, MimeDecision, ContentSniffer, MagicSniffer, NullSniffer
from .paths import MediaRoot, ResolvedFile, resolve_path
from .pipeline import prepare
from .policy import ResponsePlan, plan
from .streaming import FileStreamer

__all__ = [
    'AuthGate',
    'Identity',
    'SecureFilesError',
    'ConfigError',
    'InvalidPath',
    'NotFound',
    'AccessDenied',
    'StreamError',
    'MimeResolver',
    'MimeDecision',
    'ContentSniffer',
    'MagicSniffer',
    'NullSniffer',
    'MediaRoot',
    'ResolvedFile',
    'resolve_path',
    'prepare',
    'ResponsePlan',
    'plan',
    'FileStreamer',
]
