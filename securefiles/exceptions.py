"""
Error taxonomy for SecureFiles

Every failure the pipeline can signal is one of these classes. Each carries a
fixed, generic public message that is safe to show to the caller, and an
optional ``detail`` string meant for the server log only.
"""
from typing import Optional


class SecureFilesError(Exception):
    """Base class for all SecureFiles errors"""

    status_code = 500
    public_message = 'The request could not be completed.'

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.public_message)
        self.detail = detail


class ConfigError(SecureFilesError):
    """Base path unset or unresolvable (operator misconfiguration)"""

    status_code = 500
    public_message = ('Secure Files Access: The configured base media path is invalid '
                      'or not accessible. Please check plugin settings.')


class InvalidPath(SecureFilesError):
    """Literal traversal marker or otherwise malformed request path"""

    status_code = 400
    public_message = 'The requested file path is invalid.'


class NotFound(SecureFilesError):
    """
    Missing, outside the root, a directory, or unreadable.

    All of these collapse into one signal so callers cannot probe the
    filesystem layout.
    """

    status_code = 404
    public_message = ('The requested file could not be found, may not exist, '
                      'or you do not have permission to access it.')


class AccessDenied(SecureFilesError):
    """Caller is not authenticated"""

    status_code = 403
    public_message = 'Access denied. You must be logged in to view this file.'


class StreamError(SecureFilesError):
    """Failure while transferring bytes after headers were committed"""

    status_code = 500
