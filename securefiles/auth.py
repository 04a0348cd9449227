"""
Authentication gate

SecureFiles has no user model of its own. The host application supplies an
authenticator: a callable taking the request context and returning an
identity for logged in callers, or None. Anything the host wants to treat as
a trusted internal caller must be expressed through that callable.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .exceptions import AccessDenied


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Opaque identity returned by the host authenticator"""

    subject: str


Authenticator = Callable[[Any], Optional[Any]]


class AuthGate:
    """Confirms the caller is authenticated before any path resolution"""

    def __init__(self, authenticator: Authenticator):
        self.authenticator = authenticator

    def authenticate(self, request_context) -> Any:
        """
        Return the caller's identity

        Raises:
            AccessDenied: If the host authenticator does not recognize the caller
        """
        identity = self.authenticator(request_context)
        if not identity:
            logger.warning("Unauthenticated request rejected")
            raise AccessDenied("host authenticator returned no identity")
        return identity
