"""
Validation half of the serving pipeline

Runs PathResolver, MimeResolver and ResponsePolicy for an already
authenticated caller. Everything here completes before a single header is
emitted, so any error raised can still be rendered as a clean error page.
"""
import logging
from typing import Optional, Tuple

from .mime import MimeResolver
from .paths import MediaRoot, ResolvedFile, resolve_path
from .policy import ResponsePlan, plan


logger = logging.getLogger(__name__)


def prepare(root: MediaRoot, relative_path: str,
            mime_resolver: Optional[MimeResolver] = None) -> Tuple[ResolvedFile, ResponsePlan]:
    """
    Resolve a request path and decide how to deliver it

    Returns:
        Tuple of (ResolvedFile, ResponsePlan)
    """
    resolver = mime_resolver or MimeResolver()

    resolved = resolve_path(root, relative_path)
    decision = resolver.decide(resolved.extension, resolved.path)
    response_plan = plan(resolved.extension, decision.mime_type, resolved.size, resolved.name)

    logger.debug("Planned %s (%s via %s, %s, %s)", resolved.path, decision.mime_type,
                 decision.source, response_plan.disposition, response_plan.cache_policy)
    return resolved, response_plan
