"""
Secure file serving from the configured media root

Authenticates the caller, resolves the requested path (rejecting traversal
and symlink escapes), then streams the file with policy driven headers.
"""
from flask import Blueprint, Response, current_app, request

from securefiles.exceptions import ConfigError, InvalidPath
from securefiles.pipeline import prepare


files_bp = Blueprint('files', __name__)


def _collaborators():
    return current_app.extensions['securefiles']


def serve_relative_path(relative_path):
    """
    Run the whole pipeline for one request

    Every check completes before the Response object exists, so errors are
    rendered by the app's error handlers without any file bytes leaking.
    """
    parts = _collaborators()

    # No filesystem work for unauthenticated callers
    parts['auth_gate'].authenticate(request)

    media_root = parts['media_root']
    if media_root is None:
        raise ConfigError("base path not loaded at startup")

    resolved, response_plan = prepare(media_root, relative_path, parts['mime_resolver'])

    current_app.logger.info("Serving %s as %s (%s)", resolved.path,
                            response_plan.mime_type, response_plan.disposition)

    return Response(
        parts['streamer'].stream(resolved),
        status=200,
        headers=response_plan.headers(),
        direct_passthrough=True,
    )


@files_bp.route('/serve')
def serve():
    """Serve the file named by the 'file' query parameter"""
    relative_path = request.args.get('file')
    if not relative_path:
        raise InvalidPath("missing 'file' parameter")
    return serve_relative_path(relative_path)


@files_bp.route('/media/<path:filepath>')
def serve_media(filepath):
    """Serve a file addressed by its public URL path"""
    return serve_relative_path(filepath)
