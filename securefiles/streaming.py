"""
Byte streaming for resolved files

Headers are committed before the first chunk leaves, so a failure here can
only be logged. The file handle lives inside the generator: it is opened on
first iteration and closed when the generator finishes, raises, or is closed
by the server after a client disconnect.
"""
import logging
from typing import Iterator

from .exceptions import StreamError
from .paths import ResolvedFile


logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


class FileStreamer:
    """Streams a ResolvedFile in fixed size chunks"""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.chunk_size = chunk_size

    def stream(self, resolved: ResolvedFile) -> Iterator[bytes]:
        sent = 0
        try:
            with open(resolved.path, 'rb') as fh:
                while True:
                    chunk = fh.read(self.chunk_size)
                    if not chunk:
                        break
                    sent += len(chunk)
                    yield chunk
        except OSError as exc:
            error = StreamError(f"read failed for {resolved.path} after {sent} bytes: {exc}")
            logger.exception("Streaming aborted: %s", error.detail)
            return

        if sent != resolved.size:
            logger.warning("Streamed %d bytes for %s, expected %d",
                           sent, resolved.path, resolved.size)
        else:
            logger.debug("Streamed %d bytes for %s", sent, resolved.path)
