"""
MIME type resolution for SecureFiles

The extension table always wins. Content sniffing (libmagic through
python-magic) is only consulted for extensions the table does not know,
because sniffers routinely report plain-text web assets (scripts, styles,
markup) as text/plain and that breaks packaged content such as SCORM.
"""
import logging
from dataclasses import dataclass
from typing import Optional

try:
    import magic
except ImportError:  # libmagic not installed on the host
    magic = None


logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = 'application/octet-stream'

# Sniffer answers that carry no information
GENERIC_SNIFF_RESULTS = {'', DEFAULT_MIME_TYPE}

SNIFF_SAMPLE_BYTES = 2048

MIME_TYPES = {
    # Web
    'html': 'text/html',
    'htm': 'text/html',
    'css': 'text/css',
    'js': 'application/javascript',
    'json': 'application/json',
    'xml': 'application/xml',
    'txt': 'text/plain',
    'csv': 'text/csv',
    # Images
    'jpg': 'image/jpeg',
    'jpeg': 'image/jpeg',
    'png': 'image/png',
    'gif': 'image/gif',
    'svg': 'image/svg+xml',
    'webp': 'image/webp',
    'ico': 'image/vnd.microsoft.icon',
    # Audio / video
    'mp3': 'audio/mpeg',
    'mp4': 'video/mp4',
    'webm': 'video/webm',
    'ogg': 'application/ogg',
    'ogv': 'video/ogg',
    'oga': 'audio/ogg',
    'wav': 'audio/wav',
    'flv': 'video/x-flv',
    'swf': 'application/x-shockwave-flash',
    # Fonts
    'woff': 'font/woff',
    'woff2': 'font/woff2',
    'ttf': 'font/ttf',
    'otf': 'font/otf',
    'eot': 'application/vnd.ms-fontobject',
    # Documents
    'pdf': 'application/pdf',
    'doc': 'application/msword',
    'docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'xls': 'application/vnd.ms-excel',
    'xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'ppt': 'application/vnd.ms-powerpoint',
    'pptx': 'application/vnd.openxmlformats-officedocument.presentationml.presentation',
    # Archives
    'zip': 'application/zip',
    'gz': 'application/gzip',
    'tar': 'application/x-tar',
    '7z': 'application/x-7z-compressed',
}


class ContentSniffer:
    """Interface for content based MIME detection"""

    def sniff(self, file_path: str) -> Optional[str]:
        """Return the detected MIME type, or None if sniffing is unavailable"""
        raise NotImplementedError


class NullSniffer(ContentSniffer):
    """Sniffing unavailable"""

    def sniff(self, file_path):
        return None


class MagicSniffer(ContentSniffer):
    """Detects MIME types from the leading bytes of a file using libmagic"""

    def __init__(self, sample_bytes: int = SNIFF_SAMPLE_BYTES):
        self.sample_bytes = sample_bytes
        self._magic = magic.Magic(mime=True) if magic is not None else None
        if self._magic is None:
            logger.warning("python-magic is not available; content sniffing is disabled")

    @property
    def available(self) -> bool:
        return self._magic is not None

    def sniff(self, file_path):
        if self._magic is None:
            return None
        try:
            with open(file_path, 'rb') as fh:
                header = fh.read(self.sample_bytes)
            return self._magic.from_buffer(header)
        except (OSError, magic.MagicException) as exc:
            logger.warning("Content sniffing failed for %s: %s", file_path, exc)
            return None


@dataclass(frozen=True)
class MimeDecision:
    """Resolved MIME type and where it came from ('table', 'sniffed', 'fallback')"""

    mime_type: str
    source: str


class MimeResolver:
    """
    Maps an extension (and, failing that, file content) to a MIME type

    Args:
        sniffer: ContentSniffer used for unknown extensions. Defaults to
            NullSniffer so the resolver never touches disk unless asked to.
    """

    def __init__(self, sniffer: Optional[ContentSniffer] = None, table: Optional[dict] = None):
        self.sniffer = sniffer or NullSniffer()
        self.table = MIME_TYPES if table is None else table

    def decide(self, extension: str, file_path: str) -> MimeDecision:
        extension = (extension or '').lower().lstrip('.')

        mime_type = self.table.get(extension)
        if mime_type:
            return MimeDecision(mime_type, 'table')

        sniffed = self.sniffer.sniff(file_path)
        logger.debug("Sniffed %r for unknown extension %r", sniffed, extension)
        if sniffed and sniffed not in GENERIC_SNIFF_RESULTS:
            return MimeDecision(sniffed, 'sniffed')

        return MimeDecision(DEFAULT_MIME_TYPE, 'fallback')

    def resolve(self, extension: str, file_path: str) -> str:
        """Return the MIME type for a file"""
        return self.decide(extension, file_path).mime_type
