"""
Response policy: disposition and caching

Content behind this gateway is identity gated, so the default is a private,
must-revalidate cache policy. Only inline static assets (scripts, styles,
images, fonts, common media) are marked publicly cacheable.
"""
from dataclasses import dataclass
from typing import List, Tuple
from urllib.parse import quote

from .mime import DEFAULT_MIME_TYPE


INLINE = 'inline'
ATTACHMENT = 'attachment'

PUBLIC_IMMUTABLE = 'public-immutable'
PRIVATE_REVALIDATE = 'private-revalidate'

CACHE_CONTROL = {
    PUBLIC_IMMUTABLE: 'public, max-age=31536000, immutable',
    PRIVATE_REVALIDATE: 'private, no-cache, must-revalidate, max-age=0',
}

# Office documents and archives are always downloaded
ATTACHMENT_EXTENSIONS = {
    'doc', 'docx', 'xls', 'xlsx', 'ppt', 'pptx',
    'zip', 'gz', 'tar', '7z',
}

STATIC_ASSET_EXTENSIONS = {
    'js', 'css',
    'jpg', 'jpeg', 'png', 'gif', 'svg', 'webp', 'ico',
    'woff', 'woff2', 'ttf', 'otf', 'eot',
    'mp3', 'mp4', 'webm', 'ogg', 'ogv', 'oga', 'wav',
}


@dataclass(frozen=True)
class ResponsePlan:
    mime_type: str
    disposition: str
    cache_policy: str
    content_length: int
    filename: str = ''

    @property
    def cache_control(self) -> str:
        return CACHE_CONTROL[self.cache_policy]

    @property
    def content_disposition(self) -> str:
        return f'{self.disposition}; filename="{quote(self.filename, safe="")}"'

    def headers(self) -> List[Tuple[str, str]]:
        """Header list to send with the file body"""
        return [
            ('Content-Type', self.mime_type),
            ('Content-Length', str(self.content_length)),
            ('Content-Disposition', self.content_disposition),
            ('X-Content-Type-Options', 'nosniff'),
            ('Cache-Control', self.cache_control),
        ]


def choose_disposition(extension: str, mime_type: str) -> str:
    if mime_type == DEFAULT_MIME_TYPE or extension in ATTACHMENT_EXTENSIONS:
        return ATTACHMENT
    return INLINE


def choose_cache_policy(extension: str, disposition: str) -> str:
    if disposition == INLINE and extension in STATIC_ASSET_EXTENSIONS:
        return PUBLIC_IMMUTABLE
    return PRIVATE_REVALIDATE


def plan(extension: str, mime_type: str, file_size: int, filename: str = '') -> ResponsePlan:
    """
    Decide how a resolved file is delivered

    Args:
        extension: Lowercase extension without the dot
        mime_type: Type chosen by the MimeResolver
        file_size: Size in bytes, sent as Content-Length
        filename: Base name for the Content-Disposition header

    Returns:
        ResponsePlan
    """
    extension = (extension or '').lower()
    disposition = choose_disposition(extension, mime_type)
    return ResponsePlan(
        mime_type=mime_type,
        disposition=disposition,
        cache_policy=choose_cache_policy(extension, disposition),
        content_length=file_size,
        filename=filename,
    )
