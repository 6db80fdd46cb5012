"""Extension to MIME type classification."""

import posixpath
from types import MappingProxyType

FALLBACK_EXTENSION = "bin"
HTML_CONTENT_TYPE = "text/html; charset=utf-8"

MIME_TABLE = MappingProxyType(
    {
        "bin": "application/octet-stream",
        "css": "text/css",
        "gif": "image/gif",
        "htm": HTML_CONTENT_TYPE,
        "html": HTML_CONTENT_TYPE,
        "ico": "image/x-icon",
        "jpeg": "image/jpeg",
        "jpg": "image/jpeg",
        "js": "text/javascript",
        "json": "application/json",
        "md": "text/markdown",
        "mjs": "text/javascript",
        "pdf": "application/pdf",
        "png": "image/png",
        "svg": "image/svg+xml",
        "txt": "text/plain",
        "wasm": "application/wasm",
        "webp": "image/webp",
        "xml": "application/xml",
    }
)


def get_extension(path: str) -> str:
    _root, ext = posixpath.splitext(posixpath.basename(path))
    return ext[1:]


def get_content_type(path: str) -> str:
    # Case-sensitive: "photo.JPG" falls back to application/octet-stream.
    return MIME_TABLE.get(get_extension(str(path)), MIME_TABLE[FALLBACK_EXTENSION])
