"""
Local build artifacts

Enumerates the files in the source directory and derives the object key and
content headers each one is uploaded with.
"""

import logging
import mimetypes
import os
from dataclasses import dataclass
from pathlib import Path

from .constants import CACHE_CONTROL_IMMUTABLE, CACHE_CONTROL_NO_CACHE, DEFAULT_CONTENT_TYPE, INDEX_FILENAME
from .errors import FilesystemError

logger = logging.getLogger(__name__)

# Web asset types pinned so lookups do not vary between interpreter versions
WEB_CONTENT_TYPES = {
    ".js": "application/javascript",
    ".mjs": "application/javascript",
    ".json": "application/json",
    ".map": "application/json",
    ".webmanifest": "application/manifest+json",
    ".wasm": "application/wasm",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
}

# Built-in table only, system mime.types files are not consulted
_mime_types = mimetypes.MimeTypes()
for _extension, _content_type in WEB_CONTENT_TYPES.items():
    _mime_types.add_type(_content_type, _extension)


def object_key_for(path: str | Path) -> str:
    """Bucket key for a local file: its basename. Directory structure is discarded."""
    return os.path.basename(path)


def content_type_for(path: str | Path) -> str:
    """Content type looked up from the file extension alone."""
    extension = os.path.splitext(os.fspath(path))[1].lower()
    if not extension:
        return DEFAULT_CONTENT_TYPE

    strict_types, loose_types = _mime_types.types_map
    return strict_types.get(extension) or loose_types.get(extension) or DEFAULT_CONTENT_TYPE


def cache_control_for(path: str | Path) -> str:
    """``no-cache`` for the entry document, one-year caching for every other asset."""
    if object_key_for(path) == INDEX_FILENAME:
        return CACHE_CONTROL_NO_CACHE
    return CACHE_CONTROL_IMMUTABLE


@dataclass(frozen=True)
class LocalFile:
    """A file in the source directory."""

    name: str
    path: Path

    @property
    def key(self) -> str:
        return object_key_for(self.path)

    @property
    def content_type(self) -> str:
        return content_type_for(self.path)

    @property
    def cache_control(self) -> str:
        return cache_control_for(self.path)


def list_local_files(dist_path: str | Path) -> list[LocalFile]:
    """
    List the entries directly inside ``dist_path``.

    No recursion and no filtering by type: a subdirectory is returned like a
    file and will fail when uploaded. Entries are sorted by name.

    Raises:
        FilesystemError: If the directory is missing or unreadable
    """
    dist = Path(dist_path)
    try:
        names = sorted(os.listdir(dist))
    except OSError as e:
        raise FilesystemError(f"Cannot read directory {dist}: {e.strerror or e}") from e

    logger.info(f"Found {len(names)} entries in {dist}")
    return [LocalFile(name=name, path=dist / name) for name in names]
