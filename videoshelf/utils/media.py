"""
utils/media.py

Filesystem side of the server: which files count as videos, what they are
called on the wire, and how big they are.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from werkzeug.utils import safe_join

from ..config import DEFAULT_MIME_TYPE, MIME_TYPES, VIDEO_EXTENSIONS, ServerConfig

logger = logging.getLogger("videoshelf.media")


class ResourceNotFoundError(LookupError):
    """Raised when a requested video does not exist or is not servable."""


@dataclass(frozen=True)
class ResourceDescriptor:
    name: str
    path: str
    size: int
    content_type: str


def _extension(name: str) -> str:
    return os.path.splitext(name)[1].lower()


def is_video_file(name: str, extensions: Iterable[str] = VIDEO_EXTENSIONS) -> bool:
    return _extension(name) in extensions


def content_type_for(
    name: str,
    mime_types: Optional[Dict[str, str]] = None,
    default: str = DEFAULT_MIME_TYPE,
) -> str:
    table = MIME_TYPES if mime_types is None else mime_types
    return table.get(_extension(name), default)


def describe_resource(
    path: str,
    mime_types: Optional[Dict[str, str]] = None,
    default_mime_type: str = DEFAULT_MIME_TYPE,
) -> ResourceDescriptor:
    """Stat `path` and build its descriptor, or raise ResourceNotFoundError."""
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError, ValueError):
        # ValueError: embedded null byte
        raise ResourceNotFoundError(path) from None
    if not os.path.isfile(path):
        raise ResourceNotFoundError(path)

    name = os.path.basename(path)
    return ResourceDescriptor(
        name=name,
        path=path,
        size=st.st_size,
        content_type=content_type_for(name, mime_types, default_mime_type),
    )


def video_path(config: ServerConfig, filename: str) -> str:
    """
    Map a /videos/<filename> request onto a path in the assets directory.
    Anything outside the extension allow-list or outside assets_dir is
    reported as not found. Existence is checked later, by describe_resource.
    """
    if not is_video_file(filename, config.video_extensions):
        raise ResourceNotFoundError(filename)
    path = safe_join(config.assets_dir, filename) if "\x00" not in filename else None
    if path is None:
        logger.warning("Rejected unsafe video name: %r", filename)
        raise ResourceNotFoundError(filename)
    return path


def list_videos(assets_dir: str, extensions: Iterable[str] = VIDEO_EXTENSIONS) -> List[str]:
    """
    Return the video file names in assets_dir, sorted.
    A missing directory is created and reported as empty.
    """
    extensions = tuple(extensions)
    try:
        names = os.listdir(assets_dir)
    except FileNotFoundError:
        logger.info("Assets directory %s does not exist, creating it", assets_dir)
        os.makedirs(assets_dir, exist_ok=True)
        return []
    return sorted(
        n for n in names
        if is_video_file(n, extensions) and os.path.isfile(os.path.join(assets_dir, n))
    )
