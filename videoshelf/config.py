"""
config.py

Startup configuration for the videoshelf server.

The server used to hard-code its port and directories; everything now lives
on a ServerConfig that is built once (usually from the environment) and handed
to create_app().
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

DEFAULT_PORT = 1234
CHUNK_SIZE = 64 * 1024  # 64KB

VIDEO_EXTENSIONS: Tuple[str, ...] = (".mp4", ".webm", ".ogg", ".mov", ".mkv")

MIME_TYPES: Dict[str, str] = {
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".ogg": "video/ogg",
    ".mov": "video/quicktime",
    ".mkv": "video/x-matroska",
}
DEFAULT_MIME_TYPE = "video/mp4"

ENV_PREFIX = "VIDEOSHELF_"


@dataclass(frozen=True)
class ServerConfig:
    assets_dir: str
    dist_dir: str
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    video_extensions: Tuple[str, ...] = VIDEO_EXTENSIONS
    mime_types: Dict[str, str] = field(default_factory=lambda: dict(MIME_TYPES))
    default_mime_type: str = DEFAULT_MIME_TYPE
    chunk_size: int = CHUNK_SIZE
    log_level: str = "INFO"

    def __post_init__(self):
        if not 0 <= self.port <= 65535:
            raise ValueError(f"port out of range: {self.port}")
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive: {self.chunk_size}")

    @classmethod
    def from_env(cls, base_dir: Optional[str] = None, environ=None) -> "ServerConfig":
        """
        Build a config from VIDEOSHELF_* environment variables.
        Directories default to ./assets and ./dist under base_dir (cwd if omitted).
        """
        env = os.environ if environ is None else environ
        base_dir = os.path.abspath(base_dir or os.getcwd())

        def get(name: str, default: str) -> str:
            return env.get(ENV_PREFIX + name) or default

        return cls(
            assets_dir=os.path.abspath(get("ASSETS_DIR", os.path.join(base_dir, "assets"))),
            dist_dir=os.path.abspath(get("DIST_DIR", os.path.join(base_dir, "dist"))),
            host=get("HOST", "0.0.0.0"),
            port=int(get("PORT", str(DEFAULT_PORT))),
            chunk_size=int(get("CHUNK_SIZE", str(CHUNK_SIZE))),
            log_level=get("LOG_LEVEL", "INFO").upper(),
        )
