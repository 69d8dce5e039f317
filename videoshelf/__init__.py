"""videoshelf - serve a folder of videos to the browser with HTTP Range support."""

from .app import create_app, main
from .config import ServerConfig

__all__ = ["create_app", "main", "ServerConfig"]

__version__ = "0.1.0"
