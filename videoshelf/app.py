"""
app.py

Flask backend for the videoshelf local media server.

Routes:
- /api/videos
- /videos/<filename>   (Range-aware streaming)
- static frontend served from the dist directory, with SPA fallback to index.html

Notes:
- Configuration comes from a ServerConfig passed to create_app().
- Run with `videoshelf` or `python -m videoshelf`.
"""

import argparse
import logging
import os
from dataclasses import replace
from typing import List, Optional

from flask import Flask, Response, current_app, jsonify, request, send_from_directory
from flask_cors import CORS

from .config import ServerConfig
from .utils.media import ResourceNotFoundError, list_videos, video_path
from .utils.streamer import handle_stream_request

logger = logging.getLogger("videoshelf")

FRONTEND_MISSING_MESSAGE = (
    "Frontend build not found. Please run 'npm run build'. "
    "If you are in development, you should run 'npm run dev' and access the app via Vite's dev server."
)


def _config() -> ServerConfig:
    return current_app.config["VIDEOSHELF"]


def _plain(text: str, status: int) -> Response:
    return Response(text, status=status, mimetype="text/plain")


# -------------------------
# API: Video listing
# -------------------------
def api_videos():
    """
    Return the video files in the assets directory as a JSON array of names.
    """
    config = _config()
    try:
        videos = list_videos(config.assets_dir, config.video_extensions)
    except OSError as e:
        logger.exception("Could not list the directory %s: %s", config.assets_dir, e)
        return jsonify({"message": "Could not list the videos"}), 500
    return jsonify(videos)


# -------------------------
# Video streaming (Range support)
# -------------------------
def stream_video(filename):
    """
    Stream a video from the assets directory.
    Honors a single `Range: bytes=start-end` header (206), rejects
    unusable ranges with 416 and serves the whole file otherwise (200).
    """
    config = _config()
    try:
        path = video_path(config, filename)
        return handle_stream_request(
            path,
            request.headers.get("Range"),
            chunk_size=config.chunk_size,
            mime_types=config.mime_types,
            default_mime_type=config.default_mime_type,
        )
    except ResourceNotFoundError:
        return _plain("Video not found", 404)
    except OSError as e:
        logger.exception("Could not open %s: %s", filename, e)
        return _plain("Could not read video", 500)


# -------------------------
# Frontend static serving
# -------------------------
def serve_frontend(path):
    """
    Serve frontend static files. If path not found, serve index.html.
    """
    dist_dir = _config().dist_dir
    if path and os.path.isfile(os.path.join(dist_dir, path)):
        return send_from_directory(dist_dir, path)
    if os.path.isfile(os.path.join(dist_dir, "index.html")):
        return send_from_directory(dist_dir, "index.html")
    return _plain(FRONTEND_MISSING_MESSAGE, 404)


def create_app(config: Optional[ServerConfig] = None) -> Flask:
    """Build the Flask app for `config` (read from the environment when omitted)."""
    config = config or ServerConfig.from_env()

    # Static files go through serve_frontend so the SPA fallback sees every path.
    app = Flask(__name__, static_folder=None)
    app.config["VIDEOSHELF"] = config
    CORS(
        app,
        resources={r"/api/*": {"origins": "*"}, r"/videos/*": {"origins": "*"}},
        allow_headers=["Range", "Content-Type"],
        expose_headers=["Content-Range", "Accept-Ranges", "Content-Length"],
    )

    app.add_url_rule("/api/videos", "api_videos", api_videos)
    app.add_url_rule("/videos/<filename>", "stream_video", stream_video)
    app.add_url_rule("/", "serve_frontend", serve_frontend, defaults={"path": ""})
    app.add_url_rule("/<path:path>", "serve_frontend", serve_frontend)
    return app


# -------------------------
# Run (development)
# -------------------------
def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve local videos with HTTP Range support.")
    parser.add_argument("--assets-dir", help="Directory holding the video files")
    parser.add_argument("--dist-dir", help="Directory holding the built frontend")
    parser.add_argument("--host", help="Bind address")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    config = ServerConfig.from_env()
    overrides = {
        "assets_dir": os.path.abspath(args.assets_dir) if args.assets_dir else None,
        "dist_dir": os.path.abspath(args.dist_dir) if args.dist_dir else None,
        "host": args.host,
        "port": args.port,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})

    logging.basicConfig(level=logging.DEBUG if args.debug else config.log_level)
    app = create_app(config)

    logger.info("Server is running and accessible from your local network.")
    logger.info("- On this computer: http://localhost:%d", config.port)
    logger.info("- On other devices: Find this computer's IP address and open http://<YOUR_IP_ADDRESS>:%d",
                config.port)
    logger.info("Serving videos from %s", config.assets_dir)
    app.run(host=config.host, port=config.port, debug=args.debug, threaded=True)


if __name__ == "__main__":
    main()
