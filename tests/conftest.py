"""Shared fixtures: a temporary assets/dist layout and a Flask test client."""

import pytest

from videoshelf import ServerConfig, create_app

CLIP = bytes(i % 251 for i in range(1000))


@pytest.fixture
def media_dirs(tmp_path):
    assets = tmp_path / "assets"
    dist = tmp_path / "dist"
    assets.mkdir()
    dist.mkdir()
    (assets / "clip.mp4").write_bytes(CLIP)
    return assets, dist


@pytest.fixture
def config(media_dirs):
    assets, dist = media_dirs
    return ServerConfig(assets_dir=str(assets), dist_dir=str(dist), chunk_size=64)


@pytest.fixture
def client(config):
    app = create_app(config)
    app.testing = True
    with app.test_client() as c:
        yield c


@pytest.fixture
def clip_bytes():
    return CLIP
