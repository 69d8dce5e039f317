"""Tests for media resolution helpers."""

import pytest

from videoshelf.config import ServerConfig
from videoshelf.utils.media import (
    ResourceNotFoundError,
    content_type_for,
    describe_resource,
    is_video_file,
    list_videos,
    video_path,
)


def test_content_type_for():
    assert content_type_for("a.mp4") == "video/mp4"
    assert content_type_for("a.WEBM") == "video/webm"
    assert content_type_for("a.mkv") == "video/x-matroska"
    assert content_type_for("a.unknown") == "video/mp4"
    assert content_type_for("noext") == "video/mp4"


def test_is_video_file():
    assert is_video_file("movie.MOV")
    assert is_video_file("movie.ogg")
    assert not is_video_file("movie.txt")
    assert not is_video_file("mp4")


def test_describe_resource(tmp_path):
    path = tmp_path / "clip.ogg"
    path.write_bytes(b"x" * 42)
    res = describe_resource(str(path))
    assert res.name == "clip.ogg"
    assert res.size == 42
    assert res.content_type == "video/ogg"


def test_describe_missing(tmp_path):
    with pytest.raises(ResourceNotFoundError):
        describe_resource(str(tmp_path / "nope.mp4"))


def test_video_path(tmp_path):
    config = ServerConfig(assets_dir=str(tmp_path), dist_dir=str(tmp_path))
    assert video_path(config, "clip.mp4") == str(tmp_path / "clip.mp4")
    with pytest.raises(ResourceNotFoundError):
        video_path(config, "clip.exe")
    with pytest.raises(ResourceNotFoundError):
        video_path(config, "../clip.mp4")


def test_list_videos(tmp_path):
    for name in ("b.mkv", "a.mp4", "c.txt"):
        (tmp_path / name).write_bytes(b"")
    assert list_videos(str(tmp_path)) == ["a.mp4", "b.mkv"]


def test_list_videos_creates_dir(tmp_path):
    target = tmp_path / "assets"
    assert list_videos(str(target)) == []
    assert target.is_dir()


def test_null_byte_names_not_found(tmp_path):
    config = ServerConfig(assets_dir=str(tmp_path), dist_dir=str(tmp_path))
    with pytest.raises(ResourceNotFoundError):
        video_path(config, "a\x00.mp4")
    with pytest.raises(ResourceNotFoundError):
        describe_resource(str(tmp_path / "a\x00.mp4"))
