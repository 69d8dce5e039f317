"""Tests for ServerConfig."""

import os

import pytest

from videoshelf.config import CHUNK_SIZE, DEFAULT_PORT, MIME_TYPES, ServerConfig


class TestServerConfig:

    def test_defaults_from_empty_env(self, tmp_path):
        config = ServerConfig.from_env(str(tmp_path), environ={})
        assert config.assets_dir == os.path.join(str(tmp_path), "assets")
        assert config.dist_dir == os.path.join(str(tmp_path), "dist")
        assert config.host == "0.0.0.0"
        assert config.port == DEFAULT_PORT == 1234
        assert config.chunk_size == CHUNK_SIZE
        assert config.default_mime_type == "video/mp4"
        assert config.mime_types == MIME_TYPES

    def test_env_overrides(self, tmp_path):
        env = {
            "VIDEOSHELF_ASSETS_DIR": str(tmp_path / "media"),
            "VIDEOSHELF_DIST_DIR": str(tmp_path / "web"),
            "VIDEOSHELF_HOST": "127.0.0.1",
            "VIDEOSHELF_PORT": "8080",
            "VIDEOSHELF_CHUNK_SIZE": "4096",
            "VIDEOSHELF_LOG_LEVEL": "debug",
        }
        config = ServerConfig.from_env(str(tmp_path), environ=env)
        assert config.assets_dir == str(tmp_path / "media")
        assert config.dist_dir == str(tmp_path / "web")
        assert config.host == "127.0.0.1"
        assert config.port == 8080
        assert config.chunk_size == 4096
        assert config.log_level == "DEBUG"

    def test_invalid_port(self, tmp_path):
        with pytest.raises(ValueError):
            ServerConfig.from_env(str(tmp_path), environ={"VIDEOSHELF_PORT": "abc"})
        with pytest.raises(ValueError):
            ServerConfig(assets_dir="a", dist_dir="d", port=70000)

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            ServerConfig(assets_dir="a", dist_dir="d", chunk_size=0)

    def test_mime_table_is_per_instance(self):
        a = ServerConfig(assets_dir="a", dist_dir="d")
        b = ServerConfig(assets_dir="a", dist_dir="d")
        assert a.mime_types is not b.mime_types
