"""Tests for filesystem.py, the fsspec integration."""

import fsspec
import pytest

from damedia.config import DamConfig
from damedia.errors import FetchFailure, InvalidMode, UnsupportedOperation
from damedia.filesystem import DamFileSystem, register


@pytest.fixture
def fs(config, http_client):
    return DamFileSystem(config=config, http_client=http_client)


class TestOpen:
    """Test opening files through the filesystem."""

    def test_read_binary(self, fs, http_client) -> None:
        with fs.open("damedia://images/photo.jpg", "rb") as f:
            assert f.read() == b"hello world"

        http_client.get.assert_called_once_with("http://host/files/images/photo.jpg")

    def test_read_text(self, fs) -> None:
        with fs.open("damedia://images/notes.txt", "r") as f:
            assert f.read() == "hello world"

    def test_path_without_protocol(self, fs, http_client) -> None:
        with fs.open("images/photo.jpg", "rb") as f:
            f.read()

        http_client.get.assert_called_once_with("http://host/files/images/photo.jpg")

    def test_write_mode_rejected(self, fs, http_client) -> None:
        """Test that writing raises before any HTTP call."""
        with pytest.raises(InvalidMode):
            fs.open("damedia://images/photo.jpg", "wb")

        http_client.get.assert_not_called()

    def test_missing_file(self, fs, http_client) -> None:
        http_client.get.side_effect = FetchFailure("http://host/files/nope.jpg", 404)

        with pytest.raises(FileNotFoundError):
            fs.open("damedia://nope.jpg", "rb")

    def test_cat_file(self, fs) -> None:
        assert fs.cat_file("damedia://images/photo.jpg") == b"hello world"


class TestInfo:
    """Test info/exists/size built on stat."""

    def test_info(self, fs, http_client) -> None:
        http_client.head.return_value = {"Content-Length": "99"}

        info = fs.info("damedia://images/photo.jpg")

        assert info["name"] == "images/photo.jpg"
        assert info["size"] == 99
        assert info["type"] == "file"
        http_client.get.assert_not_called()

    def test_size_and_isfile(self, fs) -> None:
        assert fs.size("damedia://images/photo.jpg") == 11
        assert fs.isfile("damedia://images/photo.jpg")

    def test_missing(self, fs, http_client) -> None:
        http_client.head.side_effect = FetchFailure("http://host/files/x.jpg")
        http_client.get.side_effect = FetchFailure("http://host/files/x.jpg")

        with pytest.raises(FileNotFoundError):
            fs.info("damedia://x.jpg")
        assert fs.exists("damedia://x.jpg") is False


class TestNamespace:
    """Test unsupported directory operations and no-op delete."""

    def test_rm_is_noop(self, fs, http_client) -> None:
        fs.rm("damedia://images/photo.jpg")
        fs.rm_file("damedia://images/photo.jpg")

        http_client.get.assert_not_called()
        http_client.post.assert_not_called()

    @pytest.mark.parametrize(
        "call",
        [
            lambda fs: fs.ls("damedia://images"),
            lambda fs: fs.mkdir("damedia://images/new"),
            lambda fs: fs.makedirs("damedia://images/new"),
            lambda fs: fs.rmdir("damedia://images"),
            lambda fs: fs.mv("damedia://a.jpg", "damedia://b.jpg"),
            lambda fs: fs.cp_file("damedia://a.jpg", "damedia://b.jpg"),
        ],
    )
    def test_unsupported(self, fs, call) -> None:
        with pytest.raises(UnsupportedOperation):
            call(fs)

    def test_strip_protocol(self) -> None:
        assert DamFileSystem._strip_protocol("damedia://images/a.jpg/") == "images/a.jpg"
        assert DamFileSystem._strip_protocol(["damedia://a", "damedia:///b"]) == [
            "a",
            "b",
        ]


class TestRegister:
    """Test registration with fsspec."""

    def test_register_default_scheme(self, config, http_client) -> None:
        cls = register(config)

        fs = fsspec.filesystem("damedia", http_client=http_client)

        assert isinstance(fs, cls)
        assert isinstance(fs, DamFileSystem)
        assert fs.config is config

    def test_fsspec_open(self, config, http_client) -> None:
        register(config)

        with fsspec.open("damedia://images/photo.jpg", "rb", http_client=http_client) as f:
            assert f.read() == b"hello world"

    def test_custom_scheme(self, http_client) -> None:
        config = DamConfig(scheme="dam", base_url="http://cdn/")
        register(config)

        with fsspec.open("dam://a/b.jpg", "rb", http_client=http_client) as f:
            f.read()

        http_client.get.assert_called_once_with("http://cdn/a/b.jpg")

    def test_not_cached(self, config, http_client) -> None:
        """Test that each call builds a fresh filesystem with its own client."""
        register(config)

        first = fsspec.filesystem("damedia", http_client=http_client)
        second = fsspec.filesystem("damedia", http_client=http_client)

        assert first is not second
