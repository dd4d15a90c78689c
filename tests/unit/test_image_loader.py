from pathlib import Path

import pytest

from billboard_reporter.processor.exceptions import UnsupportedImageTypeError
from billboard_reporter.processor.image_loader import ImageLoader


class TestLoadReturnsBytes:
    def test_returns_file_bytes(self, image_file: Path) -> None:
        assert ImageLoader().load(image_file) == image_file.read_bytes()

    def test_suffix_is_case_insensitive(self, tmp_path: Path) -> None:
        path = tmp_path / "PHOTO.JPG"
        path.write_bytes(b"\xff\xd8\xff")
        assert ImageLoader().load(path) == b"\xff\xd8\xff"


class TestLoadRaises:
    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        with pytest.raises(UnsupportedImageTypeError, match=".txt"):
            ImageLoader().load(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="missing.png"):
            ImageLoader().load(tmp_path / "missing.png")

    def test_directory_is_not_an_image(self, tmp_path: Path) -> None:
        folder = tmp_path / "album.png"
        folder.mkdir()
        with pytest.raises(FileNotFoundError):
            ImageLoader().load(folder)
