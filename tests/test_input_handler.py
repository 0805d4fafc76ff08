"""Tests for the document loader."""

import pytest
from PIL import Image

from src.input_handler import DocumentLoader
from src.utils.exceptions import CorruptedFileError, DocumentNotFoundError, UnsupportedFileTypeError


@pytest.fixture
def loader():
    return DocumentLoader()


def test_load_pdf_by_extension(loader, tmp_path):
    path = tmp_path / "invoice.pdf"
    path.write_bytes(b"%PDF-1.4 test")

    payload = loader.load(path)

    assert payload.media_type == "application/pdf"
    assert payload.data == b"%PDF-1.4 test"
    assert payload.filename == "invoice.pdf"


def test_declared_media_type_wins(loader, tmp_path):
    path = tmp_path / "invoice.pdf"
    path.write_bytes(b"%PDF-1.4 test")

    assert loader.load(path, media_type="image/png").media_type == "image/png"


def test_image_extension(loader, tmp_path):
    path = tmp_path / "photo.JPG"
    Image.new("RGB", (4, 4), "white").save(path, format="JPEG")

    assert loader.load(path).media_type == "image/jpeg"


def test_sniffs_pdf_without_extension(loader, tmp_path):
    path = tmp_path / "upload"
    path.write_bytes(b"%PDF-1.7 body")

    assert loader.load(path).media_type == "application/pdf"


def test_sniffs_image_without_extension(loader, tmp_path):
    path = tmp_path / "upload"
    Image.new("RGB", (4, 4), "white").save(path, format="PNG")

    assert loader.load(path).media_type == "image/png"


def test_unknown_content_defaults_to_pdf(loader, tmp_path):
    path = tmp_path / "upload"
    path.write_bytes(b"plain bytes")

    assert loader.load(path).media_type == "application/pdf"


def test_missing_file(loader, tmp_path):
    with pytest.raises(DocumentNotFoundError):
        loader.load(tmp_path / "nope.pdf")


def test_unsupported_extension(loader, tmp_path):
    path = tmp_path / "invoice.docx"
    path.write_bytes(b"data")

    with pytest.raises(UnsupportedFileTypeError):
        loader.load(path)


def test_empty_file(loader, tmp_path):
    path = tmp_path / "invoice.pdf"
    path.write_bytes(b"")

    with pytest.raises(CorruptedFileError):
        loader.load(path)


def test_oversized_file(loader, tmp_path):
    path = tmp_path / "invoice.pdf"
    path.write_bytes(b"%PDF" + b"0" * 100)
    loader.max_file_size = 50

    with pytest.raises(CorruptedFileError):
        loader.load(path)
