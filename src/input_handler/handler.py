"""
Main Input Handler Module.

This module provides the DocumentLoader class that serves as the main
interface for loading invoice documents (PDFs and photos) into the
payload sent to the extraction service.

Usage:
    from src.input_handler import DocumentLoader

    loader = DocumentLoader()
    payload = loader.load("invoice.pdf")

Classes:
    DocumentLoader: Loads and validates invoice documents
"""

import io
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from config import get_config
from src.model_inference.service import DocumentPayload
from src.utils.logger import get_logger
from src.utils.helpers import format_file_size, get_file_extension
from src.utils.exceptions import (
    InputError,
    UnsupportedFileTypeError,
    DocumentNotFoundError,
    CorruptedFileError
)

# Initialize module logger
logger = get_logger(__name__)

PDF_MEDIA_TYPE = "application/pdf"


class DocumentLoader:
    """
    Loader for invoice documents.

    The media type is the declared one when given, otherwise inferred
    from the file extension, otherwise sniffed from the content, and
    finally defaults to PDF.

    Attributes:
        supported_extensions: Set of supported file extensions
        default_media_type: Media type used when nothing else applies
        max_file_size: Largest accepted document, in bytes

    Example:
        >>> loader = DocumentLoader()
        >>> payload = loader.load("invoice.jpg")
        >>> payload.media_type
        'image/jpeg'
    """

    EXTENSION_MEDIA_TYPES = {
        '.pdf': PDF_MEDIA_TYPE,
        '.jpg': 'image/jpeg',
        '.jpeg': 'image/jpeg',
        '.png': 'image/png',
        '.webp': 'image/webp',
        '.tiff': 'image/tiff',
        '.tif': 'image/tiff',
        '.bmp': 'image/bmp',
    }

    # Pillow format names to media types
    IMAGE_FORMAT_MEDIA_TYPES = {
        'JPEG': 'image/jpeg',
        'PNG': 'image/png',
        'WEBP': 'image/webp',
        'TIFF': 'image/tiff',
        'BMP': 'image/bmp',
        'GIF': 'image/gif',
    }

    def __init__(self) -> None:
        """Initialize the DocumentLoader from configuration."""
        self.supported_extensions = {
            ext.lower() for ext in get_config(
                "input.supported_extensions",
                list(self.EXTENSION_MEDIA_TYPES)
            )
        }
        self.default_media_type = get_config("input.default_media_type", PDF_MEDIA_TYPE)
        self.max_file_size = int(float(get_config("input.max_file_size_mb", 20)) * 1024 * 1024)

        logger.debug(f"DocumentLoader initialized with extensions: {sorted(self.supported_extensions)}")

    def validate_file(self, filepath: Union[str, Path]) -> Path:
        """
        Validate that a file exists, is supported and has a usable size.

        Files without an extension are accepted; their type is sniffed.

        Raises:
            DocumentNotFoundError: If file doesn't exist.
            UnsupportedFileTypeError: If the extension is not supported.
            CorruptedFileError: If the file is empty or too large.
        """
        path = Path(filepath)

        if not path.exists():
            raise DocumentNotFoundError(str(filepath))

        if not path.is_file():
            raise InputError(f"Path is not a file: {filepath}")

        extension = get_file_extension(path)
        if extension and extension not in self.supported_extensions:
            raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))

        size = path.stat().st_size
        if size == 0:
            raise CorruptedFileError(str(filepath), "File is empty")
        if size > self.max_file_size:
            raise CorruptedFileError(
                str(filepath),
                f"File is {format_file_size(size)}, limit is {format_file_size(self.max_file_size)}"
            )

        return path

    def load(self, filepath: Union[str, Path], media_type: Optional[str] = None) -> DocumentPayload:
        """
        Load a document file.

        Args:
            filepath: Path to the document.
            media_type: Declared media type, if known.

        Returns:
            DocumentPayload with the file bytes and media type.
        """
        path = self.validate_file(filepath)

        try:
            data = path.read_bytes()
        except OSError as e:
            raise CorruptedFileError(str(filepath), str(e)) from e

        resolved = media_type or self.detect_media_type(path, data)

        logger.info(f"Loaded {path.name} ({format_file_size(len(data))}, {resolved})")
        return DocumentPayload(data=data, media_type=resolved, filename=path.name)

    def detect_media_type(self, filepath: Union[str, Path], data: bytes) -> str:
        """
        Infer a document's media type from its extension or content.

        Args:
            filepath: Path used for the extension lookup.
            data: Document bytes used for sniffing.

        Returns:
            Media type string.
        """
        by_extension = self.EXTENSION_MEDIA_TYPES.get(get_file_extension(filepath))
        if by_extension:
            return by_extension

        if data.startswith(b'%PDF'):
            return PDF_MEDIA_TYPE

        try:
            with Image.open(io.BytesIO(data)) as image:
                detected = self.IMAGE_FORMAT_MEDIA_TYPES.get(image.format)
        except (UnidentifiedImageError, OSError):
            detected = None

        if detected:
            logger.debug(f"Sniffed media type {detected} for {filepath}")
            return detected

        logger.debug(f"Could not determine media type of {filepath}; using {self.default_media_type}")
        return self.default_media_type
