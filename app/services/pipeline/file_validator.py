"""Resume upload validation."""

from pathlib import PurePath
from typing import Dict, Optional, Set
import logging

from app.core.config import settings
from app.core.exceptions import InvalidInterviewRequestError


class FileValidator:
    """
    Validates uploaded resume files before they are sent to the model.

    Checks size (non-empty, under the configured limit), extension, and that
    the leading bytes match the extension. The file is never written to disk.
    """

    VALID_EXTENSIONS: Set[str] = {'.pdf', '.txt', '.doc', '.docx'}

    # Magic bytes for content sniffing
    MIME_SIGNATURES: Dict[str, bytes] = {
        '.pdf': b'%PDF',
        '.doc': b'\xd0\xcf\x11\xe0',  # OLE Compound Document
        '.docx': b'PK\x03\x04',        # ZIP (Office Open XML)
    }

    def __init__(self, logger: logging.Logger = None, max_size_mb: Optional[int] = None):
        self.logger = logger or logging.getLogger(__name__)
        size_mb = max_size_mb if max_size_mb is not None else settings.MAX_FILE_SIZE_MB
        self.max_file_size_bytes = size_mb * 1024 * 1024

    def validate(self, filename: Optional[str], content: bytes) -> None:
        """
        Validate an uploaded resume.

        Args:
            filename: Client-supplied filename, used for the extension only
            content: Raw file bytes

        Raises:
            InvalidInterviewRequestError: If the file is empty, too large, or not a supported document
        """
        if not content:
            raise InvalidInterviewRequestError("Resume file is empty")

        if len(content) > self.max_file_size_bytes:
            max_mb = self.max_file_size_bytes / (1024 * 1024)
            actual_mb = len(content) / (1024 * 1024)
            raise InvalidInterviewRequestError(
                f"Resume file too large: {actual_mb:.1f}MB exceeds {max_mb:.0f}MB limit"
            )

        extension = PurePath(filename or "").suffix.lower()
        if extension not in self.VALID_EXTENSIONS:
            raise InvalidInterviewRequestError(
                f"Invalid file extension: {extension or '(none)'}. "
                f"Supported: {', '.join(sorted(self.VALID_EXTENSIONS))}"
            )

        expected_signature = self.MIME_SIGNATURES.get(extension)
        if expected_signature is not None and not content.startswith(expected_signature):
            raise InvalidInterviewRequestError(
                f"File content does not match {extension} format. "
                f"File may be corrupted or have wrong extension."
            )

        self.logger.info(f"Resume validation passed: {filename} ({len(content) / 1024:.1f}KB)")
