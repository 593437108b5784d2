"""
Document Decoder - Converts uploaded resume files to plain text.
Supports PDF, DOCX, legacy DOC and plain text.
"""

from typing import Callable
import io
import logging

from .errors import FormatDecodeError, UnsupportedFormat
from .models import UploadedFile


PDF = "pdf"
DOCX = "docx"
DOC = "doc"
TXT = "txt"


class DocumentDecoder:
    """Dispatches a file to the right text extractor by MIME type or extension."""

    MIME_TYPES = {
        "application/pdf": PDF,
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document": DOCX,
        "application/msword": DOC,
        "text/plain": TXT,
    }

    EXTENSIONS = {
        ".pdf": PDF,
        ".docx": DOCX,
        ".doc": DOC,
        ".txt": TXT,
    }

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)
        self._handlers: dict[str, Callable[[bytes], str]] = {
            PDF: self._decode_pdf,
            DOCX: self._decode_docx,
            DOC: self._decode_doc,
            TXT: self._decode_text,
        }

    def detect_format(self, file: UploadedFile) -> str:
        """Return the format key for a file, MIME type first, then extension."""
        fmt = self.MIME_TYPES.get(file.content_type.lower().strip())
        if fmt is None:
            fmt = self.EXTENSIONS.get(file.extension)
        if fmt is None:
            raise UnsupportedFormat()
        return fmt

    def is_supported(self, file: UploadedFile) -> bool:
        try:
            self.detect_format(file)
        except UnsupportedFormat:
            return False
        return True

    @classmethod
    def supported_extensions(cls) -> list[str]:
        return list(cls.EXTENSIONS)

    def decode(self, file: UploadedFile) -> str:
        """Decode a file to plain text.

        Raises:
            UnsupportedFormat: neither the MIME type nor the extension is known.
            FormatDecodeError: the extractor failed; the original exception
                is chained as ``__cause__``.
        """
        fmt = self.detect_format(file)
        self.logger.debug(f"Decoding {file.filename or '<unnamed>'} as {fmt}")

        try:
            return self._handlers[fmt](file.content)
        except FormatDecodeError:
            raise
        except Exception as e:
            raise FormatDecodeError(f"Could not read {fmt.upper()} file: {e}") from e

    def _decode_pdf(self, content: bytes) -> str:
        """Extract embedded text from a PDF with pdfplumber."""
        import pdfplumber

        pages = []
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            for page in pdf.pages:
                pages.append(page.extract_text() or "")
        return "\n".join(pages)

    def _decode_docx(self, content: bytes) -> str:
        """Extract paragraph and table text from a DOCX file."""
        from docx import Document

        doc = Document(io.BytesIO(content))
        lines = [para.text for para in doc.paragraphs]

        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    lines.append(" | ".join(cells))

        return "\n".join(lines)

    def _decode_doc(self, content: bytes) -> str:
        # Legacy binary .doc is only readable when it is really OOXML underneath
        try:
            return self._decode_docx(content)
        except Exception as e:
            raise FormatDecodeError(
                "Legacy .doc files could not be read. "
                "Please convert the file to PDF or DOCX and upload it again."
            ) from e

    def _decode_text(self, content: bytes) -> str:
        return content.decode("utf-8", errors="replace")
