"""
Text Extractor - uploaded document -> plain text

- File type detection by magic number (PDF / DOCX), filename as fallback hint
- PDF: pdfplumber, page by page
- DOCX: python-docx paragraphs + table cells

No OCR: a PDF without a text layer is rejected.
"""

import io
import logging
import re
import unicodedata
import zipfile
from dataclasses import dataclass
from enum import Enum

import pdfplumber
from docx import Document

from exceptions import TextAcquisitionFailure

logger = logging.getLogger(__name__)

# pdfminer is very chatty about malformed fonts / CropBox
logging.getLogger("pdfminer").setLevel(logging.ERROR)

_CID_RE = re.compile(r"\(cid:\d+\)")


class FileType(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    UNKNOWN = "unknown"


@dataclass
class TextExtractionResult:
    text: str
    file_type: FileType
    method: str  # "pdfplumber", "python-docx"
    page_count: int


class TextExtractor:
    """Binary document -> text"""

    MAGIC_NUMBERS = {
        b'%PDF': FileType.PDF,
        b'PK\x03\x04': FileType.DOCX,  # zip container, checked further below
    }

    # DOCX page count is estimated from length
    CHARS_PER_PAGE = 2000

    def extract(self, file_bytes: bytes, filename: str = "") -> TextExtractionResult:
        """
        Extract text from a PDF or DOCX upload

        Raises:
            TextAcquisitionFailure: unsupported format, corrupt/encrypted
                file, or no text layer
        """
        file_type = self.detect_file_type(file_bytes, filename)

        if file_type == FileType.PDF:
            result = self._extract_pdf(file_bytes)
        elif file_type == FileType.DOCX:
            result = self._extract_docx(file_bytes)
        else:
            raise TextAcquisitionFailure(
                "Unsupported document format (PDF and DOCX only)",
                details={"filename": filename},
            )

        result.text = self._clean_text(result.text)
        if not result.text:
            raise TextAcquisitionFailure(
                "No text could be extracted from the document. It may be a scanned image.",
                details={"file_type": file_type.value, "page_count": result.page_count},
            )

        logger.info(
            f"[TextExtractor] {filename or 'upload'}: {file_type.value}, "
            f"{result.page_count} pages, {len(result.text)} chars"
        )
        return result

    def detect_file_type(self, file_bytes: bytes, filename: str = "") -> FileType:
        header = file_bytes[:4]
        for magic, file_type in self.MAGIC_NUMBERS.items():
            if header.startswith(magic):
                if file_type == FileType.DOCX and not self._is_docx_container(file_bytes):
                    return FileType.UNKNOWN
                return file_type

        # Some PDF writers put junk before the header
        if b'%PDF' in file_bytes[:1024]:
            return FileType.PDF

        ext = filename.lower().rsplit('.', 1)[-1] if '.' in filename else ''
        if ext == 'pdf' and file_bytes:
            logger.warning(f"[TextExtractor] {filename}: no PDF signature, trying anyway")
            return FileType.PDF
        return FileType.UNKNOWN

    def _is_docx_container(self, file_bytes: bytes) -> bool:
        try:
            with zipfile.ZipFile(io.BytesIO(file_bytes)) as zf:
                return "word/document.xml" in zf.namelist()
        except zipfile.BadZipFile:
            return False

    def _extract_pdf(self, file_bytes: bytes) -> TextExtractionResult:
        try:
            with pdfplumber.open(io.BytesIO(file_bytes)) as pdf:
                page_count = len(pdf.pages)
                texts = []
                for i, page in enumerate(pdf.pages):
                    try:
                        texts.append(page.extract_text() or "")
                    except Exception as e:
                        logger.warning(f"[TextExtractor] Failed to extract text from page {i + 1}: {e}")
                        texts.append("")
        except Exception as e:
            if "encrypted" in str(e).lower() or "password" in str(e).lower():
                raise TextAcquisitionFailure(
                    "The PDF is encrypted. Remove the password and upload it again.",
                    details={"file_type": FileType.PDF.value},
                ) from e
            logger.error(f"[TextExtractor] PDF parsing failed: {e}")
            raise TextAcquisitionFailure(
                "The PDF could not be read",
                details={"file_type": FileType.PDF.value, "reason": str(e)},
            ) from e

        return TextExtractionResult(
            text="\n\n".join(texts),
            file_type=FileType.PDF,
            method="pdfplumber",
            page_count=page_count,
        )

    def _extract_docx(self, file_bytes: bytes) -> TextExtractionResult:
        try:
            doc = Document(io.BytesIO(file_bytes))
        except Exception as e:
            logger.error(f"[TextExtractor] DOCX parsing failed: {e}")
            raise TextAcquisitionFailure(
                "The DOCX file could not be read",
                details={"file_type": FileType.DOCX.value, "reason": str(e)},
            ) from e

        texts = [para.text for para in doc.paragraphs if para.text.strip()]

        for table in doc.tables:
            for row in table.rows:
                row_texts = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if row_texts:
                    texts.append(' | '.join(row_texts))

        combined_text = '\n'.join(texts)
        return TextExtractionResult(
            text=combined_text,
            file_type=FileType.DOCX,
            method="python-docx",
            page_count=max(1, len(combined_text) // self.CHARS_PER_PAGE),
        )

    def _clean_text(self, text: str) -> str:
        """NFC normalize, drop (cid:N) glyph artifacts, squeeze blank runs"""
        if not text:
            return ""
        t = unicodedata.normalize("NFC", text)
        t = _CID_RE.sub("", t)
        t = re.sub(r"[ \t]+", " ", t)
        t = re.sub(r"\n\s*\n\s*\n", "\n\n", t)
        return t.strip()
