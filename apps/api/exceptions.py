"""
API Exception Hierarchy

One base class + ErrorCode Enum. Each failure class pins its own
ErrorCode and HTTP status so the exception handler in main.py only has
to call to_dict().

Hierarchy:
    AppError (base)
    ├── NoDocumentProvided       400
    ├── DocumentTooLarge         413
    ├── TextAcquisitionFailure   422
    ├── ProviderFailure          502
    ├── ExtractionFailure        500
    ├── ShareNotFound            404
    ├── ShareCreationFailure     503
    └── ShareLookupFailure       503

Every failure is terminal for the request. Nothing here is retried.

Usage:
    raise ProviderFailure(
        "Gemini request failed",
        details={"provider": "gemini", "reason": str(e)}
    )

    try:
        profile = await pipeline.extract(file_bytes, filename)
    except AppError as e:
        logger.warning(f"Extraction failed [{e.code}]: {e.message}")
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in the error body"""
    # ─────────────────────────────────────────────────
    # Extraction
    # ─────────────────────────────────────────────────
    NO_DOCUMENT = "NO_DOCUMENT"
    DOCUMENT_TOO_LARGE = "DOCUMENT_TOO_LARGE"
    TEXT_ACQUISITION_FAILED = "TEXT_ACQUISITION_FAILED"
    PROVIDER_FAILED = "PROVIDER_FAILED"
    EXTRACTION_FAILED = "EXTRACTION_FAILED"

    # ─────────────────────────────────────────────────
    # Share links
    # ─────────────────────────────────────────────────
    SHARE_NOT_FOUND = "SHARE_NOT_FOUND"
    SHARE_CREATION_FAILED = "SHARE_CREATION_FAILED"
    SHARE_LOOKUP_FAILED = "SHARE_LOOKUP_FAILED"

    # ─────────────────────────────────────────────────
    # Other
    # ─────────────────────────────────────────────────
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppError(Exception):
    """
    Base API exception

    Subclasses set `default_code` and `status_code`; callers supply the
    message and optional diagnostic details.
    """

    default_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"code={self.code.value}, "
            f"status={self.status_code}, "
            f"message='{self.message[:50]}')"
        )

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Response body: {error, code, details?}"""
        body: Dict[str, Any] = {
            "error": self.message,
            "code": self.code.value,
        }
        if self.details:
            body["details"] = self.details
        return body


class NoDocumentProvided(AppError):
    """Extraction requested without an attached file"""
    default_code = ErrorCode.NO_DOCUMENT
    status_code = 400


class DocumentTooLarge(AppError):
    default_code = ErrorCode.DOCUMENT_TOO_LARGE
    status_code = 413


class TextAcquisitionFailure(AppError):
    """The uploaded binary could not be decoded to text"""
    default_code = ErrorCode.TEXT_ACQUISITION_FAILED
    status_code = 422


class ProviderFailure(AppError):
    """The extraction call itself failed (network, auth, quota, schema rejection)"""
    default_code = ErrorCode.PROVIDER_FAILED
    status_code = 502


class ExtractionFailure(AppError):
    """
    Provider output could not be turned into a profile

    `raw_text` is kept on the exception for logging only; it is never
    part of to_dict().
    """
    default_code = ErrorCode.EXTRACTION_FAILED
    status_code = 500

    def __init__(
        self,
        message: str,
        raw_text: str = "",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details=details)
        self.raw_text = raw_text


class ShareNotFound(AppError):
    default_code = ErrorCode.SHARE_NOT_FOUND
    status_code = 404


class ShareCreationFailure(AppError):
    """Share write failed (store unavailable or id collisions exhausted)"""
    default_code = ErrorCode.SHARE_CREATION_FAILED
    status_code = 503


class ShareLookupFailure(AppError):
    """Share read failed because the store was unreachable"""
    default_code = ErrorCode.SHARE_LOOKUP_FAILED
    status_code = 503


# Export public API
__all__ = [
    'AppError',
    'ErrorCode',
    'NoDocumentProvided',
    'DocumentTooLarge',
    'TextAcquisitionFailure',
    'ProviderFailure',
    'ExtractionFailure',
    'ShareNotFound',
    'ShareCreationFailure',
    'ShareLookupFailure',
]
