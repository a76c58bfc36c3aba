# Services Package
from .text_extractor import TextExtractor, TextExtractionResult, FileType
from .prompt_builder import build_extraction_request, ExtractionRequest, PROFILE_EXTRACTION_PROMPT
from .llm_client import LLMClient, LLMResponse
from .response_validator import ResponseValidator
from .extraction_pipeline import ExtractionPipeline, build_pipeline
from .share_store import ShareStore, ShareRecord, generate_share_id

__all__ = [
    "TextExtractor",
    "TextExtractionResult",
    "FileType",
    "build_extraction_request",
    "ExtractionRequest",
    "PROFILE_EXTRACTION_PROMPT",
    "LLMClient",
    "LLMResponse",
    "ResponseValidator",
    "ExtractionPipeline",
    "build_pipeline",
    "ShareStore",
    "ShareRecord",
    "generate_share_id",
]
