"""
Extraction Pipeline

document bytes -> TextExtractor -> build_extraction_request
               -> LLMClient.generate -> ResponseValidator -> Profile

One sequential run per upload; collaborators are passed in, nothing is
module-global.
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional

from config import Settings
from schemas.profile import Profile
from schemas.profile_schema import PROFILE_RESPONSE_SCHEMA
from services.llm_client import LLMClient
from services.prompt_builder import build_extraction_request
from services.response_validator import ResponseValidator
from services.text_extractor import TextExtractor

logger = logging.getLogger(__name__)


class ExtractionPipeline:
    """Upload -> Profile"""

    def __init__(
        self,
        text_extractor: TextExtractor,
        llm_client: LLMClient,
        validator: ResponseValidator,
        response_schema: Optional[Dict[str, Any]] = None,
    ):
        self.text_extractor = text_extractor
        self.llm_client = llm_client
        self.validator = validator
        self.response_schema = response_schema or PROFILE_RESPONSE_SCHEMA

    async def extract(self, file_bytes: bytes, filename: str = "") -> Profile:
        """
        Run the whole pipeline for one document

        Raises:
            TextAcquisitionFailure, ProviderFailure, ExtractionFailure
        """
        start = time.perf_counter()

        # pdfplumber is CPU-bound
        extracted = await asyncio.to_thread(self.text_extractor.extract, file_bytes, filename)
        profile = await self.extract_from_text(extracted.text)

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            f"[Pipeline] ✅ {filename or 'upload'} done in {elapsed_ms}ms - "
            f"skills={len(profile.skills)}, experience={len(profile.experience)}, "
            f"projects={len(profile.projects)}, education={len(profile.education)}"
        )
        return profile

    async def extract_from_text(self, resume_text: str) -> Profile:
        request = build_extraction_request(resume_text)
        response = await self.llm_client.generate(
            request.system_instruction,
            request.user_text,
            self.response_schema,
        )
        return self.validator.validate(response.raw_response, source_text=resume_text)


def build_pipeline(settings: Settings) -> ExtractionPipeline:
    return ExtractionPipeline(
        text_extractor=TextExtractor(),
        llm_client=LLMClient.from_settings(settings),
        validator=ResponseValidator(),
    )
