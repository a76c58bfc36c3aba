"""
Tests: services/extraction_pipeline.py

Real TextExtractor / ResponseValidator, mocked LLMClient.
"""

import io
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from docx import Document

from config import LLMProviderName, Settings
from exceptions import ExtractionFailure, ProviderFailure, TextAcquisitionFailure
from schemas.profile_schema import PROFILE_RESPONSE_SCHEMA
from services.extraction_pipeline import ExtractionPipeline, build_pipeline
from services.llm_client import LLMClient, LLMResponse
from services.prompt_builder import PROFILE_EXTRACTION_PROMPT
from services.response_validator import ResponseValidator
from services.text_extractor import TextExtractor


def docx_bytes(*paragraphs) -> bytes:
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


def make_llm(raw_response=None, side_effect=None):
    llm = MagicMock(spec=LLMClient)
    llm.generate = AsyncMock(
        return_value=LLMResponse(
            provider=LLMProviderName.GEMINI,
            raw_response=raw_response,
            model="gemini-pro-latest",
        ),
        side_effect=side_effect,
    )
    return llm


def make_pipeline(llm):
    return ExtractionPipeline(
        text_extractor=TextExtractor(),
        llm_client=llm,
        validator=ResponseValidator(),
    )


class TestExtract:

    @pytest.mark.asyncio
    async def test_skills_only_document(self, empty_profile_dict):
        llm = make_llm(json.dumps({"skills": [{"name": "Go"}, {"name": "Rust"}]}))
        pipeline = make_pipeline(llm)

        profile = await pipeline.extract(docx_bytes("Skills: Go, Rust"), "resume.docx")

        expected = dict(empty_profile_dict, skills=[{"name": "Go"}, {"name": "Rust"}])
        assert profile.to_dict() == expected

    @pytest.mark.asyncio
    async def test_provider_called_once_with_prompt_text_and_schema(self):
        llm = make_llm("{}")
        pipeline = make_pipeline(llm)

        await pipeline.extract(docx_bytes("Jane Doe", "Skills: Go"), "resume.docx")

        llm.generate.assert_awaited_once()
        system_instruction, user_text, schema = llm.generate.call_args.args
        assert system_instruction == PROFILE_EXTRACTION_PROMPT
        assert user_text == "Jane Doe\nSkills: Go"
        assert schema is PROFILE_RESPONSE_SCHEMA

    @pytest.mark.asyncio
    async def test_document_without_sections_is_all_defaults(self, empty_profile_dict):
        pipeline = make_pipeline(make_llm("{}"))

        profile = await pipeline.extract(docx_bytes("Lorem ipsum dolor sit amet."), "notes.docx")

        assert profile.to_dict() == empty_profile_dict

    @pytest.mark.asyncio
    async def test_anchor_only_project_url_blanked(self):
        raw = json.dumps({"projects": [{"name": "Shopfront", "url": "https://shopfront.dev"}]})
        pipeline = make_pipeline(make_llm(raw))

        profile = await pipeline.extract(docx_bytes("Projects", "Shopfront - Live Demo | GitHub"), "r.docx")

        assert profile.projects[0].url == ""

    @pytest.mark.asyncio
    async def test_literal_project_url_kept(self):
        raw = json.dumps({"projects": [{"name": "Ledger", "url": "https://github.com/jane/ledger"}]})
        pipeline = make_pipeline(make_llm(raw))

        profile = await pipeline.extract(docx_bytes("Ledger https://github.com/jane/ledger"), "r.docx")

        assert profile.projects[0].url == "https://github.com/jane/ledger"


class TestFailures:

    @pytest.mark.asyncio
    async def test_unreadable_document(self):
        llm = make_llm("{}")

        with pytest.raises(TextAcquisitionFailure):
            await make_pipeline(llm).extract(b"\x00\x01binary", "resume.bin")

        llm.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_provider_failure_propagates(self):
        llm = make_llm(side_effect=ProviderFailure("quota exceeded"))

        with pytest.raises(ProviderFailure):
            await make_pipeline(llm).extract(docx_bytes("Skills: Go"), "r.docx")

        assert llm.generate.await_count == 1

    @pytest.mark.asyncio
    async def test_non_json_output(self):
        pipeline = make_pipeline(make_llm("Here is your resume JSON!"))

        with pytest.raises(ExtractionFailure) as exc_info:
            await pipeline.extract(docx_bytes("Skills: Go"), "r.docx")

        assert exc_info.value.raw_text == "Here is your resume JSON!"


class TestExtractFromText:

    @pytest.mark.asyncio
    async def test_empty_text_skips_provider(self):
        llm = make_llm("{}")

        with pytest.raises(TextAcquisitionFailure):
            await make_pipeline(llm).extract_from_text("   ")

        llm.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_full_sample(self, sample_resume_text, sample_profile_json, sample_profile_dict):
        pipeline = make_pipeline(make_llm(sample_profile_json))

        profile = await pipeline.extract_from_text(sample_resume_text)

        assert profile.to_dict() == sample_profile_dict
        assert "Skills" not in profile.basics.summary


class TestBuildPipeline:

    def test_wires_collaborators(self):
        settings = Settings(_env_file=None, GEMINI_API_KEY="k")

        with patch("services.llm_client.genai.Client"):
            pipeline = build_pipeline(settings)

        assert isinstance(pipeline.text_extractor, TextExtractor)
        assert isinstance(pipeline.validator, ResponseValidator)
        assert pipeline.llm_client.provider == LLMProviderName.GEMINI
        assert pipeline.response_schema is PROFILE_RESPONSE_SCHEMA

    def test_instances_not_shared(self):
        settings = Settings(_env_file=None)

        first = build_pipeline(settings)
        second = build_pipeline(settings)

        assert first.llm_client is not second.llm_client
