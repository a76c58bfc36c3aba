"""
Response Validator - raw provider text -> Profile

1. json.loads (no fence stripping, no repair)
2. must be a JSON object
3. Profile.model_validate: missing/null -> defaults, unknown keys dropped
4. evidence guard against the source text:
   - projects[].url must be a literal URL present in the text
   - basics.summary is cut at a leaked Skills/Experience header
"""

import json
import logging
import re
from typing import Optional, Set

from pydantic import ValidationError

from exceptions import ExtractionFailure
from schemas.profile import Profile

logger = logging.getLogger(__name__)

# Raw output kept in logs, never in responses
RAW_LOG_LIMIT = 1000

# "github.com/user/repo", "https://x.dev/demo" - link text like "Live Demo" never matches
URL_LIKE_PATTERN = re.compile(
    r'^(?:https?://)?(?:www\.)?[a-z0-9-]+(?:\.[a-z0-9-]+)+(?::\d+)?(?:[/?#]\S*)?$',
    re.IGNORECASE
)

# URLs as they appear in running text (with or without scheme); the
# lookbehind keeps the domain half of an email address out
URL_IN_TEXT_PATTERN = re.compile(
    r'(?<![\w@.-])(?:https?://)?(?:www\.)?[a-z0-9-]+(?:\.[a-z0-9-]+)+(?::\d+)?'
    r'(?:[/?#][^\s<>"\')\]}|,]*)?',
    re.IGNORECASE
)

_HEADER = r'(?:technical|core|key)\s+skills|skills|(?:work|professional)\s+experience|experience'
_MULTI_WORD_HEADER = r'(?:technical|core|key)\s+skills|(?:work|professional)\s+experience'

SECTION_HEADER_PATTERNS = [
    # after a sentence or separator: "APIs. Skills: Go", "...\nExperience\n..."
    re.compile(
        rf'(?:^|(?<=[\n.!?•|]))\s*(?P<header>{_HEADER})\s*(?::|\n|$)',
        re.IGNORECASE
    ),
    # joined with a plain space: "APIs Skills: Go"
    re.compile(rf'(?<=\s)(?P<header>{_HEADER})[ \t]*:', re.IGNORECASE),
    # "Technical Skills" / "Work Experience" before ":" or a line break
    re.compile(rf'\b(?P<header>{_MULTI_WORD_HEADER})[ \t]*(?::|\n)', re.IGNORECASE),
]


class ResponseValidator:
    """Turns provider output into a total Profile or raises ExtractionFailure"""

    def validate(self, raw_text: str, source_text: Optional[str] = None) -> Profile:
        """
        Parse and normalize provider output

        Args:
            raw_text: provider response text
            source_text: document text; enables the evidence guard

        Raises:
            ExtractionFailure: not JSON, not an object, or not coercible
        """
        try:
            parsed = json.loads(raw_text)
        except (json.JSONDecodeError, TypeError) as e:
            self._log_raw("JSON parse failed", raw_text, e)
            raise ExtractionFailure(
                "The extraction provider returned invalid JSON",
                raw_text=raw_text or "",
                details={"parse_error": str(e)},
            ) from e

        if not isinstance(parsed, dict):
            self._log_raw("Top-level value is not an object", raw_text)
            raise ExtractionFailure(
                "The extraction provider returned JSON that is not an object",
                raw_text=raw_text,
                details={"parse_error": f"expected object, got {type(parsed).__name__}"},
            )

        try:
            profile = Profile.model_validate(parsed)
        except ValidationError as e:
            self._log_raw("Schema validation failed", raw_text, e)
            raise ExtractionFailure(
                "The extraction provider returned data that does not match the profile schema",
                raw_text=raw_text,
                details={
                    "parse_error": "schema mismatch",
                    "fields": [".".join(str(p) for p in err["loc"]) for err in e.errors()],
                },
            ) from e

        if source_text is not None:
            self.apply_evidence_guard(profile, source_text)

        return profile

    def apply_evidence_guard(self, profile: Profile, source_text: str) -> Profile:
        """Drop values the source text does not back up (in place)"""
        source_urls = extract_source_urls(source_text)

        for project in profile.projects:
            if project.url and not self._url_in_text(project.url, source_urls):
                logger.info(f"[ResponseValidator] Dropping unbacked project url: {project.url}")
                project.url = ""

        summary = profile.basics.summary
        if summary:
            trimmed = trim_summary(summary)
            if trimmed != summary:
                logger.info("[ResponseValidator] Cut section content out of basics.summary")
                profile.basics.summary = trimmed

        return profile

    def _url_in_text(self, url: str, source_urls: Set[str]) -> bool:
        url = url.strip()
        if not URL_LIKE_PATTERN.match(url):
            return False
        return _normalize_url(url) in source_urls

    def _log_raw(self, reason: str, raw_text: Optional[str], error: Optional[Exception] = None) -> None:
        preview = (raw_text or "")[:RAW_LOG_LIMIT]
        logger.error(f"[ResponseValidator] ❌ {reason}: {error or ''}")
        logger.error(f"[ResponseValidator] Raw response: {preview}")


def trim_summary(summary: str) -> str:
    """Cut a summary at the first Skills/Experience section header"""
    starts = [
        match.start("header")
        for match in (pattern.search(summary) for pattern in SECTION_HEADER_PATTERNS)
        if match
    ]
    if not starts:
        return summary
    return summary[:min(starts)].rstrip(" \n\t|•:-")


def _url_core(text: str) -> str:
    """Lower-case, scheme and www. removed (applies to every URL in `text`)"""
    text = re.sub(r'https?://', '', text.lower())
    return re.sub(r'(?<![a-z0-9-])www\.', '', text)


def _normalize_url(url: str) -> str:
    return _url_core(url).rstrip(".,;:!?").rstrip("/")


def extract_source_urls(text: str) -> Set[str]:
    """Every URL written out in `text`, normalized for comparison"""
    return {_normalize_url(url) for url in URL_IN_TEXT_PATTERN.findall(text or "")}
