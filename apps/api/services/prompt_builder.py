"""
Extraction prompt

Fixed system instruction + per-request user payload. Pure: no I/O, same
text in -> same request out.
"""

from dataclasses import dataclass

from exceptions import TextAcquisitionFailure


PROFILE_EXTRACTION_PROMPT = """You are a strict, expert resume parsing assistant. Your *only* job is to extract data and format it *exactly* according to the provided JSON schema.

## Important Rules
- Do not invent information. If a field is not found, return an empty string "" for strings or an empty array [] for arrays.
- Your response *must* be a single valid JSON object. Do not wrap it in markdown ```json ``` fences and do not add any other text.
- Be very precise. Do not merge unrelated sections.

## Field-by-Field Instructions
- **basics.summary**: ONLY the 1-2 sentence professional summary. It MUST end before the "Technical Skills" or "Experience" section. DO NOT include skills, projects, or experience in this field.
- **skills**: Find the "Skills" section and list every technical skill as its own item.
- **projects**:
    - `name`: the project's title.
    - `description`: the bullet points or paragraph describing the project.
    - `technologies`: the technologies used (e.g. "React.js", "Node.js").
    - `url`: ONLY populate this if you see a full, explicit URL in the text (e.g. "https://github.com/user/repo"). If you only see link text such as "Live Demo" or "GitHub", leave this field as an empty string "".
- **experience**: professional work experience, one item per role, with role, company, date range and description.
- **education**: every education entry, with institution, degree and date.
- **achievements**: awards and key achievements, one item each.
- **otherSections**: everything else not covered above, such as "Certifications", "Publications" or "Languages", as {title, content}. Do not drop content just because it has no dedicated field."""


@dataclass(frozen=True)
class ExtractionRequest:
    system_instruction: str
    user_text: str


def build_extraction_request(resume_text: str) -> ExtractionRequest:
    """
    Build the extraction request for one document

    Raises:
        TextAcquisitionFailure: the text is empty
    """
    if not resume_text or not resume_text.strip():
        raise TextAcquisitionFailure("The document contains no text to extract")

    return ExtractionRequest(
        system_instruction=PROFILE_EXTRACTION_PROMPT,
        user_text=resume_text,
    )
