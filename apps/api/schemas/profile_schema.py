"""
Profile Response Schema

Declarative shape of the extracted profile, handed to the extraction
provider on every call. Written in Gemini's OpenAPI subset (upper-case
type names); to_json_schema() derives the strict JSON Schema variant
that OpenAI Structured Outputs expects.

Treat both constants as read-only.
"""

from typing import Dict, Any


def _string() -> Dict[str, Any]:
    return {"type": "STRING"}


def _object(*fields: str) -> Dict[str, Any]:
    return {
        "type": "OBJECT",
        "properties": {name: _string() for name in fields},
    }


def _array_of(item: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "ARRAY", "items": item}


# ─────────────────────────────────────────────────────────────────────────────
# Gemini response_schema
# ─────────────────────────────────────────────────────────────────────────────
PROFILE_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "basics": _object("name", "label", "email", "linkedin", "github", "summary"),
        "skills": _array_of(_object("name")),
        "projects": _array_of({
            "type": "OBJECT",
            "properties": {
                "name": _string(),
                "description": _string(),
                "technologies": _array_of(_string()),
                "url": _string(),
            },
        }),
        "experience": _array_of(_object("role", "company", "date", "description")),
        "education": _array_of(_object("institution", "degree", "date")),
        "achievements": _array_of(_object("description")),
        "otherSections": _array_of(_object("title", "content")),
    },
}


def to_json_schema(node: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a Gemini schema node to strict JSON Schema

    - type names are lower-cased
    - every object property is required and additionalProperties is off
      (OpenAI strict mode rejects anything else)

    Returns a new structure; `node` is left untouched.
    """
    node_type = node["type"].lower()
    converted: Dict[str, Any] = {"type": node_type}

    if node_type == "object":
        properties = {
            name: to_json_schema(child)
            for name, child in node.get("properties", {}).items()
        }
        converted["properties"] = properties
        converted["required"] = list(properties)
        converted["additionalProperties"] = False
    elif node_type == "array":
        converted["items"] = to_json_schema(node["items"])

    return converted


def to_openai_response_format(
    node: Dict[str, Any],
    name: str = "profile_extraction",
) -> Dict[str, Any]:
    """OpenAI `response_format` payload for a Gemini schema node"""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": name,
            "strict": True,
            "schema": to_json_schema(node),
        },
    }


PROFILE_JSON_SCHEMA: Dict[str, Any] = to_json_schema(PROFILE_RESPONSE_SCHEMA)
