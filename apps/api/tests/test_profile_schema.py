"""
Tests: schemas/profile_schema.py, schemas/profile.py

- Gemini schema declaration shape
- strict JSON Schema derivation
- Profile defaults and coercion
"""

import copy

import pytest
from pydantic import ValidationError

from schemas.profile_schema import (
    PROFILE_RESPONSE_SCHEMA,
    PROFILE_JSON_SCHEMA,
    to_json_schema,
    to_openai_response_format,
)
from schemas.profile import Profile, Project


class TestProfileResponseSchema:
    """Provider schema declaration"""

    def test_top_level_fields(self):
        assert set(PROFILE_RESPONSE_SCHEMA["properties"]) == {
            "basics", "skills", "projects", "experience",
            "education", "achievements", "otherSections",
        }

    def test_basics_fields_are_strings(self):
        basics = PROFILE_RESPONSE_SCHEMA["properties"]["basics"]
        assert basics["type"] == "OBJECT"
        assert set(basics["properties"]) == {"name", "label", "email", "linkedin", "github", "summary"}
        for node in basics["properties"].values():
            assert node == {"type": "STRING"}

    def test_project_technologies_is_string_array(self):
        project = PROFILE_RESPONSE_SCHEMA["properties"]["projects"]["items"]
        assert project["properties"]["technologies"] == {
            "type": "ARRAY", "items": {"type": "STRING"}
        }

    def test_array_sections(self):
        props = PROFILE_RESPONSE_SCHEMA["properties"]
        for name in ("skills", "projects", "experience", "education", "achievements", "otherSections"):
            assert props[name]["type"] == "ARRAY"
            assert props[name]["items"]["type"] == "OBJECT"

    def test_matches_profile_model_fields(self):
        """Schema and Profile model describe the same keys"""
        dumped = Profile().to_dict()
        assert set(dumped) == set(PROFILE_RESPONSE_SCHEMA["properties"])
        assert set(dumped["basics"]) == set(PROFILE_RESPONSE_SCHEMA["properties"]["basics"]["properties"])


class TestToJsonSchema:
    """Strict JSON Schema derivation"""

    def test_lowercases_types(self):
        assert to_json_schema({"type": "STRING"}) == {"type": "string"}

    def test_object_requires_every_property(self):
        result = to_json_schema({
            "type": "OBJECT",
            "properties": {"a": {"type": "STRING"}, "b": {"type": "STRING"}},
        })
        assert result["required"] == ["a", "b"]
        assert result["additionalProperties"] is False

    def test_nested_arrays(self):
        schema = PROFILE_JSON_SCHEMA["properties"]["projects"]
        assert schema["type"] == "array"
        assert schema["items"]["properties"]["technologies"]["items"] == {"type": "string"}
        assert schema["items"]["additionalProperties"] is False

    def test_does_not_mutate_source(self):
        before = copy.deepcopy(PROFILE_RESPONSE_SCHEMA)
        to_json_schema(PROFILE_RESPONSE_SCHEMA)
        to_openai_response_format(PROFILE_RESPONSE_SCHEMA)
        assert PROFILE_RESPONSE_SCHEMA == before

    def test_openai_response_format(self):
        fmt = to_openai_response_format(PROFILE_RESPONSE_SCHEMA)
        assert fmt["type"] == "json_schema"
        assert fmt["json_schema"]["strict"] is True
        assert fmt["json_schema"]["name"] == "profile_extraction"
        assert fmt["json_schema"]["schema"] == PROFILE_JSON_SCHEMA


class TestProfileModel:
    """Profile defaults / coercion"""

    def test_empty_input_is_total(self, empty_profile_dict):
        assert Profile.model_validate({}).to_dict() == empty_profile_dict

    def test_nulls_become_defaults(self, empty_profile_dict):
        profile = Profile.model_validate({
            "basics": None,
            "skills": None,
            "projects": None,
            "otherSections": None,
        })
        assert profile.to_dict() == empty_profile_dict

    def test_partial_basics_filled(self):
        profile = Profile.model_validate({"basics": {"name": "Jane", "email": None}})
        assert profile.basics.name == "Jane"
        assert profile.basics.email == ""
        assert profile.basics.summary == ""

    def test_nested_items_filled(self):
        profile = Profile.model_validate({"projects": [{"name": "Ledger"}]})
        project = profile.to_dict()["projects"][0]
        assert project == {"name": "Ledger", "description": "", "technologies": [], "url": ""}

    def test_string_skills_wrapped(self):
        profile = Profile.model_validate({"skills": ["Go", "Rust"]})
        assert profile.to_dict()["skills"] == [{"name": "Go"}, {"name": "Rust"}]

    def test_string_achievements_wrapped(self):
        profile = Profile.model_validate({"achievements": ["Hackathon winner"]})
        assert profile.achievements[0].description == "Hackathon winner"

    def test_numbers_stringified(self):
        profile = Profile.model_validate({"education": [{"institution": "MIT", "date": 2018}]})
        assert profile.education[0].date == "2018"

    def test_technologies_string_split(self):
        project = Project.model_validate({"technologies": "React, Node.js"})
        assert project.technologies == ["React", "Node.js"]

    def test_unknown_keys_dropped(self):
        profile = Profile.model_validate({"phone": "555", "basics": {"age": 30}})
        dumped = profile.to_dict()
        assert "phone" not in dumped
        assert "age" not in dumped["basics"]

    def test_other_sections_alias(self):
        profile = Profile.model_validate({"otherSections": [{"title": "Publications", "content": "..."}]})
        assert profile.other_sections[0].title == "Publications"
        assert "otherSections" in profile.to_dict()
        assert "other_sections" not in profile.to_dict()

    def test_order_preserved(self):
        profile = Profile.model_validate({"skills": [{"name": n} for n in ("C", "A", "B")]})
        assert [s.name for s in profile.skills] == ["C", "A", "B"]

    def test_wrong_container_type_rejected(self):
        with pytest.raises(ValidationError):
            Profile.model_validate({"skills": {"name": "Go"}})

    def test_object_in_string_slot_rejected(self):
        with pytest.raises(ValidationError):
            Profile.model_validate({"basics": {"name": {"first": "Jane"}}})
