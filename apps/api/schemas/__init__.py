# Schemas Package

from .profile_schema import (
    PROFILE_RESPONSE_SCHEMA,
    PROFILE_JSON_SCHEMA,
    to_json_schema,
    to_openai_response_format,
)

from .profile import (
    Profile,
    Basics,
    Skill,
    Project,
    Experience,
    Education,
    Achievement,
    OtherSection,
)

__all__ = [
    # Provider schema
    "PROFILE_RESPONSE_SCHEMA",
    "PROFILE_JSON_SCHEMA",
    "to_json_schema",
    "to_openai_response_format",
    # Profile models
    "Profile",
    "Basics",
    "Skill",
    "Project",
    "Experience",
    "Education",
    "Achievement",
    "OtherSection",
]
