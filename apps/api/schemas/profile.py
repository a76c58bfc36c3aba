"""
Profile models

Typed mirror of PROFILE_RESPONSE_SCHEMA. Every field has a default so a
Profile is always total: strings are never missing or null, lists are
never missing or null.
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


def _coerce_str(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _coerce_list(value: Any) -> Any:
    return [] if value is None else value


class ProfileModel(BaseModel):
    """Shared config: ignore unknown keys, null/number -> string"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _fill_defaults(cls, value: Any, info: ValidationInfo) -> Any:
        annotation = cls.model_fields[info.field_name].annotation
        if annotation is str:
            return _coerce_str(value)
        if getattr(annotation, "__origin__", None) is list:
            return _coerce_list(value)
        if value is None:
            return {}
        return value


class Basics(ProfileModel):
    name: str = ""
    label: str = ""
    email: str = ""
    linkedin: str = ""
    github: str = ""
    summary: str = ""


class Skill(ProfileModel):
    name: str = ""


class Project(ProfileModel):
    name: str = ""
    description: str = ""
    technologies: List[str] = Field(default_factory=list)
    url: str = ""

    @field_validator("technologies", mode="before")
    @classmethod
    def _split_technologies(cls, value: Any) -> Any:
        # "React, Node.js" -> ["React", "Node.js"]
        if isinstance(value, str):
            return [t.strip() for t in value.split(",") if t.strip()]
        if isinstance(value, list):
            return [_coerce_str(t) for t in value if t is not None]
        return value


class Experience(ProfileModel):
    role: str = ""
    company: str = ""
    date: str = ""
    description: str = ""


class Education(ProfileModel):
    institution: str = ""
    degree: str = ""
    date: str = ""


class Achievement(ProfileModel):
    description: str = ""


class OtherSection(ProfileModel):
    title: str = ""
    content: str = ""


class Profile(ProfileModel):
    """Canonical extracted profile"""

    basics: Basics = Field(default_factory=Basics)
    skills: List[Skill] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    experience: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    achievements: List[Achievement] = Field(default_factory=list)
    other_sections: List[OtherSection] = Field(default_factory=list, alias="otherSections")

    @field_validator("skills", mode="before")
    @classmethod
    def _wrap_skill_names(cls, value: Any) -> Any:
        # ["Go", "Rust"] -> [{"name": "Go"}, {"name": "Rust"}]
        if isinstance(value, list):
            return [{"name": v} if isinstance(v, str) else v for v in value]
        return value

    @field_validator("achievements", mode="before")
    @classmethod
    def _wrap_achievements(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{"description": v} if isinstance(v, str) else v for v in value]
        return value

    def to_dict(self) -> dict:
        """JSON-ready dict using the public camelCase keys"""
        return self.model_dump(by_alias=True)
