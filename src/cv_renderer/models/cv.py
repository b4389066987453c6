"""Pydantic models for the CV data record."""

from __future__ import annotations

import re
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

MetricValue = Union[int, float, str]
SkillCategory = Union[list[str], dict[str, list[str]]]

_KEY_WORDS = {"and": "&", "nosql": "NoSQL", "mlops": "MLOps"}


class CVModel(BaseModel):
    """Base model: camelCase keys in the record, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class PersonName(CVModel):
    first: str
    last: str
    full: str | None = None

    @property
    def display(self) -> str:
        return self.full or f"{self.first} {self.last}"


class Contact(CVModel):
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    linkedin: str | None = None
    github: str | None = None
    orcid: str | None = None
    twitter: str | None = None
    facebook: str | None = None


class SummaryText(CVModel):
    brief: str = ""
    tagline: str | None = None
    full: str | None = None
    connection: str | None = None
    current: str | None = None
    strengths: list[str] = Field(default_factory=list)
    closing: str | None = None

    def paragraphs(self) -> list[str]:
        """Narrative paragraphs in reading order, empty ones dropped."""
        parts = [self.brief, self.full, self.connection, self.current, self.closing]
        return [p for p in parts if p]


class Personal(CVModel):
    name: PersonName
    title: str = ""
    location: str = ""
    contact: Contact = Field(default_factory=Contact)
    profile_image: str | None = None
    summary: SummaryText = Field(default_factory=SummaryText)


class Highlight(CVModel):
    text: str
    metrics: dict[str, MetricValue] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _from_plain_string(cls, data):
        if isinstance(data, str):
            return {"text": data}
        return data


class Experience(CVModel):
    id: str
    title: str
    company: str = ""
    location: str = ""
    start_date: str | None = None
    end_date: str | None = None
    current: bool = False
    highlights: list[Highlight] = Field(default_factory=list)


class Education(CVModel):
    degree: str
    institution: str = ""
    start_date: str | None = None
    end_date: str | None = None
    expected_end_date: str | None = None
    gpa: str | None = None
    coursework: str | None = None
    achievement: str | None = None


class Certification(CVModel):
    name: str
    issuer: str = ""
    date: int | str | None = None
    url: str | None = None
    type: str | None = None
    description: str | None = None


class Leadership(CVModel):
    role: str
    organization: str = ""
    period: str = ""
    location: str | None = None
    highlights: list[str] = Field(default_factory=list)
    description: str | None = None


class CertificateLink(CVModel):
    name: str
    url: str | None = None


class Award(CVModel):
    title: str
    year: int | str | None = None
    organization: str | None = None
    description: str | None = None
    certificates: list[CertificateLink] = Field(default_factory=list)


class Publication(CVModel):
    title: str
    year: int | str | None = None
    journal: str | None = None
    institution: str | None = None
    url: str | None = None
    type: str = ""
    doi: str | None = None


class LanguageSkill(CVModel):
    name: str
    level: str = ""
    certifications: list[CertificateLink] = Field(default_factory=list)


class Project(CVModel):
    name: str
    description: str = ""
    url: str | None = None
    year: int | str | None = None
    type: str = ""


class Interests(CVModel):
    professional: list[str] = Field(default_factory=list)
    personal: list[str] = Field(default_factory=list)
    philosophy: str | None = None


class TemplateOptions(CVModel):
    formats: dict[str, str] = Field(default_factory=dict)
    resume_max_items: dict[str, int] = Field(default_factory=dict)


class Metadata(CVModel):
    version: str = "1.0.0"
    last_updated: str | None = None
    source: str | None = None
    template_options: TemplateOptions = Field(default_factory=TemplateOptions)


class SkillGroup(BaseModel):
    title: str
    items: list[str]


class CVData(CVModel):
    personal: Personal
    experience: list[Experience]
    education: list[Education] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    skills: dict[str, SkillCategory] = Field(default_factory=dict)
    leadership: list[Leadership] = Field(default_factory=list)
    awards: list[Award] = Field(default_factory=list)
    publications: list[Publication] = Field(default_factory=list)
    languages: list[LanguageSkill] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    interests: Interests = Field(default_factory=Interests)
    metadata: Metadata = Field(default_factory=Metadata)

    def skill_groups(self) -> list[SkillGroup]:
        """Flatten nested skill categories into titled groups, record order kept."""
        groups: list[SkillGroup] = []
        for key, value in self.skills.items():
            title = humanize_key(key)
            if isinstance(value, dict):
                for sub_key, items in value.items():
                    if items:
                        groups.append(
                            SkillGroup(title=f"{title} ({humanize_key(sub_key)})", items=items)
                        )
            elif value:
                groups.append(SkillGroup(title=title, items=value))
        return groups


def humanize_key(key: str) -> str:
    """Turn a camelCase record key into a display title.

    >>> humanize_key("cloudAndMLOps")
    'Cloud & MLOps'
    """
    spaced = re.sub(r"(?<=[a-z])(?=[A-Z])", " ", key)
    words = []
    for word in spaced.split():
        mapped = _KEY_WORDS.get(word.lower())
        if mapped:
            words.append(mapped)
        else:
            words.append(word[:1].upper() + word[1:])
    return " ".join(words)
