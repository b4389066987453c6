"""Data models for the CV record and styled text."""

from cv_renderer.models.cv import (
    Award,
    Certification,
    Contact,
    CVData,
    Education,
    Experience,
    Highlight,
    Interests,
    LanguageSkill,
    Leadership,
    Metadata,
    PersonName,
    Personal,
    Project,
    Publication,
    SkillGroup,
    SummaryText,
)
from cv_renderer.models.markup import MarkedText, Span, mark_metrics

__all__ = [
    "Award",
    "CVData",
    "Certification",
    "Contact",
    "Education",
    "Experience",
    "Highlight",
    "Interests",
    "LanguageSkill",
    "Leadership",
    "MarkedText",
    "Metadata",
    "PersonName",
    "Personal",
    "Project",
    "Publication",
    "SkillGroup",
    "Span",
    "SummaryText",
    "mark_metrics",
]
