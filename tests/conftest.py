"""Shared test fixtures."""

from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest

from cv_renderer.export.profiles import FULL, RESUME, SUMMARY
from cv_renderer.models.cv import CVData


class FixedWidthMeasurer:
    """Deterministic stand-in for font metrics: every character is equally wide."""

    CHAR_EM = 0.18  # mm per character per point

    def width(self, text: str, font_size: float, style: str = "") -> float:
        return len(text) * font_size * self.CHAR_EM


EXPERIENCE_TITLES = [
    "Platform Lead",
    "Data Engineer",
    "Research Assistant",
    "Lab Technician",
    "Teaching Fellow",
    "Intern Analyst",
]


def _experience(index: int, title: str) -> dict:
    year = 2023 - index * 2
    entry = {
        "id": f"job-{index}",
        "title": title,
        "company": f"Company {index}",
        "location": "Mexico City",
        "startDate": f"{year - 1}-08",
        "endDate": f"{year}-12",
        "highlights": [
            {
                "text": f"Cut pipeline latency by 40% across 12 services for team {index}",
                "metrics": {"latency": "40%"},
            },
            "Designed the feature store and its ingestion jobs with full lineage tracking",
            {"text": "Mentored 5 engineers through code review and pairing", "metrics": {"engineers": 5}},
            "Documented the on-call process and recovery runbooks for the platform team",
        ],
    }
    if index == 0:
        entry["current"] = True
        del entry["endDate"]
    return entry


SAMPLE_RECORD = {
    "personal": {
        "name": {"first": "Ana María", "last": "López Ortega", "full": "Ana María López Ortega"},
        "title": "MLOps Engineer",
        "location": "Mexico City",
        "contact": {
            "phone": "55-0000-0000",
            "email": "ana@example.com",
            "linkedin": "https://www.linkedin.com/in/ana-example/",
            "github": "https://github.com/ana-example",
        },
        "summary": {
            "brief": "Engineer focused on reliable ML infrastructure.",
            "full": "Background in nanoscience, working at 10⁻⁹ meters in ultra-high vacuum.",
            "current": "Builds platforms with 99.99% uptime.",
            "strengths": ["Patience", "Urgency"],
            "closing": "Co-founded a data science community.",
        },
    },
    "experience": [_experience(i, t) for i, t in enumerate(EXPERIENCE_TITLES)],
    "education": [
        {
            "degree": "BSc Data Science",
            "institution": "UNAM",
            "startDate": "2019",
            "expectedEndDate": "2025",
            "coursework": "Statistics, Machine Learning",
        },
        {"degree": "BSc Nanotechnology", "institution": "UNAM", "startDate": "2013", "endDate": "2017", "gpa": "9.1"},
        {"degree": "High School Diploma", "institution": "CCH", "startDate": "2010", "endDate": "2013"},
    ],
    "certifications": [
        {"name": "Kubernetes Administrator", "issuer": "CNCF", "date": 2023},
        {"name": "AWS ML Specialty", "issuer": "AWS", "date": "2022-05", "description": "Model deployment on SageMaker"},
    ],
    "skills": {
        "languages": ["Python", "SQL", "R"],
        "cloudAndMLOps": ["AWS", "Airflow", "Docker"],
        "databases": {"relational": ["PostgreSQL"], "nosql": ["MongoDB", "Redis"]},
        "tools": ["Git", "Linux"],
    },
    "leadership": [
        {
            "role": "Co-Founder",
            "organization": "Alumni Society",
            "period": "2024-05 – Present",
            "highlights": ["Founded the society", "Launched the job board", "Built the website"],
        }
    ],
    "awards": [
        {"title": "1st Place Hackathon", "year": 2021, "organization": "UN Youth"},
        {"title": "Best Thesis", "year": 2018, "organization": "UNAM"},
    ],
    "publications": [{"title": "Surface study of graphene", "year": 2020, "journal": "Crystals", "doi": "10.0000/x"}],
    "languages": [
        {"name": "Spanish", "level": "Native"},
        {"name": "English", "level": "Fluent", "certifications": [{"name": "TOEFL"}]},
    ],
    "projects": [{"name": "Open CV", "description": "Data-driven CV site", "year": 2024}],
    "interests": {"professional": ["MLOps", "Graphs"], "personal": ["Chess"], "philosophy": "Measure twice."},
    "metadata": {"version": "1.2.3", "lastUpdated": "2025-01-01"},
}


@pytest.fixture
def measurer() -> FixedWidthMeasurer:
    return FixedWidthMeasurer()


@pytest.fixture
def sample_record() -> dict:
    return copy.deepcopy(SAMPLE_RECORD)


@pytest.fixture
def sample_cv(sample_record) -> CVData:
    return CVData.model_validate(sample_record)


@pytest.fixture
def record_file(tmp_path, sample_record) -> Path:
    path = tmp_path / "cv-data.json"
    path.write_text(json.dumps(sample_record, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def experience_titles() -> list[str]:
    return list(EXPERIENCE_TITLES)


@pytest.fixture
def full_profile():
    return FULL


@pytest.fixture
def resume_profile():
    return RESUME


@pytest.fixture
def summary_profile():
    return SUMMARY
