"""
API Test Configuration
"""
import json
import sys
from pathlib import Path

# Add api directory to path for imports
api_dir = Path(__file__).parent.parent
sys.path.insert(0, str(api_dir))

import pytest


@pytest.fixture
def sample_resume_text():
    """Sample resume text"""
    return """Jane Doe
Backend Engineer
jane.doe@example.com | linkedin.com/in/janedoe | github.com/janedoe

Summary
Backend engineer with 6 years of experience building payment APIs.

Technical Skills
Python, Go, PostgreSQL, Kubernetes

Experience
Senior Engineer, Acme Corp (2021 - Present)
Led the migration of the billing service to Go.

Projects
Ledger - double-entry bookkeeping service (Go, PostgreSQL)
https://github.com/janedoe/ledger
Shopfront - storefront demo (React.js, Node.js) Live Demo | GitHub

Education
BSc Computer Science, State University (2014 - 2018)

Certifications
AWS Certified Solutions Architect
"""


@pytest.fixture
def skills_only_text():
    return "Skills: Go, Rust"


@pytest.fixture
def sample_profile_dict():
    """Provider output for sample_resume_text"""
    return {
        "basics": {
            "name": "Jane Doe",
            "label": "Backend Engineer",
            "email": "jane.doe@example.com",
            "linkedin": "linkedin.com/in/janedoe",
            "github": "github.com/janedoe",
            "summary": "Backend engineer with 6 years of experience building payment APIs.",
        },
        "skills": [{"name": "Python"}, {"name": "Go"}, {"name": "PostgreSQL"}, {"name": "Kubernetes"}],
        "projects": [
            {
                "name": "Ledger",
                "description": "double-entry bookkeeping service",
                "technologies": ["Go", "PostgreSQL"],
                "url": "https://github.com/janedoe/ledger",
            },
            {
                "name": "Shopfront",
                "description": "storefront demo",
                "technologies": ["React.js", "Node.js"],
                "url": "",
            },
        ],
        "experience": [
            {
                "role": "Senior Engineer",
                "company": "Acme Corp",
                "date": "2021 - Present",
                "description": "Led the migration of the billing service to Go.",
            }
        ],
        "education": [
            {"institution": "State University", "degree": "BSc Computer Science", "date": "2014 - 2018"}
        ],
        "achievements": [],
        "otherSections": [
            {"title": "Certifications", "content": "AWS Certified Solutions Architect"}
        ],
    }


@pytest.fixture
def sample_profile_json(sample_profile_dict):
    return json.dumps(sample_profile_dict)


@pytest.fixture
def empty_profile_dict():
    """A total profile with every field at its default"""
    return {
        "basics": {
            "name": "", "label": "", "email": "",
            "linkedin": "", "github": "", "summary": "",
        },
        "skills": [],
        "projects": [],
        "experience": [],
        "education": [],
        "achievements": [],
        "otherSections": [],
    }
