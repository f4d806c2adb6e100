# tests/conftest.py
import os
import sys

import pytest

# Make sure the project root is importable (ranker/, backend/)
# even when the package isn't pip-installed.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

QUERY = "Senior Frontend Developer React TypeScript Redux"
CANDIDATE_A = "Senior Software Engineer React TypeScript Redux six years"
CANDIDATE_B = "Python Developer Django Flask PostgreSQL"


@pytest.fixture
def frontend_job():
    return QUERY


@pytest.fixture
def frontend_candidates():
    return [("A", CANDIDATE_A), ("B", CANDIDATE_B)]


@pytest.fixture
def sample_resume():
    return (
        "Jane Doe\n"
        "Contact: jane.doe+hr@example.co.uk | +1 555 0100\n"
        "\n"
        "Frontend engineer, 6 years. React, TypeScript, Node.js and PostgreSQL.\n"
        "Some C++ and C# from university. Strong communication and teamwork.\n"
    )


@pytest.fixture
def sample_job():
    return (
        "Frontend Developer\n"
        "We build dashboards for recruiters.\n"
        "\n"
        "Requirements:\n"
        "- 5+ years React\n"
        "- TypeScript and Redux\n"
        "\n"
        "Responsibilities:\n"
        "- Ship features weekly\n"
    )
