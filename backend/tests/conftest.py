"""
Pytest configuration and fixtures
"""
import os

import pytest

# Set test environment
os.environ['FLASK_ENV'] = 'testing'

from app.models.resume import ContactInfo
from app.services.resume_segmenter import extract_contact, segment


SAMPLE_RESUME = """Jane Doe
jane@example.com | (555) 123-4567
SUMMARY
Experienced engineer.
EXPERIENCE
Acme Corp | Senior Engineer | 2020-Present
- Led a team of 5
EDUCATION
MIT, BS Computer Science, 2016
"""

FULL_RESUME = """Alex Rivera
alex.rivera@example.com | +1 415.555.0199 | linkedin.com/in/alexrivera | Austin, TX

Skills
Python, Go, Kubernetes
PostgreSQL | Redis

Certifications
AWS Certified Solutions Architect

Professional Experience
Globex | Staff Engineer | 2019 - Present
- Designed the billing pipeline
* Cut deploy time by 40%

Initech    2015 - 2019
• Migrated services to containers
Owned the on-call rotation for the payments team.

Education
University of Texas, BS Computer Science, 2015

Summary
Backend engineer focused on reliable distributed systems.
"""


@pytest.fixture
def sample_text():
    return SAMPLE_RESUME


@pytest.fixture
def full_text():
    return FULL_RESUME


@pytest.fixture
def segmented(full_text):
    return segment(full_text)


@pytest.fixture
def contact(full_text):
    return extract_contact(full_text)


@pytest.fixture
def empty_contact():
    return ContactInfo()


@pytest.fixture
def long_text():
    """A resume long enough to need several PDF pages"""
    lines = ["Pat Long", "pat@example.com", "Experience"]
    for i in range(120):
        lines.append(f"- Delivered project number {i} on schedule")
    lines.append("Skills")
    lines.append("Python")
    return "\n".join(lines)


@pytest.fixture
def app():
    """Create Flask app for testing"""
    from wsgi import create_app
    app = create_app({'TESTING': True, 'RATELIMIT_ENABLED': False})
    return app


@pytest.fixture
def client(app):
    """Create test client"""
    return app.test_client()
