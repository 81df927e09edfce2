"""
Tests for resume segmentation and contact extraction
"""
from collections import Counter

import pytest

from app.models.resume import CANONICAL_ORDER, SectionName
from app.services.line_classifier import classify
from app.services.resume_segmenter import (
    detect_heading,
    extract_contact,
    extract_location,
    extract_name,
    segment,
    split_skills,
    summary_excerpt,
)


def _content_lines(text):
    """Non-blank stripped lines of *text* that are not section headings"""
    return [
        line.strip() for line in text.split("\n")
        if line.strip() and detect_heading(line) is None
    ]


def _segmented_lines(segmented):
    lines = [line.strip() for line in segmented.header]
    for name in CANONICAL_ORDER:
        lines.extend(line.strip() for line in segmented.lines(name) if line.strip())
    return lines


class TestScenario:
    """The Jane Doe reference resume"""

    def test_header(self, sample_text):
        result = segment(sample_text)
        assert result.header == ("Jane Doe", "jane@example.com | (555) 123-4567")

    def test_sections(self, sample_text):
        result = segment(sample_text)
        assert result.lines(SectionName.SUMMARY) == ("Experienced engineer.",)
        assert result.lines(SectionName.EXPERIENCE) == (
            "Acme Corp | Senior Engineer | 2020-Present",
            "- Led a team of 5",
        )
        assert result.lines(SectionName.EDUCATION) == ("MIT, BS Computer Science, 2016",)
        assert result.lines(SectionName.CERTIFICATIONS) == ()
        assert result.lines(SectionName.SKILLS) == ()

    def test_experience_classification(self, sample_text):
        result = segment(sample_text)
        kinds = [classify(line, SectionName.EXPERIENCE).kind for line in result.lines(SectionName.EXPERIENCE)]
        assert kinds == ["subheading", "bullet"]

    def test_contact(self, sample_text):
        contact = extract_contact(sample_text)
        assert contact.name == "Jane Doe"
        assert contact.email == "jane@example.com"
        assert contact.phone == "(555) 123-4567"
        assert contact.profile_handle is None
        assert contact.location is None


class TestSegment:
    """Test segment()"""

    def test_empty_input(self):
        result = segment("")
        assert result.header == ()
        assert all(result.lines(name) == () for name in CANONICAL_ORDER)
        assert result.is_empty()

    def test_no_headings(self):
        text = "Jane Doe\n\nSome text here\n  indented line  \n"
        result = segment(text)
        assert result.header == ("Jane Doe", "Some text here", "  indented line  ")
        assert not any(result.has_content(name) for name in CANONICAL_ORDER)

    def test_consecutive_headings(self):
        result = segment("Summary\nExperience\n- Built things\n")
        assert result.lines(SectionName.SUMMARY) == ()
        assert result.lines(SectionName.EXPERIENCE) == ("- Built things",)

    def test_unknown_heading_folds_into_open_section(self):
        result = segment("Experience\nAcme\nProjects\nBuilt a compiler\n")
        assert result.lines(SectionName.EXPERIENCE) == ("Acme", "Projects", "Built a compiler")

    def test_unknown_heading_before_any_section_goes_to_header(self):
        result = segment("Jane Doe\nProjects\nSkills\nPython\n")
        assert result.header == ("Jane Doe", "Projects")
        assert result.lines(SectionName.SKILLS) == ("Python",)

    def test_blank_lines_kept_inside_sections(self):
        result = segment("Experience\nAcme\n\n   \nGlobex\n")
        assert result.lines(SectionName.EXPERIENCE) == ("Acme", "", "", "Globex")

    def test_blank_lines_dropped_before_first_heading(self):
        result = segment("\n\nJane Doe\n\n\nSummary\nHi\n")
        assert result.header == ("Jane Doe",)

    def test_section_content_is_verbatim(self):
        result = segment("Experience\n    - Indented bullet  \n")
        assert result.lines(SectionName.EXPERIENCE) == ("    - Indented bullet  ",)

    def test_header_content_is_verbatim(self):
        result = segment("  Jane Doe\t\n   jane@example.com  \nSkills\nPython\n")
        assert result.header == ("  Jane Doe\t", "   jane@example.com  ")
        assert extract_contact("  Jane Doe\t\nSkills\nPython\n").name == "Jane Doe"

    def test_windows_line_endings(self):
        result = segment("Jane Doe\r\nSkills\r\nPython\r\n")
        assert result.header == ("Jane Doe",)
        assert result.lines(SectionName.SKILLS) == ("Python",)

    def test_repeated_heading_appends(self):
        result = segment("Skills\nPython\nExperience\nAcme\nSkills\nGo\n")
        assert result.lines(SectionName.SKILLS) == ("Python", "Go")

    def test_garbage_input_never_raises(self):
        result = segment("\x00\x01�� binary \x7f\n\x0c\n")
        assert result.header

    @pytest.mark.parametrize("text", [
        "",
        "Jane Doe\nSUMMARY\nExperienced engineer.\n",
        "Skills\nPython\n\nEducation\nMIT\nSummary\nFoo\n",
        "no headings\nat all\n\n",
        "Experience:\n\n- a\n\n- b\nProjects\nstuff\n",
    ])
    def test_completeness(self, text):
        """Every non-heading, non-blank input line lands in exactly one place"""
        result = segment(text)
        assert Counter(_segmented_lines(result)) == Counter(_content_lines(text))

    def test_completeness_full_resume(self, full_text, segmented):
        assert Counter(_segmented_lines(segmented)) == Counter(_content_lines(full_text))


class TestHeadingDetection:
    """Test detect_heading()"""

    @pytest.mark.parametrize("line,expected", [
        ("SUMMARY", SectionName.SUMMARY),
        ("Professional Summary:", SectionName.SUMMARY),
        ("Objective", SectionName.SUMMARY),
        ("Work Experience", SectionName.EXPERIENCE),
        ("Employment History", SectionName.EXPERIENCE),
        ("Relevant Work Experience", SectionName.EXPERIENCE),
        ("education:", SectionName.EDUCATION),
        ("Licenses & Certifications", SectionName.CERTIFICATIONS),
        ("TECHNICAL SKILLS", SectionName.SKILLS),
        ("Core Competencies", SectionName.SKILLS),
        ("  Skills  ", SectionName.SKILLS),
    ])
    def test_headings(self, line, expected):
        assert detect_heading(line) is expected

    @pytest.mark.parametrize("line", [
        "",
        "Experienced engineer.",
        "Projects",
        "- Skills in Python",
        "Acme Corp | 2020-Present",
        "I have extensive experience building distributed systems at scale",
        "Education Program Manager at a large public school district",
    ])
    def test_not_headings(self, line):
        assert detect_heading(line) is None


class TestExtractContact:
    """Test extract_contact()"""

    def test_full_contact(self, contact):
        assert contact.name == "Alex Rivera"
        assert contact.email == "alex.rivera@example.com"
        assert contact.phone == "+1 415.555.0199"
        assert contact.profile_handle == "linkedin.com/in/alexrivera"
        assert contact.location == "Austin, TX"

    def test_empty_text(self):
        contact = extract_contact("")
        assert contact.is_empty()
        assert contact.to_dict() == {
            'name': None, 'email': None, 'phone': None,
            'profileHandle': None, 'location': None,
        }

    def test_name_rejected_when_first_line_is_contact(self):
        assert extract_name("jane@example.com\nJane Doe") is None
        assert extract_name("Name: Jane Doe") is None

    def test_name_rejected_when_too_long(self):
        assert extract_name("A" * 60 + "\nJane Doe") is None

    def test_name_skips_leading_blank_lines(self):
        assert extract_name("\n\n  Jane Doe  \n") == "Jane Doe"

    def test_name_rejected_when_first_line_is_heading(self):
        """A resume that opens with a section heading has no name line"""
        assert extract_name("Skills\nPython\n") is None
        assert extract_name("\n  EXPERIENCE:\nAcme Corp\n") is None
        assert extract_contact("Summary\nEngineer\n").name is None

    def test_phone_variants(self):
        assert extract_contact("call 555-123-4567").phone == "555-123-4567"
        assert extract_contact("call 555.123.4567 now").phone == "555.123.4567"

    def test_profile_handle_case_insensitive(self):
        contact = extract_contact("Jane\nwww.LinkedIn.com/in/jane-doe")
        assert contact.profile_handle == "www.LinkedIn.com/in/jane-doe"

    def test_contact_parts_order(self, contact):
        assert contact.contact_parts() == [
            "alex.rivera@example.com",
            "+1 415.555.0199",
            "linkedin.com/in/alexrivera",
            "Austin, TX",
        ]


class TestExtractLocation:
    """Test extract_location()"""

    def test_standalone_line(self):
        assert extract_location(["Jane Doe", "San Francisco, CA"]) == "San Francisco, CA"

    def test_country(self):
        assert extract_location(["Toronto, Canada • jane@example.com"]) == "Toronto, Canada"

    def test_no_location(self):
        assert extract_location(["Jane Doe", "jane@example.com"]) is None


class TestSectionHelpers:
    """Test split_skills() and summary_excerpt()"""

    def test_split_skills(self, segmented):
        assert split_skills(segmented.lines(SectionName.SKILLS)) == [
            "Python", "Go", "Kubernetes", "PostgreSQL", "Redis",
        ]

    def test_split_skills_dedupes_and_caps(self):
        lines = ["python, Python, PYTHON", ", ".join(f"skill{i}" for i in range(40))]
        skills = split_skills(lines)
        assert skills[0] == "python"
        assert skills.count("Python") == 0
        assert len(skills) == 20

    def test_split_skills_drops_long_tokens(self):
        assert split_skills(["x" * 60 + ", Go"]) == ["Go"]

    def test_summary_excerpt(self):
        result = segment("Summary\nOne\n\nTwo\nThree\nFour\nFive\n")
        assert summary_excerpt(result) == "One Two Three Four"

    def test_summary_excerpt_capped(self):
        result = segment("Summary\n" + "word " * 200 + "\n")
        assert len(summary_excerpt(result)) == 500
