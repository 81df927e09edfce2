"""
Tests for the shared line classifier
"""
import pytest

from app.models.resume import BulletItem, Prose, SectionName, Spacer, SubHeading
from app.services.line_classifier import bullet_display, classify, strip_leading_marker


class TestClassify:
    """Test classify()"""

    @pytest.mark.parametrize("line", ["- Led a team", "* Led a team", "• Led a team", "  -   Led a team  "])
    def test_bullets(self, line):
        assert classify(line, SectionName.EXPERIENCE) == BulletItem("Led a team")

    @pytest.mark.parametrize("line", [
        "Acme Corp | Senior Engineer | 2020-Present",
        "Software Engineer, 2019 - Present",
        "Acme Corp  San Francisco",
        "Google – Mountain View",
        "Intern - Summer",
        "Consultant (current)",
    ])
    def test_subheadings(self, line):
        assert classify(line, SectionName.EXPERIENCE) == SubHeading(line)

    @pytest.mark.parametrize("line", [
        "Experienced engineer.",
        "led a team in 2020",
        "Owned the on-call rotation for the payments team.",
    ])
    def test_prose(self, line):
        assert classify(line, SectionName.EXPERIENCE) == Prose(line)

    def test_text_is_trimmed(self):
        assert classify("  Experienced engineer.  ", SectionName.SUMMARY) == Prose("Experienced engineer.")

    @pytest.mark.parametrize("line", ["", "   ", "\t"])
    def test_blank_is_spacer(self, line):
        assert classify(line, SectionName.SUMMARY) == Spacer()
        assert classify(line, SectionName.SKILLS) == Spacer()

    def test_skills_forced_to_bullets(self):
        assert classify("Python, Go", SectionName.SKILLS) == BulletItem("Python, Go")
        assert classify("- Python", SectionName.SKILLS) == BulletItem("Python")
        assert classify("Acme Corp | 2020", SectionName.SKILLS) == BulletItem("Acme Corp | 2020")

    def test_deterministic(self):
        for section in SectionName:
            for line in ("Acme | 2020", "- x", "prose here", ""):
                assert classify(line, section) == classify(line, section)

    def test_sections_differ_only_by_forced_bullet(self):
        lines = ["Acme | 2020", "- bullet", "prose here", "Experienced engineer."]
        for line in lines:
            kinds = {classify(line, s) for s in SectionName if s is not SectionName.SKILLS}
            assert len(kinds) == 1
            skills_kind = classify(line, SectionName.SKILLS)
            assert isinstance(skills_kind, BulletItem)


class TestBulletHelpers:
    """Test marker helpers"""

    def test_strip_leading_marker(self):
        assert strip_leading_marker("•• item") == "item"
        assert strip_leading_marker("item") == "item"

    def test_bullet_display(self):
        assert bullet_display(BulletItem("item")) == "• item"

    def test_kinds(self):
        assert BulletItem("x").kind == "bullet"
        assert SubHeading("x").kind == "subheading"
        assert Prose("x").kind == "prose"
        assert Spacer().kind == "spacer"
