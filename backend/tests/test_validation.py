"""
Tests for input validation
"""
import pytest
from app.utils.validation import (
    ExportRequest,
    PreviewRequest,
    validate_request
)
from app.utils.exceptions import ValidationError


class TestPreviewValidation:
    """Test preview request validation"""

    def test_valid_request(self):
        result = validate_request(PreviewRequest, {"resumeText": "Jane Doe"})
        assert result["resumeText"] == "Jane Doe"

    def test_empty_text_allowed(self):
        result = validate_request(PreviewRequest, {"resumeText": ""})
        assert result["resumeText"] == ""

    def test_missing_text(self):
        with pytest.raises(ValidationError):
            validate_request(PreviewRequest, {})

    def test_non_object_body(self):
        with pytest.raises(ValidationError):
            validate_request(PreviewRequest, None)


class TestExportValidation:
    """Test export request validation"""

    def test_defaults(self):
        result = validate_request(ExportRequest, {"resumeText": "Jane Doe"})
        assert result["format"] == "pdf"
        assert "templateId" not in result
        assert "customization" not in result

    def test_format_normalized(self):
        result = validate_request(ExportRequest, {"resumeText": "x", "format": " DOCX "})
        assert result["format"] == "docx"

    def test_unsupported_format(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_request(ExportRequest, {"resumeText": "x", "format": "rtf"})
        assert exc_info.value.details["validation_errors"]

    def test_customization_must_be_object(self):
        with pytest.raises(ValidationError):
            validate_request(ExportRequest, {"resumeText": "x", "customization": ["compact"]})

    def test_blank_contact_name_dropped(self):
        result = validate_request(ExportRequest, {"resumeText": "x", "contactName": "   "})
        assert "contactName" not in result

    def test_non_raising_mode(self):
        is_valid, data, errors = validate_request(ExportRequest, {"format": "pdf"}, raise_on_error=False)
        assert is_valid is False
        assert data == {}
        assert errors
