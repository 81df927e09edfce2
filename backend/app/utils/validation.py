"""
Input validation schemas using Pydantic
"""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.exceptions import ValidationError


class PreviewRequest(BaseModel):
    """Validation schema for resume preview (segmentation) requests"""
    model_config = ConfigDict(extra='ignore')

    resumeText: str = Field(..., description="Raw resume text, may be empty")


class ExportRequest(PreviewRequest):
    """Validation schema for resume export requests"""
    format: Literal['pdf', 'docx', 'txt'] = Field('pdf', description="Output format")
    templateId: Optional[str] = Field(None, min_length=1, max_length=100, description="Template id")
    contactName: Optional[str] = Field(None, max_length=200, description="Name used when the text has none")
    customization: Optional[dict] = Field(None, description="Partial customization overrides")

    @field_validator('format', mode='before')
    @classmethod
    def normalize_format(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator('contactName')
    @classmethod
    def strip_name(cls, v):
        if v is None:
            return None
        return v.strip() or None


def validate_request(schema_class: type[BaseModel], data: dict, raise_on_error: bool = True):
    """
    Validate request data against a Pydantic schema.

    Args:
        schema_class: Pydantic model class
        data: Request data to validate
        raise_on_error: If True, raise ValidationError. If False, return (is_valid, errors)

    Returns:
        If raise_on_error=True: Validated data dict
        If raise_on_error=False: (is_valid: bool, validated_data: dict, errors: list)
    """
    if not isinstance(data, dict):
        errors = ["body: Request body must be a JSON object"]
        if raise_on_error:
            raise ValidationError(errors[0], details={'validation_errors': errors})
        return False, {}, errors

    try:
        validated = schema_class(**data)
        if raise_on_error:
            return validated.model_dump(exclude_none=True)
        else:
            return True, validated.model_dump(exclude_none=True), []
    except Exception as e:
        if isinstance(e, ValidationError):
            raise
        # Convert Pydantic validation errors to our ValidationError
        errors = []
        if hasattr(e, 'errors'):
            for error in e.errors():
                field = '.'.join(str(x) for x in error.get('loc', []))
                message = error.get('msg', 'Validation error')
                errors.append(f"{field}: {message}")

        error_message = '; '.join(errors) if errors else str(e)

        if raise_on_error:
            raise ValidationError(error_message, details={'validation_errors': errors})
        else:
            return False, {}, errors
