"""
Resume export service - turn raw resume text into a downloadable PDF, DOCX or TXT
"""
import logging
from dataclasses import replace
from typing import Optional

from app.config import DEFAULT_TEMPLATE_ID
from app.models.enums import ExportFormat
from app.models.resume import RenderedDocument
from app.services.resume_docx import render_docx
from app.services.resume_pdf import render_pdf
from app.services.resume_segmenter import extract_contact, segment
from app.services.resume_templates import resolve_customization, resolve_template
from app.utils.filenames import derive_filename

logger = logging.getLogger(__name__)


def render_plain_text(raw_text: str, contact_name: Optional[str] = None) -> RenderedDocument:
    """Pass the resume text through as a UTF-8 text file.

    Characters UTF-8 cannot carry, such as lone surrogates, become ``?``.
    """
    return RenderedDocument(
        content=(raw_text or "").encode("utf-8", "replace"),
        filename=derive_filename(contact_name, ExportFormat.TXT.value),
        mimetype=ExportFormat.TXT.mimetype,
    )


def export_resume(
    raw_text: str,
    export_format: str = ExportFormat.PDF.value,
    template_id: Optional[str] = None,
    customization: Optional[dict] = None,
    contact_name: Optional[str] = None,
) -> RenderedDocument:
    """Segment, extract and render *raw_text* in the requested format.

    ``contact_name`` fills in the name when none can be read from the text,
    and always names the plain-text download when given.
    Template and customization are resolved before any rendering work, so an
    unknown template or customization key fails fast.

    Raises:
        UnknownTemplateError: template id not registered.
        InvalidCustomizationKeyError: customization names an unknown option.
        InvalidCustomizationValueError: customization option has a bad value.
        ValueError: unsupported export format.
    """
    fmt = ExportFormat(export_format)
    template = resolve_template(template_id or DEFAULT_TEMPLATE_ID)
    resolved = resolve_customization(customization, template=template)

    contact = extract_contact(raw_text)
    if contact_name and not contact.name:
        contact = replace(contact, name=contact_name)

    segmented = segment(raw_text)
    if fmt is ExportFormat.TXT:
        document = render_plain_text(raw_text, contact_name or contact.name)
    elif fmt is ExportFormat.PDF:
        document = render_pdf(segmented, contact, template, resolved)
    else:
        document = render_docx(segmented, contact, template, resolved)

    logger.info("Rendered resume export", extra={
        'format': fmt.value,
        'template_id': template.id,
        'sections': sum(1 for _ in segmented.non_empty_sections()),
        'bytes': len(document.content),
    })
    return document

