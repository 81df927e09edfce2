"""
Resume export routes - template catalogue, segmentation preview and file export
"""
import logging
from io import BytesIO

from flask import Blueprint, jsonify, request, send_file

from app.config import EXPORT_RATE_LIMIT, MAX_RESUME_CHARS
from app.extensions import limiter
from app.services.line_classifier import classify
from app.services.resume_export import export_resume
from app.services.resume_segmenter import extract_contact, segment, split_skills, summary_excerpt
from app.services.resume_templates import list_templates
from app.models.resume import CANONICAL_ORDER, SectionName
from app.utils.exceptions import ContentTooLargeError, ResumeExportException
from app.utils.validation import ExportRequest, PreviewRequest, validate_request

logger = logging.getLogger(__name__)

resume_export_bp = Blueprint('resume_export', __name__, url_prefix='/api/resume')


def _check_size(resume_text: str) -> None:
    if len(resume_text) > MAX_RESUME_CHARS:
        raise ContentTooLargeError(len(resume_text), MAX_RESUME_CHARS)


@resume_export_bp.get('/templates')
def templates():
    """List the registered templates in catalogue order"""
    return jsonify({'templates': [t.to_dict() for t in list_templates()]})


@resume_export_bp.post('/preview')
def preview():
    """Segment resume text and report how every line would be rendered"""
    data = validate_request(PreviewRequest, request.get_json(silent=True))
    resume_text = data['resumeText']
    _check_size(resume_text)

    segmented = segment(resume_text)
    sections = {
        name.value: [
            {'text': line, 'kind': classify(line, name).kind}
            for line in segmented.lines(name)
        ]
        for name in CANONICAL_ORDER
    }
    return jsonify({
        'contact': extract_contact(resume_text).to_dict(),
        'header': list(segmented.header),
        'sections': sections,
        'summary_excerpt': summary_excerpt(segmented),
        'skills': split_skills(segmented.lines(SectionName.SKILLS)),
    })


@resume_export_bp.post('/export')
@limiter.limit(EXPORT_RATE_LIMIT)
def export():
    """Render resume text to PDF, DOCX or TXT and send it as a download"""
    data = validate_request(ExportRequest, request.get_json(silent=True))
    resume_text = data['resumeText']
    _check_size(resume_text)

    try:
        document = export_resume(
            resume_text,
            data.get('format', 'pdf'),
            template_id=data.get('templateId'),
            customization=data.get('customization'),
            contact_name=data.get('contactName'),
        )
    except ResumeExportException as e:
        logger.warning("Resume export rejected", extra={
            'error_code': e.error_code,
            'template_id': data.get('templateId'),
        })
        raise

    return send_file(
        BytesIO(document.content),
        mimetype=document.mimetype,
        as_attachment=True,
        download_name=document.filename,
    )
