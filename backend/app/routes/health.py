"""
Health check routes
"""
from flask import Blueprint, jsonify

from app.services.resume_templates import list_templates

health_bp = Blueprint('health', __name__)


@health_bp.route('/ping')
def ping():
    return "pong"


@health_bp.route('/health')
def health():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'services': {
            'pdf': 'available',
            'docx': 'available',
            'templates': len(list_templates()),
        }
    })


@health_bp.get("/healthz")
def healthz():
    """Kubernetes health check endpoint"""
    return jsonify({"status": "ok"}), 200
