"""
Routes package - all API route blueprints
"""
from app.routes.health import health_bp
from app.routes.resume_export import resume_export_bp

__all__ = [
    'health_bp',
    'resume_export_bp',
]
