"""
Custom exception classes for consistent error handling
"""
from flask import jsonify


class ResumeExportException(Exception):
    """Base exception for all resume export errors"""
    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, error_code: str = None, details: dict = None):
        self.message = message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self):
        return {
            'error': self.message,
            'error_code': self.error_code,
            'details': self.details
        }

    def to_response(self):
        return jsonify(self.to_dict()), self.status_code


class ValidationError(ResumeExportException):
    """Input validation error"""
    status_code = 400
    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str = None, details: dict = None):
        if field:
            message = f"Validation error for field '{field}': {message}"
        super().__init__(message, self.error_code, details)


class UnknownTemplateError(ResumeExportException):
    """Requested template id is not registered"""
    status_code = 404
    error_code = "UNKNOWN_TEMPLATE"

    def __init__(self, template_id, available: list = None, details: dict = None):
        message = f"Unknown template {template_id!r}"
        super().__init__(message, self.error_code, {
            'template_id': template_id,
            'available': sorted(available or []),
            **(details or {})
        })


class InvalidCustomizationKeyError(ResumeExportException):
    """Customization override names a field the schema does not have"""
    status_code = 400
    error_code = "INVALID_CUSTOMIZATION_KEY"

    def __init__(self, keys: list, details: dict = None, message: str = None):
        message = message or f"Unknown customization option(s): {', '.join(keys)}"
        super().__init__(message, self.error_code, {
            'keys': list(keys),
            **(details or {})
        })


class InvalidCustomizationValueError(ResumeExportException):
    """Customization override carries an unsupported value"""
    status_code = 400
    error_code = "INVALID_CUSTOMIZATION_VALUE"

    def __init__(self, errors: list, details: dict = None):
        message = "Invalid customization value(s): " + "; ".join(errors)
        super().__init__(message, self.error_code, {
            'validation_errors': list(errors),
            **(details or {})
        })


class ContentTooLargeError(ResumeExportException):
    """Resume text exceeds the accepted request size"""
    status_code = 413
    error_code = "CONTENT_TOO_LARGE"

    def __init__(self, size: int, limit: int, details: dict = None):
        message = f"Resume text is too large ({size} characters, limit {limit})"
        super().__init__(message, self.error_code, {
            'size': size,
            'limit': limit,
            **(details or {})
        })


def handle_resume_export_exception(e: ResumeExportException):
    """Flask error handler for resume export exceptions"""
    return e.to_response()


def register_error_handlers(app):
    """Register error handlers with Flask app"""
    app.register_error_handler(ResumeExportException, handle_resume_export_exception)

    @app.errorhandler(400)
    def bad_request(e):
        return jsonify({
            'error': 'Bad request',
            'error_code': 'BAD_REQUEST',
            'details': {'message': str(e)}
        }), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({
            'error': 'Resource not found',
            'error_code': 'NOT_FOUND',
            'details': {}
        }), 404

    @app.errorhandler(429)
    def rate_limited(e):
        return jsonify({
            'error': 'Rate limit exceeded. Please try again later.',
            'error_code': 'RATE_LIMIT_EXCEEDED',
            'details': {'limit': str(getattr(e, 'description', ''))}
        }), 429

    @app.errorhandler(500)
    def internal_error(e):
        return jsonify({
            'error': 'An unexpected error occurred. Please try again later.',
            'error_code': 'INTERNAL_ERROR',
            'details': {}
        }), 500
