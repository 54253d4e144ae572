from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from hotel_backend.logging import get_logger

logger = get_logger(__name__)


class ApiError(HTTPException):
    code = 500
    description = 'Server error'

    def __init__(self, description=None, errors=None):
        super().__init__(description=description)
        self.errors = errors


class ValidationFailed(ApiError):
    code = 400
    description = 'All required fields must be provided'


class NotFound(ApiError):
    code = 404
    description = 'Not found'


class Conflict(ApiError):
    code = 400
    description = 'Record already exists'


class InvalidCredentials(ApiError):
    code = 400
    description = 'Invalid credentials'


class InvalidJSONPayload(ApiError):
    code = 400
    description = 'Invalid JSON payload'


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        body = {'message': error.description}
        errors = getattr(error, 'errors', None)
        if errors:
            body['errors'] = errors
        return jsonify(body), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception('unhandled_error', method=request.method, path=request.path)
        return jsonify({'message': 'Server error'}), 500
