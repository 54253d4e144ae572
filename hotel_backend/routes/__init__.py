from flask import request

from hotel_backend.errors import ValidationFailed

FORM_MIMETYPES = ('application/x-www-form-urlencoded', 'multipart/form-data')


def request_payload():
    """Return the request body as a dict.

    JSON is parsed regardless of the declared content type; malformed JSON
    raises ``InvalidJSONPayload`` from the request class. Form bodies are
    accepted too.
    """
    if request.mimetype in FORM_MIMETYPES:
        return request.form.to_dict()
    if not request.get_data(cache=True):
        return {}
    payload = request.get_json(force=True)
    if not isinstance(payload, dict):
        raise ValidationFailed('Request body must be a JSON object')
    return payload


def require_fields(payload, fields, message=None):
    missing = [field for field in fields if payload.get(field) in (None, '')]
    if missing:
        raise ValidationFailed(message, errors=[{'field': f, 'message': 'Field required'} for f in missing])
