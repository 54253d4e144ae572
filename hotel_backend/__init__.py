from datetime import datetime, timezone

from flask import Flask, Request, jsonify, request
from flask.json.provider import DefaultJSONProvider
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_sqlalchemy import SQLAlchemy

from hotel_backend.errors import InvalidJSONPayload, register_error_handlers
from hotel_backend.logging import configure_logging, get_logger

db = SQLAlchemy()
jwt = JWTManager()

logger = get_logger(__name__)


class ApiRequest(Request):
    def on_json_loading_failed(self, e):
        if e is not None:
            raise InvalidJSONPayload()
        return super().on_json_loading_failed(e)


class ApiJSONProvider(DefaultJSONProvider):
    @staticmethod
    def default(o):
        # Stores keep naive UTC datetimes
        if isinstance(o, datetime):
            if o.tzinfo is None:
                o = o.replace(tzinfo=timezone.utc)
            return o.isoformat()
        return DefaultJSONProvider.default(o)


@jwt.unauthorized_loader
def missing_token(reason):
    return jsonify({'message': reason}), 401


@jwt.invalid_token_loader
def invalid_token(reason):
    return jsonify({'message': reason}), 401


@jwt.expired_token_loader
def expired_token(jwt_header, jwt_payload):
    return jsonify({'message': 'Token has expired'}), 401


def cors_origins(value):
    """``"*"`` stays a wildcard; anything else is a comma-separated origin list."""
    if isinstance(value, str):
        value = [origin.strip() for origin in value.split(',') if origin.strip()]
    if not value or '*' in value:
        return '*'
    return value


def create_app(config_object='hotel_backend.config.Config', overrides=None):
    app = Flask(__name__)
    app.request_class = ApiRequest
    app.json = ApiJSONProvider(app)
    app.config.from_object(config_object)
    if overrides:
        app.config.update(overrides)

    configure_logging(app.config['LOG_LEVEL'], app.config['LOG_FORMAT'])

    CORS(app, resources={r'/api/*': {'origins': cors_origins(app.config['CORS_ORIGINS'])}}, send_wildcard=True)
    jwt.init_app(app)
    register_error_handlers(app)

    # The store and the blueprints import ``db`` from this module
    from hotel_backend.store import init_store
    store = init_store(app)

    from hotel_backend.routes import auth, offers, rooms
    app.register_blueprint(auth.bp)
    app.register_blueprint(rooms.bp)
    app.register_blueprint(offers.bp)

    @app.route('/api/health', methods=['GET'])
    def health():
        return jsonify({'status': 'ok', 'service': 'hotel-backend', 'store': store.kind}), 200

    @app.after_request
    def log_request(response):
        logger.debug('request_completed', method=request.method, path=request.path, status=response.status_code)
        return response

    return app
