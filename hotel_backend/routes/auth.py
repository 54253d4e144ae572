import bcrypt
from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import create_access_token, get_jwt_identity, jwt_required

from hotel_backend.errors import Conflict, InvalidCredentials, NotFound, ValidationFailed
from hotel_backend.logging import get_logger
from hotel_backend.routes import request_payload, require_fields
from hotel_backend.schemas import LoginRequest, RegisterRequest, parse
from hotel_backend.store import ConstraintViolation, get_store

logger = get_logger(__name__)

bp = Blueprint('auth', __name__, url_prefix='/api/auth')

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def public_user(user):
    return {'name': user['name'], 'email': user['email']}


def hash_password(password):
    password = password.encode('utf-8')
    if len(password) > MAX_PASSWORD_BYTES:
        raise ValidationFailed(f'Password must be at most {MAX_PASSWORD_BYTES} bytes')
    salt = bcrypt.gensalt(rounds=current_app.config['BCRYPT_ROUNDS'])
    return bcrypt.hashpw(password, salt).decode('utf-8')


def check_password(password, hashed):
    password = password.encode('utf-8')
    if len(password) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(password, hashed.encode('utf-8'))


@bp.route('/register', methods=['POST'])
def register():
    data = request_payload()
    require_fields(data, ('name', 'email', 'password'), 'All fields are required')
    data = parse(RegisterRequest, data)

    users = get_store().users
    if users.find_one({'email': data['email']}):
        raise Conflict('User already exists')

    try:
        user = users.create({
            'name': data['name'],
            'email': data['email'],
            'password': hash_password(data['password']),
        })
    except ConstraintViolation as exc:
        raise Conflict('User already exists') from exc

    logger.info('user_registered', user_id=user['_id'])
    return jsonify({'message': 'User registered successfully', 'user': public_user(user)}), 201


@bp.route('/login', methods=['POST'])
def login():
    data = request_payload()
    require_fields(data, ('email', 'password'), 'Email and password are required')
    data = parse(LoginRequest, data)

    user = get_store().users.find_one({'email': data['email']})
    if not user:
        raise NotFound('User not found')

    if not check_password(data['password'], user['password']):
        logger.info('login_failed', user_id=user['_id'])
        raise InvalidCredentials()

    access_token = create_access_token(identity=user['email'])
    logger.info('user_logged_in', user_id=user['_id'])
    return jsonify({'message': 'Login successful', 'user': public_user(user), 'access_token': access_token}), 200


@bp.route('/me', methods=['GET'])
@jwt_required()
def current_user():
    user = get_store().users.find_one({'email': get_jwt_identity()})
    if not user:
        raise NotFound('User not found')
    return jsonify({'user': public_user(user)}), 200
