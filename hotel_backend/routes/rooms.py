from flask import Blueprint, jsonify

from hotel_backend.errors import NotFound
from hotel_backend.logging import get_logger
from hotel_backend.models import ROOM_TYPES
from hotel_backend.routes import request_payload, require_fields
from hotel_backend.schemas import RoomCreate, RoomUpdate, parse
from hotel_backend.store import get_store

logger = get_logger(__name__)

bp = Blueprint('rooms', __name__, url_prefix='/api/rooms')

REQUIRED_FIELDS = ('name', 'description', 'type', 'price', 'capacity')


@bp.route('', methods=['GET'])
def get_rooms():
    return jsonify({'rooms': get_store().rooms.find()}), 200


@bp.route('/available', methods=['GET'])
def get_available_rooms():
    return jsonify({'rooms': get_store().rooms.find({'available': True})}), 200


@bp.route('/type/<room_type>', methods=['GET'])
def get_rooms_by_type(room_type):
    if room_type not in ROOM_TYPES:
        return jsonify({'rooms': []}), 200
    return jsonify({'rooms': get_store().rooms.find({'type': room_type})}), 200


@bp.route('/<room_id>', methods=['GET'])
def get_room(room_id):
    room = get_store().rooms.find_by_id(room_id)
    if not room:
        raise NotFound('Room not found')
    return jsonify({'room': room}), 200


@bp.route('', methods=['POST'])
def create_room():
    data = request_payload()
    require_fields(data, REQUIRED_FIELDS, 'All required fields must be provided')

    room = get_store().rooms.create(parse(RoomCreate, data))
    logger.info('room_created', room_id=room['_id'], type=room['type'])
    return jsonify({'message': 'Room created successfully', 'room': room}), 201


@bp.route('/<room_id>', methods=['PUT'])
def update_room(room_id):
    changes = parse(RoomUpdate, request_payload(), partial=True)

    room = get_store().rooms.update_by_id(room_id, changes)
    if not room:
        raise NotFound('Room not found')

    logger.info('room_updated', room_id=room_id, fields=sorted(changes))
    return jsonify({'message': 'Room updated successfully', 'room': room}), 200


@bp.route('/<room_id>', methods=['DELETE'])
def delete_room(room_id):
    if not get_store().rooms.delete_by_id(room_id):
        raise NotFound('Room not found')

    logger.info('room_deleted', room_id=room_id)
    return jsonify({'message': 'Room deleted successfully'}), 200
