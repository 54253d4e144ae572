from flask import Blueprint, jsonify

from hotel_backend.errors import Conflict, NotFound, ValidationFailed
from hotel_backend.logging import get_logger
from hotel_backend.routes import request_payload, require_fields
from hotel_backend.schemas import OfferCreate, OfferUpdate, parse
from hotel_backend.store import ConstraintViolation, get_store
from hotel_backend.store.base import utcnow

logger = get_logger(__name__)

bp = Blueprint('offers', __name__, url_prefix='/api/offers')

REQUIRED_FIELDS = ('title', 'description', 'discount', 'validFrom', 'validUntil')


def active_query(**extra):
    """Offers switched on whose window contains the current time."""
    now = utcnow()
    return {
        'active': True,
        'validFrom': {'$lte': now},
        'validUntil': {'$gte': now},
        **extra,
    }


def check_window(offer):
    if offer['validFrom'] > offer['validUntil']:
        raise ValidationFailed(
            'Validation failed',
            errors=[{'field': 'validUntil', 'message': 'validUntil must not be earlier than validFrom'}],
        )


def check_code_free(offers, code, offer_id=None):
    if code is None:
        return
    existing = offers.find_one({'code': code})
    if existing and existing['_id'] != offer_id:
        raise Conflict('Offer code already exists')


@bp.route('', methods=['GET'])
def get_offers():
    return jsonify({'offers': get_store().offers.find()}), 200


@bp.route('/active', methods=['GET'])
def get_active_offers():
    return jsonify({'offers': get_store().offers.find(active_query())}), 200


@bp.route('/code/<code>', methods=['GET'])
def get_offer_by_code(code):
    offer = get_store().offers.find_one(active_query(code=code))
    if not offer:
        raise NotFound('Invalid or expired offer code')
    return jsonify({'offer': offer}), 200


@bp.route('/<offer_id>', methods=['GET'])
def get_offer(offer_id):
    offer = get_store().offers.find_by_id(offer_id)
    if not offer:
        raise NotFound('Offer not found')
    return jsonify({'offer': offer}), 200


@bp.route('', methods=['POST'])
def create_offer():
    data = request_payload()
    require_fields(data, REQUIRED_FIELDS, 'All required fields must be provided')

    offer = parse(OfferCreate, data)
    check_window(offer)

    offers = get_store().offers
    check_code_free(offers, offer['code'])
    try:
        offer = offers.create(offer)
    except ConstraintViolation as exc:
        raise Conflict('Offer code already exists') from exc

    logger.info('offer_created', offer_id=offer['_id'], code=offer['code'])
    return jsonify({'message': 'Offer created successfully', 'offer': offer}), 201


@bp.route('/<offer_id>', methods=['PUT'])
def update_offer(offer_id):
    changes = parse(OfferUpdate, request_payload(), partial=True)

    offers = get_store().offers
    existing = offers.find_by_id(offer_id)
    if not existing:
        raise NotFound('Offer not found')

    check_window({**existing, **changes})
    if 'code' in changes:
        check_code_free(offers, changes['code'], offer_id)

    try:
        offer = offers.update_by_id(offer_id, changes)
    except ConstraintViolation as exc:
        raise Conflict('Offer code already exists') from exc
    if not offer:
        raise NotFound('Offer not found')

    logger.info('offer_updated', offer_id=offer_id, fields=sorted(changes))
    return jsonify({'message': 'Offer updated successfully', 'offer': offer}), 200


@bp.route('/<offer_id>', methods=['DELETE'])
def delete_offer(offer_id):
    if not get_store().offers.delete_by_id(offer_id):
        raise NotFound('Offer not found')

    logger.info('offer_deleted', offer_id=offer_id)
    return jsonify({'message': 'Offer deleted successfully'}), 200
