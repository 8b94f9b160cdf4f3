# /nutrito/utils/validators.py
"""Request validation for the HTTP boundary.

Each ``validate_*`` function returns clean Python values or raises
``ValidationError`` with one ``{field, message}`` entry per problem.
"""
import re
import uuid
from datetime import date, datetime, time

from nutrito.models.constants import (
    APPOINTMENT_STATUSES, DOCUMENT_TYPES, MODALITIES, PAYMENT_METHODS,
    REASON_MAX_LENGTH, SPECIALTIES
)
from nutrito.services.errors import ValidationError

TIME_PATTERN = re.compile(r'^([01]?[0-9]|2[0-3]):[0-5][0-9]$')
PHONE_PATTERN = re.compile(r'^\+?[0-9 ()-]{6,30}$')
EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
MAX_LIMIT = 100


class _Errors:
    def __init__(self):
        self.details = []

    def add(self, field, message):
        self.details.append({'field': field, 'message': message})

    def raise_if_any(self):
        if self.details:
            raise ValidationError(details=self.details)


def json_object(body):
    """JSON request body as a dict. A missing body reads as an empty one."""
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError.for_field('body', 'must be a JSON object')
    return body


def require_uuid(value, field='id'):
    try:
        return str(uuid.UUID(str(value)))
    except (ValueError, TypeError):
        raise ValidationError.for_field(field, 'must be a valid UUID')


def parse_date(value):
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def parse_time(value):
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise ValueError('invalid time')
    hours, minutes = value.split(':')
    return time(int(hours), int(minutes))


def _date_field(errors, data, field, required=True):
    value = data.get(field)
    if value in (None, ''):
        if required:
            errors.add(field, 'is required')
        return None
    try:
        return parse_date(value)
    except ValueError:
        errors.add(field, 'must be an ISO date (YYYY-MM-DD)')
        return None


def _time_field(errors, data, field, required=True):
    value = data.get(field)
    if value in (None, ''):
        if required:
            errors.add(field, 'is required')
        return None
    try:
        return parse_time(value)
    except ValueError:
        errors.add(field, 'must use the HH:MM format')
        return None


def _choice(errors, data, field, choices, required=True):
    value = data.get(field)
    if value in (None, ''):
        if required:
            errors.add(field, 'is required')
        return None
    if value not in choices:
        errors.add(field, f"must be one of: {', '.join(choices)}")
        return None
    return value


def _choices(errors, values, field, choices):
    invalid = [value for value in values if value not in choices]
    if invalid:
        errors.add(field, f"must be one of: {', '.join(choices)}")
    return [value for value in values if value in choices]


def _future(errors, day, at, now=None):
    if day and at and datetime.combine(day, at) <= (now or datetime.now()):
        errors.add('date', 'the appointment must be scheduled in the future')


def validate_pagination(args, default_limit=20):
    errors = _Errors()
    limit, offset = default_limit, 0
    try:
        if args.get('limit') not in (None, ''):
            limit = int(args.get('limit'))
            if not 1 <= limit <= MAX_LIMIT:
                errors.add('limit', f'must be between 1 and {MAX_LIMIT}')
    except ValueError:
        errors.add('limit', 'must be an integer')
    try:
        if args.get('offset') not in (None, ''):
            offset = int(args.get('offset'))
            if offset < 0:
                errors.add('offset', 'must be zero or greater')
    except ValueError:
        errors.add('offset', 'must be an integer')
    errors.raise_if_any()
    return limit, offset


def validate_statuses(args, field='status'):
    errors = _Errors()
    statuses = _choices(errors, args.getlist(field), field, APPOINTMENT_STATUSES)
    errors.raise_if_any()
    return statuses or None


def validate_booking(data, now=None):
    errors = _Errors()
    nutritionist_id = data.get('nutritionist_id')
    try:
        nutritionist_id = require_uuid(nutritionist_id, 'nutritionist_id')
    except ValidationError as e:
        errors.details.extend(e.details)
    day = _date_field(errors, data, 'date')
    at = _time_field(errors, data, 'time')
    _future(errors, day, at, now)
    modality = _choice(errors, data, 'modality', MODALITIES)
    payment_method = _choice(errors, data, 'payment_method', PAYMENT_METHODS)
    reason = data.get('reason')
    if reason is not None and (not isinstance(reason, str) or len(reason) > REASON_MAX_LENGTH):
        errors.add('reason', f'must be a text of at most {REASON_MAX_LENGTH} characters')
    errors.raise_if_any()
    return {
        'nutritionist_id': nutritionist_id,
        'day': day,
        'at': at,
        'modality': modality,
        'payment_method': payment_method,
        'reason': reason,
    }


def validate_cancellation(data):
    errors = _Errors()
    reason = data.get('reason')
    if not isinstance(reason, str) or not reason.strip():
        errors.add('reason', 'is required')
    notify = data.get('notify_nutritionist', True)
    if not isinstance(notify, bool):
        errors.add('notify_nutritionist', 'must be a boolean')
    errors.raise_if_any()
    return {'reason': reason.strip(), 'notify_nutritionist': notify}


def validate_reschedule(data, now=None):
    errors = _Errors()
    day = _date_field(errors, data, 'date')
    at = _time_field(errors, data, 'time')
    _future(errors, day, at, now)
    modality = _choice(errors, data, 'modality', MODALITIES, required=False)
    errors.raise_if_any()
    return {'new_day': day, 'new_at': at, 'new_modality': modality}


def validate_search(args):
    errors = _Errors()
    name = args.get('nombre')
    if name is not None and len(name.strip()) < 2:
        errors.add('nombre', 'must have at least 2 characters')
    specialties = _choices(errors, args.getlist('especialidad'), 'especialidad', SPECIALTIES)
    modalities = _choices(errors, args.getlist('modalidad'), 'modalidad', MODALITIES)
    rating_min = args.get('rating_min')
    if rating_min not in (None, ''):
        try:
            rating_min = float(rating_min)
            if not 1 <= rating_min <= 5:
                errors.add('rating_min', 'must be between 1 and 5')
        except ValueError:
            errors.add('rating_min', 'must be a number')
    else:
        rating_min = None
    errors.raise_if_any()
    return {
        'name': name,
        'specialties': specialties or None,
        'modalities': modalities or None,
        'rating_min': rating_min,
    }


def validate_slot_query(args):
    """fecha and hora of an availability lookup. Returns None when either is missing."""
    if not args.get('fecha') or not args.get('hora'):
        return None
    errors = _Errors()
    day = _date_field(errors, args, 'fecha')
    at = _time_field(errors, args, 'hora')
    errors.raise_if_any()
    return day, at


def validate_schedule_query(args):
    errors = _Errors()
    day = _date_field(errors, args, 'fecha', required=False)
    errors.raise_if_any()
    return day


def validate_document_upload(form, files):
    file = files.get('archivo')
    if file is None or not file.filename:
        raise ValidationError(code='MISSING_FILE', message='A file is required')
    errors = _Errors()
    name = (form.get('nombre') or '').strip()
    if not name:
        errors.add('nombre', 'is required')
    doc_type = _choice(errors, form, 'tipo', DOCUMENT_TYPES)
    errors.raise_if_any()
    return {'file': file, 'display_name': name, 'doc_type': doc_type}


def validate_document_type(args):
    errors = _Errors()
    doc_type = _choice(errors, args, 'tipo', DOCUMENT_TYPES, required=False)
    errors.raise_if_any()
    return doc_type


def validate_profile_update(data):
    errors = _Errors()
    changes = {}
    for field in ('first_name', 'last_name'):
        if field in data:
            value = data.get(field)
            if not isinstance(value, str) or not value.strip() or len(value) > 100:
                errors.add(field, 'must be a non-empty text of at most 100 characters')
            else:
                changes[field] = value.strip()
    if 'phone' in data:
        phone = data.get('phone')
        if phone is not None and (not isinstance(phone, str) or not PHONE_PATTERN.match(phone)):
            errors.add('phone', 'must be a valid phone number')
        else:
            changes['phone'] = phone
    if 'email' in data:
        email = data.get('email')
        if not isinstance(email, str) or not EMAIL_PATTERN.match(email.strip()):
            errors.add('email', 'must be a valid email address')
        else:
            changes['email'] = email.strip()
    if not changes and not errors.details:
        errors.add('body', 'no updatable fields were provided')
    errors.raise_if_any()
    return changes


def validate_registration(data):
    errors = _Errors()
    email = data.get('email')
    if not isinstance(email, str) or not EMAIL_PATTERN.match(email.strip()):
        errors.add('email', 'must be a valid email address')
    if not isinstance(data.get('password'), str):
        errors.add('password', 'is required')
    for field in ('first_name', 'last_name'):
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            errors.add(field, 'is required')
    phone = data.get('phone')
    if phone is not None and (not isinstance(phone, str) or not PHONE_PATTERN.match(phone)):
        errors.add('phone', 'must be a valid phone number')
    errors.raise_if_any()
    return {
        'email': email.strip(),
        'password': data['password'],
        'first_name': data['first_name'].strip(),
        'last_name': data['last_name'].strip(),
        'phone': phone,
    }
