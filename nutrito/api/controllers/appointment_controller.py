from flask import request, current_app
from nutrito.services.appointment_service import AppointmentService
from nutrito.utils.decorators import current_session
from nutrito.utils.responses import success_response, page_response
from nutrito.utils.validators import (
    json_object, require_uuid, validate_booking, validate_cancellation, validate_reschedule,
    validate_pagination, validate_statuses
)

def _serialize_appointment(appointment):
    return appointment.to_dict()

def _service():
    return AppointmentService(
        current_session(),
        default_limit=current_app.config['DEFAULT_PAGE_LIMIT'],
        max_limit=current_app.config['MAX_PAGE_LIMIT'],
    )

def book_appointment():
    """Books a slot for the calling patient."""
    data = validate_booking(json_object(request.get_json(silent=True)))
    appointment = _service().book(**data)
    return success_response(
        _serialize_appointment(appointment), status=201, message='Appointment booked successfully'
    )

def get_appointment(appointment_id):
    appointment = _service().get(require_uuid(appointment_id))
    return success_response(_serialize_appointment(appointment))

def cancel_appointment(appointment_id):
    appointment_id = require_uuid(appointment_id)
    data = validate_cancellation(json_object(request.get_json(silent=True)))
    appointment = _service().cancel(appointment_id, data['reason'], data['notify_nutritionist'])
    return success_response(_serialize_appointment(appointment), message='Appointment cancelled')

def reschedule_appointment(appointment_id):
    appointment_id = require_uuid(appointment_id)
    data = validate_reschedule(json_object(request.get_json(silent=True)))
    appointment = _service().reschedule(appointment_id, **data)
    return success_response(_serialize_appointment(appointment), message='Appointment rescheduled')

def upcoming_appointments():
    limit, _ = validate_pagination(request.args, current_app.config['UPCOMING_DEFAULT_LIMIT'])
    return page_response(_service().upcoming(limit), _serialize_appointment)

def appointment_history():
    limit, offset = validate_pagination(request.args, current_app.config['DEFAULT_PAGE_LIMIT'])
    statuses = validate_statuses(request.args)
    return page_response(_service().history(statuses, limit, offset), _serialize_appointment)

def patient_appointments(patient_id):
    patient_id = require_uuid(patient_id, 'patient_id')
    limit, offset = validate_pagination(request.args, current_app.config['DEFAULT_PAGE_LIMIT'])
    statuses = validate_statuses(request.args)
    page = _service().list_for_patient(patient_id, statuses, limit, offset)
    return page_response(page, _serialize_appointment)
