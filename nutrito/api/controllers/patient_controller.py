from flask import request
from nutrito.services.patient_service import PatientService
from nutrito.utils.decorators import current_session
from nutrito.utils.responses import success_response
from nutrito.utils.validators import json_object, require_uuid, validate_profile_update

def _service():
    return PatientService(current_session())

def get_my_profile():
    session = current_session()
    return success_response(PatientService(session).profile(session.user_id).to_dict())

def get_patient(patient_id):
    patient = _service().profile(require_uuid(patient_id, 'patient_id'))
    return success_response(patient.to_dict())

def update_patient(patient_id):
    patient_id = require_uuid(patient_id, 'patient_id')
    changes = validate_profile_update(json_object(request.get_json(silent=True)))
    patient = _service().update_profile(patient_id, changes)
    return success_response(patient.to_dict(), message='Profile updated successfully')

def linked_nutritionists(patient_id):
    patient_id = require_uuid(patient_id, 'patient_id')
    return success_response(_service().linked_nutritionists(patient_id))

def activity_summary(patient_id):
    patient_id = require_uuid(patient_id, 'patient_id')
    return success_response(_service().activity_summary(patient_id))
