# /nutrito/api/routes.py

from flask_jwt_extended import jwt_required
from . import api_bp
from nutrito.extensions import limiter
from nutrito.models.constants import ROLE_ADMIN, ROLE_PATIENT
from nutrito.utils.decorators import audit_log, require_role
from .controllers import (
    auth_controller, appointment_controller, nutritionist_controller,
    patient_controller, document_controller
)


# --- Authentication Endpoints ---
@api_bp.route('/auth/register', methods=['POST'])
@limiter.limit("5 per hour")
@audit_log("USER_REGISTRATION", "users")
def register():
    return auth_controller.register_patient()

@api_bp.route('/auth/login', methods=['POST'])
@limiter.limit("10 per minute")
@audit_log("USER_LOGIN", "authentication")
def login():
    return auth_controller.login_user()

@api_bp.route('/auth/logout', methods=['POST'])
@jwt_required()
@audit_log("USER_LOGOUT", "authentication")
def logout():
    return auth_controller.logout_user()

@api_bp.route('/auth/refresh', methods=['POST'])
@jwt_required(refresh=True)
def refresh():
    return auth_controller.refresh_token()


# --- Nutritionist Endpoints ---
@api_bp.route('/nutricionistas', methods=['GET'])
@jwt_required()
def search_nutritionists_route():
    return nutritionist_controller.search_nutritionists()

@api_bp.route('/nutricionistas/<string:nutritionist_id>', methods=['GET'])
@jwt_required()
def get_nutritionist_route(nutritionist_id):
    return nutritionist_controller.get_nutritionist(nutritionist_id)

@api_bp.route('/nutricionistas/<string:nutritionist_id>/disponibilidad', methods=['GET'])
@jwt_required()
def check_availability_route(nutritionist_id):
    return nutritionist_controller.check_availability(nutritionist_id)

@api_bp.route('/nutricionistas/<string:nutritionist_id>/horarios', methods=['GET'])
@jwt_required()
def get_schedule_route(nutritionist_id):
    return nutritionist_controller.get_schedule(nutritionist_id)


# --- Appointment Endpoints ---
@api_bp.route('/turnos', methods=['POST'])
@jwt_required()
@limiter.limit("30 per hour")
@audit_log("BOOK_APPOINTMENT", "appointments")
@require_role(ROLE_PATIENT)
def book_appointment_route():
    return appointment_controller.book_appointment()

@api_bp.route('/turnos/proximos', methods=['GET'])
@jwt_required()
@require_role(ROLE_PATIENT)
def upcoming_appointments_route():
    return appointment_controller.upcoming_appointments()

@api_bp.route('/turnos/historial', methods=['GET'])
@jwt_required()
@require_role(ROLE_PATIENT)
def appointment_history_route():
    return appointment_controller.appointment_history()

@api_bp.route('/turnos/<string:appointment_id>', methods=['GET'])
@jwt_required()
@audit_log("VIEW_APPOINTMENT", "appointments")
@require_role(ROLE_PATIENT, ROLE_ADMIN)
def get_appointment_route(appointment_id):
    return appointment_controller.get_appointment(appointment_id)

@api_bp.route('/turnos/<string:appointment_id>/cancelar', methods=['PATCH'])
@jwt_required()
@audit_log("CANCEL_APPOINTMENT", "appointments")
@require_role(ROLE_PATIENT, ROLE_ADMIN)
def cancel_appointment_route(appointment_id):
    return appointment_controller.cancel_appointment(appointment_id)

@api_bp.route('/turnos/<string:appointment_id>/reprogramar', methods=['PATCH'])
@jwt_required()
@audit_log("RESCHEDULE_APPOINTMENT", "appointments")
@require_role(ROLE_PATIENT, ROLE_ADMIN)
def reschedule_appointment_route(appointment_id):
    return appointment_controller.reschedule_appointment(appointment_id)


# --- Document Endpoints ---
@api_bp.route('/turnos/<string:appointment_id>/documentos', methods=['POST'])
@jwt_required()
@limiter.limit("20 per hour")
@audit_log("ATTACH_DOCUMENT", "documents")
@require_role(ROLE_PATIENT, ROLE_ADMIN)
def attach_document_route(appointment_id):
    return document_controller.attach_document(appointment_id)

@api_bp.route('/turnos/<string:appointment_id>/documentos', methods=['GET'])
@jwt_required()
@audit_log("VIEW_APPOINTMENT_DOCUMENTS", "documents")
@require_role(ROLE_PATIENT, ROLE_ADMIN)
def appointment_documents_route(appointment_id):
    return document_controller.appointment_documents(appointment_id)

@api_bp.route('/documentos/mis-documentos', methods=['GET'])
@jwt_required()
@require_role(ROLE_PATIENT)
def my_documents_route():
    return document_controller.my_documents()

@api_bp.route('/documentos/estadisticas', methods=['GET'])
@jwt_required()
@require_role(ROLE_PATIENT)
def document_stats_route():
    return document_controller.document_stats()

@api_bp.route('/documentos/<string:document_id>/descargar', methods=['GET'])
@jwt_required()
@audit_log("DOWNLOAD_DOCUMENT", "documents")
@require_role(ROLE_PATIENT, ROLE_ADMIN)
def download_document_route(document_id):
    return document_controller.download_document(document_id)

@api_bp.route('/documentos/<string:document_id>', methods=['DELETE'])
@jwt_required()
@audit_log("DELETE_DOCUMENT", "documents")
@require_role(ROLE_PATIENT, ROLE_ADMIN)
def delete_document_route(document_id):
    return document_controller.delete_document(document_id)


# --- Patient Endpoints ---
@api_bp.route('/pacientes/mi-perfil', methods=['GET'])
@jwt_required()
@audit_log("VIEW_OWN_PROFILE", "patients")
@require_role(ROLE_PATIENT)
def my_profile_route():
    return patient_controller.get_my_profile()

@api_bp.route('/pacientes/mis-turnos/proximos', methods=['GET'])
@jwt_required()
@require_role(ROLE_PATIENT)
def my_upcoming_appointments_route():
    return appointment_controller.upcoming_appointments()

@api_bp.route('/pacientes/<string:patient_id>', methods=['GET'])
@jwt_required()
@audit_log("VIEW_PATIENT", "patients")
@require_role(ROLE_PATIENT, ROLE_ADMIN)
def get_patient_route(patient_id):
    return patient_controller.get_patient(patient_id)

@api_bp.route('/pacientes/<string:patient_id>', methods=['PATCH'])
@jwt_required()
@audit_log("UPDATE_PATIENT", "patients")
@require_role(ROLE_PATIENT, ROLE_ADMIN)
def update_patient_route(patient_id):
    return patient_controller.update_patient(patient_id)

@api_bp.route('/pacientes/<string:patient_id>/turnos', methods=['GET'])
@jwt_required()
@audit_log("VIEW_PATIENT_APPOINTMENTS", "appointments")
@require_role(ROLE_PATIENT, ROLE_ADMIN)
def patient_appointments_route(patient_id):
    return appointment_controller.patient_appointments(patient_id)

@api_bp.route('/pacientes/<string:patient_id>/nutricionistas', methods=['GET'])
@jwt_required()
@require_role(ROLE_PATIENT, ROLE_ADMIN)
def linked_nutritionists_route(patient_id):
    return patient_controller.linked_nutritionists(patient_id)

@api_bp.route('/pacientes/<string:patient_id>/resumen', methods=['GET'])
@jwt_required()
@require_role(ROLE_PATIENT, ROLE_ADMIN)
def activity_summary_route(patient_id):
    return patient_controller.activity_summary(patient_id)
