# /nutrito/services/patient_service.py
import logging

from nutrito.extensions import db
from nutrito.models.constants import APPOINTMENT_STATUSES
from nutrito.models.user_models import User
from nutrito.repositories.appointment_repository import AppointmentRepository
from nutrito.repositories.document_repository import DocumentRepository
from nutrito.repositories.patient_repository import PatientRepository
from nutrito.services.errors import AccessDenied, EmailAlreadyExists, PatientNotFound

logger = logging.getLogger(__name__)


class PatientService:

    def __init__(self, session, patients=None, appointments=None, documents=None):
        self.session = session
        self.patients = patients or PatientRepository()
        self.appointments = appointments or AppointmentRepository()
        self.documents = documents or DocumentRepository()

    def profile(self, patient_id):
        if not self.session.can_access_patient(patient_id):
            raise AccessDenied()
        patient = self.patients.get(patient_id)
        if patient is None:
            raise PatientNotFound()
        return patient

    def update_profile(self, patient_id, changes):
        patient = self.profile(patient_id)

        if 'email' in changes:
            changes['email'] = User.normalize_email(changes['email'])
            if self.patients.email_taken(changes['email'], exclude_id=patient_id):
                raise EmailAlreadyExists()

        self.patients.update_profile(patient, changes)
        db.session.commit()
        logger.info("Patient %s updated fields %s", patient_id, sorted(changes))
        return patient

    def linked_nutritionists(self, patient_id):
        self.profile(patient_id)
        return [
            {**link.nutritionist.summary(), 'linked_at': link.started_at.isoformat()}
            for link in self.patients.linked_nutritionists(patient_id)
        ]

    def activity_summary(self, patient_id):
        self.profile(patient_id)
        counts = self.appointments.status_counts(patient_id)
        return {
            'appointments': {status: counts.get(status, 0) for status in APPOINTMENT_STATUSES},
            'total_documents': self.documents.count_for_patient(patient_id),
            'linked_nutritionists': len(self.patients.linked_nutritionists(patient_id)),
        }
