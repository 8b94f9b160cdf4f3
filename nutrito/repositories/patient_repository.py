# /nutrito/repositories/patient_repository.py
from datetime import datetime

from nutrito.extensions import db
from nutrito.models.appointment_models import PatientNutritionistLink
from nutrito.models.user_models import Patient, User

PROFILE_FIELDS = ('first_name', 'last_name', 'phone', 'email')


class PatientRepository:

    def get(self, patient_id):
        return Patient.query.filter_by(id=patient_id, is_active=True).first()

    def email_taken(self, email, exclude_id=None):
        """True when another account already uses this email."""
        query = User.query.filter(User.email == email)
        if exclude_id:
            query = query.filter(User.id != exclude_id)
        return db.session.query(query.exists()).scalar()

    def update_profile(self, patient, changes):
        for field in PROFILE_FIELDS:
            if field in changes:
                setattr(patient, field, changes[field])
        if 'email' in changes:
            # Login email follows the profile email
            patient.user.email = changes['email']
        patient.updated_at = datetime.utcnow()
        return patient

    def linked_nutritionists(self, patient_id):
        """Active links of the patient, newest first."""
        return (
            PatientNutritionistLink.query
            .filter_by(patient_id=patient_id, active=True)
            .order_by(PatientNutritionistLink.started_at.desc())
            .all()
        )
