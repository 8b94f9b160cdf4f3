# /nutrito/repositories/link_repository.py
from nutrito.extensions import db
from nutrito.models.appointment_models import PatientNutritionistLink


class LinkRepository:

    def find_active(self, patient_id, nutritionist_id):
        return PatientNutritionistLink.query.filter_by(
            patient_id=patient_id, nutritionist_id=nutritionist_id, active=True
        ).first()

    def create(self, patient_id, nutritionist_id):
        link = PatientNutritionistLink(patient_id=patient_id, nutritionist_id=nutritionist_id, active=True)
        db.session.add(link)
        return link
