# /nutrito/repositories/appointment_repository.py
from datetime import datetime

from sqlalchemy import func, update
from sqlalchemy.orm import joinedload

from nutrito.extensions import db
from nutrito.models.appointment_models import Appointment
from nutrito.models.constants import ACTIVE_STATUSES, CANCELLABLE_STATUSES, STATUS_CANCELLED


class AppointmentRepository:
    """Typed access to the appointments table."""

    def get(self, appointment_id):
        """Appointment joined with its patient and nutritionist, or None."""
        return (
            Appointment.query
            .options(joinedload(Appointment.patient), joinedload(Appointment.nutritionist))
            .filter(Appointment.id == appointment_id)
            .first()
        )

    def count_active_in_slot(self, nutritionist_id, day, at, exclude_id=None):
        query = db.session.query(func.count(Appointment.id)).filter(
            Appointment.nutritionist_id == nutritionist_id,
            Appointment.date == day,
            Appointment.time == at,
            Appointment.status.in_(ACTIVE_STATUSES),
        )
        if exclude_id:
            query = query.filter(Appointment.id != exclude_id)
        return query.scalar()

    def add(self, appointment):
        db.session.add(appointment)
        return appointment

    def mark_cancelled(self, appointment_id, reason):
        """Conditional status change. Returns the number of rows updated (0 or 1)."""
        result = db.session.execute(
            update(Appointment)
            .where(
                Appointment.id == appointment_id,
                Appointment.status.in_(CANCELLABLE_STATUSES),
            )
            .values(
                status=STATUS_CANCELLED,
                cancellation_reason=reason,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def move(self, appointment, day, at, modality=None):
        appointment.date = day
        appointment.time = at
        if modality:
            appointment.modality = modality
        appointment.updated_at = datetime.utcnow()
        return appointment

    def list_for_patient(self, patient_id, statuses=None, limit=20, offset=0):
        """Newest first. Returns (items, total)."""
        query = Appointment.query.filter(Appointment.patient_id == patient_id)
        if statuses:
            query = query.filter(Appointment.status.in_(statuses))

        total = query.order_by(None).count()
        items = (
            query.options(joinedload(Appointment.patient), joinedload(Appointment.nutritionist))
            .order_by(Appointment.date.desc(), Appointment.time.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )
        return items, total

    def status_counts(self, patient_id):
        rows = (
            db.session.query(Appointment.status, func.count(Appointment.id))
            .filter(Appointment.patient_id == patient_id)
            .group_by(Appointment.status)
            .all()
        )
        return {status: count for status, count in rows}
