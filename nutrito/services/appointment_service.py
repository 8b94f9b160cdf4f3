# /nutrito/services/appointment_service.py
"""Appointment lifecycle: book, fetch, cancel, reschedule and list.

Every operation receives the caller's ``SessionContext`` and raises the typed
errors of ``nutrito.services.errors``. Persistence errors that are not a slot
conflict propagate unchanged.
"""
import logging
import uuid

from sqlalchemy.exc import IntegrityError

from nutrito.extensions import db
from nutrito.models.appointment_models import Appointment
from nutrito.models.constants import ACTIVE_STATUSES, STATUS_PENDING
from nutrito.repositories.appointment_repository import AppointmentRepository
from nutrito.repositories.nutritionist_repository import NutritionistRepository
from nutrito.repositories.patient_repository import PatientRepository
from nutrito.services.availability import AvailabilityChecker
from nutrito.services.errors import (
    AccessDenied, AppointmentNotFound, CannotCancel, NewScheduleUnavailable,
    NutritionistNotFound, PatientNotFound, SlotUnavailable
)
from nutrito.services.linkage import ensure_link
from nutrito.utils.pagination import Page, clamp_window

logger = logging.getLogger(__name__)


class AppointmentService:

    def __init__(self, session, appointments=None, nutritionists=None, patients=None,
                 availability=None, default_limit=20, max_limit=100):
        self.session = session
        self.appointments = appointments or AppointmentRepository()
        self.nutritionists = nutritionists or NutritionistRepository()
        self.patients = patients or PatientRepository()
        self.availability = availability or AvailabilityChecker(self.appointments)
        self.default_limit = default_limit
        self.max_limit = max_limit

    def book(self, nutritionist_id, day, at, modality, payment_method, reason=None):
        """Create a pending appointment for the calling patient."""
        patient_id = self.session.user_id

        if self.nutritionists.get_active(nutritionist_id) is None:
            raise NutritionistNotFound()

        if not self.availability.is_available(nutritionist_id, day, at):
            raise SlotUnavailable()

        appointment = Appointment(
            id=str(uuid.uuid4()),
            patient_id=patient_id,
            nutritionist_id=nutritionist_id,
            date=day,
            time=at,
            modality=modality,
            status=STATUS_PENDING,
            payment_method=payment_method,
            reason=reason,
        )
        self.appointments.add(appointment)
        appointment_id = appointment.id
        self._commit_slot(nutritionist_id, day, at, SlotUnavailable)

        logger.info(
            "Appointment %s booked: patient=%s nutritionist=%s at %s %s",
            appointment_id, patient_id, nutritionist_id, day.isoformat(), at.strftime('%H:%M'),
        )

        ensure_link(patient_id, nutritionist_id)

        return self.appointments.get(appointment_id)

    def get(self, appointment_id):
        appointment = self.appointments.get(appointment_id)
        if appointment is None:
            raise AppointmentNotFound()
        self._check_owner(appointment)
        return appointment

    def cancel(self, appointment_id, reason, notify_nutritionist=True):
        """Move a pending or confirmed appointment to cancelled."""
        self.get(appointment_id)

        if self.appointments.mark_cancelled(appointment_id, reason) == 0:
            db.session.rollback()
            raise CannotCancel()
        db.session.commit()

        logger.info("Appointment %s cancelled by %s", appointment_id, self.session.user_id)
        if notify_nutritionist:
            # No notification channel is wired yet
            logger.info("Nutritionist notification requested for appointment %s", appointment_id)

        return self.appointments.get(appointment_id)

    def reschedule(self, appointment_id, new_day, new_at, new_modality=None):
        """Move the appointment to another slot of the same nutritionist.

        Identity, patient, nutritionist and status are preserved.
        """
        appointment = self.get(appointment_id)
        nutritionist_id = appointment.nutritionist_id

        if not self.availability.is_available(nutritionist_id, new_day, new_at, exclude_id=appointment_id):
            raise NewScheduleUnavailable()

        self.appointments.move(appointment, new_day, new_at, new_modality)
        self._commit_slot(nutritionist_id, new_day, new_at, NewScheduleUnavailable, exclude_id=appointment_id)

        logger.info(
            "Appointment %s rescheduled to %s %s",
            appointment_id, new_day.isoformat(), new_at.strftime('%H:%M'),
        )
        return self.appointments.get(appointment_id)

    def list_for_patient(self, patient_id, statuses=None, limit=None, offset=0):
        """Page of a patient's appointments, newest first."""
        if not self.session.can_access_patient(patient_id):
            raise AccessDenied()
        if self.patients.get(patient_id) is None:
            raise PatientNotFound()

        limit, offset = clamp_window(limit, offset, self.default_limit, self.max_limit)
        items, total = self.appointments.list_for_patient(patient_id, statuses, limit, offset)
        return Page(items=items, total=total, limit=limit, offset=offset)

    def upcoming(self, limit=5):
        """Active appointments of the caller."""
        return self.list_for_patient(self.session.user_id, ACTIVE_STATUSES, limit, 0)

    def history(self, statuses=None, limit=None, offset=0):
        return self.list_for_patient(self.session.user_id, statuses, limit, offset)

    def _check_owner(self, appointment):
        if not self.session.can_access_patient(appointment.patient_id):
            logger.warning(
                "Access denied: %s tried to reach appointment %s", self.session.user_id, appointment.id
            )
            raise AccessDenied()

    def _commit_slot(self, nutritionist_id, day, at, conflict_error, exclude_id=None):
        """Commit a write that occupies a slot.

        A unique violation is reported as ``conflict_error`` when the slot is
        now held by another active appointment. Any other failure propagates.
        """
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            if self.appointments.count_active_in_slot(nutritionist_id, day, at, exclude_id=exclude_id) > 0:
                logger.info("Slot conflict for nutritionist %s at %s %s", nutritionist_id, day, at)
                raise conflict_error() from exc
            raise
