# /nutrito/services/availability.py
from datetime import datetime, timedelta

from nutrito.repositories.appointment_repository import AppointmentRepository


class AvailabilityChecker:
    """Answers whether a nutritionist's slot is free.

    A point-in-time read. The partial unique index on appointments is what
    actually keeps two active bookings out of the same slot.
    """

    def __init__(self, appointments=None):
        self.appointments = appointments or AppointmentRepository()

    def is_available(self, nutritionist_id, day, at, exclude_id=None):
        return self.appointments.count_active_in_slot(nutritionist_id, day, at, exclude_id=exclude_id) == 0

    def available_slots(self, nutritionist, day, slot_minutes=60):
        """Bookable times of ``day`` inside the nutritionist's attention hours.

        Returns a list of ``{'time': 'HH:MM', 'available': bool}`` in
        chronological order. Times that do not fit a whole slot before the
        end of a range are skipped.
        """
        if slot_minutes <= 0:
            raise ValueError('slot_minutes must be positive')
        step = timedelta(minutes=slot_minutes)
        slots = []
        for hours in nutritionist.attention_hours:
            if hours.weekday != day.weekday():
                continue
            cursor = datetime.combine(day, hours.start_time)
            end = datetime.combine(day, hours.end_time)
            while cursor + step <= end:
                at = cursor.time()
                slots.append({
                    'time': at.strftime('%H:%M'),
                    'available': self.is_available(nutritionist.id, day, at),
                })
                cursor += step
        slots.sort(key=lambda slot: slot['time'])
        return slots
