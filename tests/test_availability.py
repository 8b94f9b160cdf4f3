from datetime import date, time

import pytest

from nutrito.services.appointment_service import AppointmentService
from nutrito.services.availability import AvailabilityChecker

MONDAY = date(2025, 3, 10)


def _book(session, nutritionist, day=MONDAY, at=time(10, 0)):
    return AppointmentService(session).book(nutritionist.id, day, at, 'in_person', 'cash')


def test_free_slot_is_available(make_nutritionist):
    nutritionist = make_nutritionist()
    assert AvailabilityChecker().is_available(nutritionist.id, MONDAY, time(10, 0))


def test_active_appointment_takes_the_slot(make_patient, make_nutritionist, session_for):
    nutritionist = make_nutritionist()
    _book(session_for(make_patient()), nutritionist)

    checker = AvailabilityChecker()
    assert not checker.is_available(nutritionist.id, MONDAY, time(10, 0))
    assert checker.is_available(nutritionist.id, MONDAY, time(11, 0))
    assert checker.is_available(nutritionist.id, date(2025, 3, 11), time(10, 0))


def test_slot_is_per_nutritionist(make_patient, make_nutritionist, session_for):
    first = make_nutritionist()
    second = make_nutritionist(first_name='Martín', last_name='Pereyra')
    _book(session_for(make_patient()), first)

    assert AvailabilityChecker().is_available(second.id, MONDAY, time(10, 0))


def test_cancelled_appointment_frees_the_slot(make_patient, make_nutritionist, session_for):
    nutritionist = make_nutritionist()
    session = session_for(make_patient())
    appointment = _book(session, nutritionist)
    AppointmentService(session).cancel(appointment.id, 'Cannot attend')

    assert AvailabilityChecker().is_available(nutritionist.id, MONDAY, time(10, 0))


def test_excluded_appointment_does_not_block_its_own_slot(make_patient, make_nutritionist, session_for):
    nutritionist = make_nutritionist()
    appointment = _book(session_for(make_patient()), nutritionist)

    assert AvailabilityChecker().is_available(nutritionist.id, MONDAY, time(10, 0), exclude_id=appointment.id)


def test_available_slots_follow_attention_hours(make_patient, make_nutritionist, session_for):
    nutritionist = make_nutritionist(hours=((0, 9, 12), (0, 14, 16), (2, 9, 13)))
    _book(session_for(make_patient()), nutritionist, at=time(10, 0))

    slots = AvailabilityChecker().available_slots(nutritionist, MONDAY, slot_minutes=60)

    assert slots == [
        {'time': '09:00', 'available': True},
        {'time': '10:00', 'available': False},
        {'time': '11:00', 'available': True},
        {'time': '14:00', 'available': True},
        {'time': '15:00', 'available': True},
    ]


def test_no_slots_on_days_without_attention_hours(make_nutritionist):
    nutritionist = make_nutritionist(hours=((0, 9, 13),))
    assert AvailabilityChecker().available_slots(nutritionist, date(2025, 3, 11)) == []


def test_partial_slot_at_the_end_of_a_range_is_skipped(make_nutritionist):
    nutritionist = make_nutritionist(hours=((0, 9, 10),))
    slots = AvailabilityChecker().available_slots(nutritionist, MONDAY, slot_minutes=40)
    assert [slot['time'] for slot in slots] == ['09:00']


@pytest.mark.parametrize('slot_minutes', [0, -30])
def test_non_positive_slot_length_is_rejected(make_nutritionist, slot_minutes):
    nutritionist = make_nutritionist(hours=((0, 9, 13),))
    with pytest.raises(ValueError):
        AvailabilityChecker().available_slots(nutritionist, MONDAY, slot_minutes=slot_minutes)
