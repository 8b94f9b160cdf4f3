# /nutrito/models/constants.py
"""Enumerated values shared by models, validators and services."""

# Appointment status
STATUS_PENDING = 'pending'
STATUS_CONFIRMED = 'confirmed'
STATUS_CANCELLED = 'cancelled'
STATUS_COMPLETED = 'completed'
STATUS_RESCHEDULED = 'rescheduled'

APPOINTMENT_STATUSES = (
    STATUS_PENDING,
    STATUS_CONFIRMED,
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_RESCHEDULED,
)

# A slot is taken while an appointment is in one of these states
ACTIVE_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED)
CANCELLABLE_STATUSES = ACTIVE_STATUSES

MODALITIES = ('in_person', 'remote', 'hybrid')

PAYMENT_METHODS = (
    'cash',
    'bank_transfer',
    'credit_card',
    'debit_card',
    'mercado_pago',
)

SPECIALTIES = (
    'clinical',
    'sports',
    'pediatric',
    'obesity',
    'diabetes',
    'celiac',
    'vegetarian',
)

DOCUMENT_TYPES = ('blood_test', 'imaging', 'medical_report', 'other')

# Monday is 0, matching date.weekday()
WEEKDAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')

ROLE_PATIENT = 'patient'
ROLE_NUTRITIONIST = 'nutritionist'
ROLE_ADMIN = 'admin'
ROLES = (ROLE_PATIENT, ROLE_NUTRITIONIST, ROLE_ADMIN)

REASON_MAX_LENGTH = 500
