# /nutrito/services/errors.py
"""Typed failures raised by the service layer.

Each error carries a stable machine-readable ``code`` and the HTTP status the
boundary should answer with. ``register_error_handlers`` turns them into the
``{error: {code, message, details?}, timestamp, path}`` envelope.
"""


class NutritoError(Exception):
    code = 'INTERNAL_ERROR'
    message = 'Internal server error'
    status_code = 500

    def __init__(self, message=None, code=None, status_code=None, details=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        if code:
            self.code = code
        if status_code:
            self.status_code = status_code
        self.details = details


# --- Not found ---

class NutritionistNotFound(NutritoError):
    code = 'NUTRITIONIST_NOT_FOUND'
    message = 'Nutritionist not found'
    status_code = 404


class AppointmentNotFound(NutritoError):
    code = 'APPOINTMENT_NOT_FOUND'
    message = 'Appointment not found'
    status_code = 404


class PatientNotFound(NutritoError):
    code = 'PATIENT_NOT_FOUND'
    message = 'Patient not found'
    status_code = 404


class DocumentNotFound(NutritoError):
    code = 'DOCUMENT_NOT_FOUND'
    message = 'Document not found'
    status_code = 404


class StoredFileNotFound(NutritoError):
    code = 'FILE_NOT_FOUND'
    message = 'The file is not available on the server'
    status_code = 404


# --- Conflict ---

class SlotUnavailable(NutritoError):
    code = 'APPOINTMENT_NOT_AVAILABLE'
    message = 'The selected date and time is not available'
    status_code = 409


class NewScheduleUnavailable(SlotUnavailable):
    code = 'NEW_SCHEDULE_NOT_AVAILABLE'
    message = 'The new date and time is not available'


class CannotCancel(NutritoError):
    code = 'APPOINTMENT_CANNOT_BE_CANCELLED'
    message = 'The appointment cannot be cancelled in its current state'
    status_code = 409


class EmailAlreadyExists(NutritoError):
    code = 'EMAIL_ALREADY_EXISTS'
    message = 'The email is already registered'
    status_code = 409


# --- Forbidden ---

class AccessDenied(NutritoError):
    code = 'ACCESS_DENIED'
    message = 'You do not have access to this resource'
    status_code = 403


# --- Validation ---

class ValidationError(NutritoError):
    code = 'VALIDATION_ERROR'
    message = 'Invalid input data'
    status_code = 400

    def __init__(self, details=None, message=None, code=None):
        super().__init__(message=message, code=code, details=details)

    @classmethod
    def for_field(cls, field, message):
        return cls(details=[{'field': field, 'message': message}])
