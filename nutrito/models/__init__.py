# Importing every model registers its table on db.metadata
from nutrito.models.user_models import User, Patient
from nutrito.models.nutritionist_models import (
    Nutritionist, NutritionistSpecialty, NutritionistModality, AttentionHour, Review
)
from nutrito.models.appointment_models import Appointment, PatientNutritionistLink
from nutrito.models.document_models import Document
from nutrito.models.system_models import AuditLog, RevokedToken
