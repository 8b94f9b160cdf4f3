# /nutrito/services/session.py
from dataclasses import dataclass

from nutrito.models.constants import ROLE_ADMIN, ROLE_PATIENT


@dataclass(frozen=True)
class SessionContext:
    """Identity of the caller, built per request from the bearer token and
    handed to services explicitly."""
    user_id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_patient(self) -> bool:
        return self.role == ROLE_PATIENT

    def can_access_patient(self, patient_id) -> bool:
        """Owning patient or an admin."""
        return self.is_admin or (self.is_patient and self.user_id == patient_id)
