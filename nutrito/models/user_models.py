from datetime import datetime
from nutrito.extensions import db, bcrypt
from nutrito.models.constants import ROLE_PATIENT


class User(db.Model):
    """Login account. Patients share their primary key with this row."""
    __tablename__ = 'users'

    id = db.Column(db.String(36), primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_PATIENT)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_login = db.Column(db.DateTime)

    patient_profile = db.relationship('Patient', back_populates='user', uselist=False, cascade="all, delete-orphan")

    @staticmethod
    def normalize_email(email: str) -> str:
        return (email or '').strip().lower()

    def set_password(self, password: str) -> None:
        """Hashes and sets the user's password, enforcing a minimum length."""
        if not self._validate_password_strength(password):
            raise ValueError("Password must be at least 8 characters and contain letters and digits")
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password: str) -> bool:
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'role': self.role,
            'is_active': self.is_active,
            'last_login': self.last_login.isoformat() if self.last_login else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    @staticmethod
    def _validate_password_strength(password: str) -> bool:
        return (bool(password) and len(password) >= 8 and
                any(c.isalpha() for c in password) and
                any(c.isdigit() for c in password))


class Patient(db.Model):
    """Patient profile. Its id is the id of the owning login account."""
    __tablename__ = 'patients'

    id = db.Column(db.String(36), db.ForeignKey('users.id'), primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    phone = db.Column(db.String(30))
    is_active = db.Column(db.Boolean, default=True)
    registered_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime)

    user = db.relationship('User', back_populates='patient_profile')
    appointments = db.relationship('Appointment', back_populates='patient', lazy='dynamic')

    def summary(self):
        """Display fields embedded into appointment responses."""
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'phone': self.phone,
        }

    def to_dict(self):
        return {
            **self.summary(),
            'registered_at': self.registered_at.isoformat() if self.registered_at else None,
        }

    def __repr__(self):
        return f'<Patient {self.id}: {self.first_name} {self.last_name}>'
