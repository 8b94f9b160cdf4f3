# /nutrito/models/nutritionist_models.py
from datetime import datetime
from nutrito.extensions import db
from nutrito.models.constants import WEEKDAYS


class Nutritionist(db.Model):
    """Professional offering consultations. Read-mostly from the scheduling side."""
    __tablename__ = 'nutritionists'

    id = db.Column(db.String(36), primary_key=True)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), unique=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    license_number = db.Column(db.String(50), unique=True, nullable=False)
    rating = db.Column(db.Numeric(3, 2), default=0)
    total_reviews = db.Column(db.Integer, default=0)
    photo_url = db.Column(db.String(1024))
    experience = db.Column(db.Text)
    description = db.Column(db.Text)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    specialty_rows = db.relationship('NutritionistSpecialty', cascade="all, delete-orphan", lazy='selectin')
    modality_rows = db.relationship('NutritionistModality', cascade="all, delete-orphan", lazy='selectin')
    attention_hours = db.relationship(
        'AttentionHour',
        cascade="all, delete-orphan",
        order_by=lambda: [AttentionHour.weekday, AttentionHour.start_time],
        lazy='selectin'
    )
    appointments = db.relationship('Appointment', back_populates='nutritionist', lazy='dynamic')

    @property
    def specialties(self):
        return sorted(row.name for row in self.specialty_rows)

    @specialties.setter
    def specialties(self, names):
        self.specialty_rows = [NutritionistSpecialty(name=name) for name in dict.fromkeys(names or [])]

    @property
    def modalities(self):
        return sorted(row.name for row in self.modality_rows)

    @modalities.setter
    def modalities(self, names):
        self.modality_rows = [NutritionistModality(name=name) for name in dict.fromkeys(names or [])]

    def summary(self):
        """Fields shown in search results and embedded in appointments."""
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'license_number': self.license_number,
            'specialties': self.specialties,
            'modalities': self.modalities,
            'rating': float(self.rating or 0),
            'total_reviews': self.total_reviews or 0,
            'photo_url': self.photo_url,
        }

    def to_dict(self):
        return {
            **self.summary(),
            'experience': self.experience,
            'description': self.description,
            'attention_hours': [hour.to_dict() for hour in self.attention_hours],
        }

    def __repr__(self):
        return f'<Nutritionist {self.id}: {self.first_name} {self.last_name}>'


class NutritionistSpecialty(db.Model):
    __tablename__ = 'nutritionist_specialties'

    nutritionist_id = db.Column(db.String(36), db.ForeignKey('nutritionists.id'), primary_key=True)
    name = db.Column(db.String(50), primary_key=True)


class NutritionistModality(db.Model):
    __tablename__ = 'nutritionist_modalities'

    nutritionist_id = db.Column(db.String(36), db.ForeignKey('nutritionists.id'), primary_key=True)
    name = db.Column(db.String(20), primary_key=True)


class AttentionHour(db.Model):
    """Weekly opening range of a nutritionist (weekday 0 is Monday)."""
    __tablename__ = 'attention_hours'

    id = db.Column(db.Integer, primary_key=True)
    nutritionist_id = db.Column(db.String(36), db.ForeignKey('nutritionists.id'), nullable=False, index=True)
    weekday = db.Column(db.Integer, nullable=False)
    start_time = db.Column(db.Time, nullable=False)
    end_time = db.Column(db.Time, nullable=False)

    def to_dict(self):
        return {
            'day': WEEKDAYS[self.weekday],
            'start_time': self.start_time.strftime('%H:%M'),
            'end_time': self.end_time.strftime('%H:%M'),
        }


class Review(db.Model):
    __tablename__ = 'reviews'

    id = db.Column(db.String(36), primary_key=True)
    nutritionist_id = db.Column(db.String(36), db.ForeignKey('nutritionists.id'), nullable=False, index=True)
    patient_id = db.Column(db.String(36), db.ForeignKey('patients.id'), nullable=False)
    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    patient = db.relationship('Patient')

    def to_dict(self):
        # Only the initial of the first name is exposed publicly
        author = None
        if self.patient:
            author = f"{self.patient.first_name[:1]}. {self.patient.last_name}"
        return {
            'id': self.id,
            'patient_name': author,
            'rating': self.rating,
            'comment': self.comment,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
