from datetime import datetime
from nutrito.extensions import db
from nutrito.models.constants import STATUS_PENDING


class Appointment(db.Model):
    """One scheduled consultation between a patient and a nutritionist."""
    __tablename__ = 'appointments'
    __table_args__ = (
        # At most one active appointment per (nutritionist, date, time)
        db.Index(
            'uq_appointments_active_slot',
            'nutritionist_id', 'date', 'time',
            unique=True,
            postgresql_where=db.text("status IN ('pending', 'confirmed')"),
            sqlite_where=db.text("status IN ('pending', 'confirmed')"),
        ),
        db.Index('ix_appointments_patient_schedule', 'patient_id', 'date', 'time'),
    )

    id = db.Column(db.String(36), primary_key=True)
    patient_id = db.Column(db.String(36), db.ForeignKey('patients.id'), nullable=False)
    nutritionist_id = db.Column(db.String(36), db.ForeignKey('nutritionists.id'), nullable=False)

    date = db.Column(db.Date, nullable=False)
    time = db.Column(db.Time, nullable=False)
    modality = db.Column(db.String(20), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING)
    payment_method = db.Column(db.String(30), nullable=False)
    reason = db.Column(db.String(500))
    cancellation_reason = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, onupdate=datetime.utcnow)

    patient = db.relationship('Patient', back_populates='appointments')
    nutritionist = db.relationship('Nutritionist', back_populates='appointments')
    documents = db.relationship('Document', back_populates='appointment', lazy='dynamic')

    def to_dict(self, include_patient=True, include_nutritionist=True):
        """Format appointment data for API responses."""
        data = {
            'id': self.id,
            'patient_id': self.patient_id,
            'nutritionist_id': self.nutritionist_id,
            'date': self.date.isoformat(),
            'time': self.time.strftime('%H:%M'),
            'modality': self.modality,
            'status': self.status,
            'payment_method': self.payment_method,
            'reason': self.reason,
            'cancellation_reason': self.cancellation_reason,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_patient and self.patient:
            data['patient'] = self.patient.summary()
        if include_nutritionist and self.nutritionist:
            data['nutritionist'] = self.nutritionist.summary()
        return data

    def __repr__(self):
        return f'<Appointment {self.id}: {self.nutritionist_id} {self.date} {self.time} [{self.status}]>'


class PatientNutritionistLink(db.Model):
    """Relationship between a patient and a nutritionist, created on first booking."""
    __tablename__ = 'patient_nutritionist_links'
    __table_args__ = (
        db.Index(
            'uq_links_active_pair',
            'patient_id', 'nutritionist_id',
            unique=True,
            postgresql_where=db.text('active = true'),
            sqlite_where=db.text('active = 1'),
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    patient_id = db.Column(db.String(36), db.ForeignKey('patients.id'), nullable=False)
    nutritionist_id = db.Column(db.String(36), db.ForeignKey('nutritionists.id'), nullable=False)
    started_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    active = db.Column(db.Boolean, default=True, nullable=False)

    nutritionist = db.relationship('Nutritionist')
