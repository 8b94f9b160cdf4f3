# /nutrito/models/document_models.py
from datetime import datetime
from nutrito.extensions import db


class Document(db.Model):
    """Metadata of a file attached to an appointment. The blob lives in the upload folder."""
    __tablename__ = 'documents'

    id = db.Column(db.String(36), primary_key=True)
    patient_id = db.Column(db.String(36), db.ForeignKey('patients.id'), nullable=False, index=True)
    appointment_id = db.Column(db.String(36), db.ForeignKey('appointments.id'), index=True)

    # File metadata
    stored_filename = db.Column(db.String(255), nullable=False)
    display_name = db.Column(db.String(255), nullable=False)
    url = db.Column(db.String(1024), nullable=False)
    type = db.Column(db.String(30), nullable=False)
    size = db.Column(db.Integer)

    uploaded_at = db.Column(db.DateTime, default=datetime.utcnow)

    appointment = db.relationship('Appointment', back_populates='documents')

    def to_dict(self):
        """Convert document to dictionary for API responses."""
        data = {
            'id': self.id,
            'patient_id': self.patient_id,
            'appointment_id': self.appointment_id,
            'stored_filename': self.stored_filename,
            'display_name': self.display_name,
            'url': self.url,
            'type': self.type,
            'size': self.size,
            'uploaded_at': self.uploaded_at.isoformat() if self.uploaded_at else None,
            'appointment': None,
        }
        if self.appointment:
            nutritionist = self.appointment.nutritionist
            data['appointment'] = {
                'date': self.appointment.date.isoformat(),
                'time': self.appointment.time.strftime('%H:%M'),
                'nutritionist': {
                    'first_name': nutritionist.first_name,
                    'last_name': nutritionist.last_name,
                } if nutritionist else None,
            }
        return data

    def __repr__(self):
        return f'<Document {self.id}: {self.display_name} for Patient {self.patient_id}>'
