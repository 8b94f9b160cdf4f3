import uuid
from datetime import time

import pytest
from flask_jwt_extended import create_access_token

from nutrito import create_app
from nutrito.extensions import db
from nutrito.models.constants import ROLE_ADMIN, ROLE_NUTRITIONIST, ROLE_PATIENT
from nutrito.models.nutritionist_models import AttentionHour, Nutritionist
from nutrito.models.user_models import Patient, User
from nutrito.services.session import SessionContext

PASSWORD = 'Secret123'


@pytest.fixture
def app(tmp_path):
    app = create_app('testing')
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(role=ROLE_PATIENT, email=None):
        user = User(
            id=str(uuid.uuid4()),
            email=email or f'{uuid.uuid4().hex[:10]}@example.com',
            role=role,
        )
        user.set_password(PASSWORD)
        db.session.add(user)
        db.session.commit()
        return user
    return _make


@pytest.fixture
def make_patient(app):
    def _make(first_name='Ana', last_name='García', email=None):
        email = email or f'{uuid.uuid4().hex[:10]}@example.com'
        user = User(id=str(uuid.uuid4()), email=email, role=ROLE_PATIENT)
        user.set_password(PASSWORD)
        user.patient_profile = Patient(
            id=user.id, first_name=first_name, last_name=last_name, email=email, phone='+54 11 5555 0000'
        )
        db.session.add(user)
        db.session.commit()
        return user.patient_profile
    return _make


@pytest.fixture
def make_nutritionist(app):
    def _make(first_name='Laura', last_name='Gómez', specialties=('clinical',), modalities=('in_person',),
              rating=4.5, total_reviews=10, hours=((0, 9, 13),), is_active=True):
        nutritionist = Nutritionist(
            id=str(uuid.uuid4()),
            first_name=first_name,
            last_name=last_name,
            license_number=f'MN-{uuid.uuid4().hex[:8]}',
            rating=rating,
            total_reviews=total_reviews,
            is_active=is_active,
        )
        nutritionist.specialties = specialties
        nutritionist.modalities = modalities
        nutritionist.attention_hours = [
            AttentionHour(weekday=weekday, start_time=time(start), end_time=time(end))
            for weekday, start, end in hours
        ]
        db.session.add(nutritionist)
        db.session.commit()
        return nutritionist
    return _make


@pytest.fixture
def admin(make_user):
    return make_user(role=ROLE_ADMIN)


@pytest.fixture
def session_for():
    def _session(patient_or_user):
        role = getattr(patient_or_user, 'role', ROLE_PATIENT)
        return SessionContext(user_id=patient_or_user.id, role=role)
    return _session


@pytest.fixture
def auth_headers(app):
    def _headers(patient_or_user):
        role = getattr(patient_or_user, 'role', ROLE_PATIENT)
        token = create_access_token(identity=patient_or_user.id, additional_claims={'role': role})
        return {'Authorization': f'Bearer {token}'}
    return _headers


@pytest.fixture
def nutritionist_user(make_user):
    return make_user(role=ROLE_NUTRITIONIST)
