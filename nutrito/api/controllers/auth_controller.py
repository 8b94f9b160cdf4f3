import uuid
from datetime import datetime, timezone
from flask import request
from flask_jwt_extended import (
    create_access_token, create_refresh_token,
    get_jwt_identity, get_jwt
)
from nutrito.extensions import db
from nutrito.models.constants import ROLE_PATIENT
from nutrito.models.user_models import User, Patient
from nutrito.models.system_models import RevokedToken
from nutrito.services.errors import EmailAlreadyExists, ValidationError
from nutrito.utils.responses import success_response, error_response
from nutrito.utils.validators import json_object, validate_registration

def _tokens_for(user):
    # Identity is the account id, which is also the patient id for patients
    return {
        'access_token': create_access_token(identity=user.id, additional_claims={'role': user.role}),
        'refresh_token': create_refresh_token(identity=user.id, additional_claims={'role': user.role}),
    }

def register_patient():
    """Creates a login account together with its patient profile."""
    data = validate_registration(json_object(request.get_json(silent=True)))
    email = User.normalize_email(data['email'])

    if User.query.filter_by(email=email).first():
        raise EmailAlreadyExists()

    user = User(id=str(uuid.uuid4()), email=email, role=ROLE_PATIENT)
    try:
        user.set_password(data['password'])
    except ValueError as e:
        raise ValidationError.for_field('password', str(e))

    patient = Patient(
        id=user.id,
        first_name=data['first_name'],
        last_name=data['last_name'],
        email=email,
        phone=data['phone'],
    )
    user.patient_profile = patient
    db.session.add(user)
    db.session.commit()

    return success_response(
        {'user': user.to_dict(), 'patient': patient.to_dict()},
        status=201,
        message='Patient registered successfully'
    )

def login_user():
    data = json_object(request.get_json(silent=True))
    if not data.get('email') or not data.get('password'):
        raise ValidationError(details=[
            {'field': field, 'message': 'is required'}
            for field in ('email', 'password') if not data.get(field)
        ])

    user = User.query.filter_by(email=User.normalize_email(data['email'])).first()
    if not user or not user.check_password(data['password']):
        return error_response('INVALID_CREDENTIALS', 'Invalid email or password', 401)
    if not user.is_active:
        return error_response('ACCOUNT_DISABLED', 'Account deactivated', 403)

    user.last_login = datetime.utcnow()
    db.session.commit()

    payload = {**_tokens_for(user), 'user': user.to_dict()}
    if user.patient_profile:
        payload['patient'] = user.patient_profile.to_dict()
    return success_response(payload)

def logout_user():
    claims = get_jwt()
    expires_at = datetime.fromtimestamp(claims['exp'], tz=timezone.utc).replace(tzinfo=None)
    db.session.add(RevokedToken(jti=claims['jti'], expires_at=expires_at))
    db.session.commit()
    return success_response(None, message='Successfully logged out')

def refresh_token():
    user = db.session.get(User, get_jwt_identity())
    if not user or not user.is_active:
        return error_response('ACCOUNT_DISABLED', 'User not found or inactive', 403)

    access_token = create_access_token(identity=user.id, additional_claims={'role': user.role})
    return success_response({'access_token': access_token})
