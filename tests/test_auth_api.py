from nutrito.extensions import db
from nutrito.models.system_models import AuditLog
from nutrito.models.user_models import Patient, User
from tests.conftest import PASSWORD


def _register(client, **overrides):
    body = {
        'email': 'ana@example.com',
        'password': 'Secret123',
        'first_name': 'Ana',
        'last_name': 'García',
        'phone': '+54 11 5555 0000',
    }
    body.update(overrides)
    return client.post('/v1/auth/register', json=body)


def test_register_creates_account_and_profile(client):
    response = _register(client, email='Ana@Example.com ')

    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['user']['role'] == 'patient'
    assert data['user']['email'] == 'ana@example.com'
    assert data['patient']['id'] == data['user']['id']
    assert db.session.get(Patient, data['user']['id']) is not None

    entry = AuditLog.query.filter_by(action='USER_REGISTRATION').one()
    assert entry.user_id == data['user']['id']
    assert entry.resource_id == 'Ana@Example.com '


def test_register_duplicate_email(client):
    _register(client)

    response = _register(client)

    assert response.status_code == 409
    assert response.get_json()['error']['code'] == 'EMAIL_ALREADY_EXISTS'


def test_register_weak_password(client):
    response = _register(client, password='short')

    assert response.status_code == 400
    assert response.get_json()['error']['details'][0]['field'] == 'password'
    assert User.query.count() == 0


def test_register_missing_fields(client):
    response = client.post('/v1/auth/register', json={'email': 'not-an-email'})

    assert response.status_code == 400
    fields = {detail['field'] for detail in response.get_json()['error']['details']}
    assert {'email', 'password', 'first_name', 'last_name'} <= fields


def test_login_returns_tokens_with_role(client, make_patient):
    patient = make_patient(email='login@example.com')

    response = client.post('/v1/auth/login', json={'email': 'LOGIN@example.com', 'password': PASSWORD})

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['access_token'] and data['refresh_token']
    assert data['user']['id'] == patient.id
    assert data['patient']['first_name'] == patient.first_name

    profile = client.get('/v1/pacientes/mi-perfil', headers={'Authorization': f"Bearer {data['access_token']}"})
    assert profile.status_code == 200


def test_login_with_wrong_password(client, make_patient):
    make_patient(email='login@example.com')

    response = client.post('/v1/auth/login', json={'email': 'login@example.com', 'password': 'Wrong1234'})

    assert response.status_code == 401
    assert response.get_json()['error']['code'] == 'INVALID_CREDENTIALS'


def test_login_inactive_account(client, make_patient):
    patient = make_patient(email='gone@example.com')
    patient.user.is_active = False
    db.session.commit()

    response = client.post('/v1/auth/login', json={'email': 'gone@example.com', 'password': PASSWORD})

    assert response.status_code == 403


def test_logout_revokes_the_token(client, make_patient, auth_headers):
    headers = auth_headers(make_patient())

    assert client.post('/v1/auth/logout', headers=headers).status_code == 200

    response = client.get('/v1/pacientes/mi-perfil', headers=headers)
    assert response.status_code == 401
    assert response.get_json()['error']['code'] == 'TOKEN_REVOKED'


def test_refresh_issues_new_access_token(client, make_patient):
    make_patient(email='refresh@example.com')
    tokens = client.post(
        '/v1/auth/login', json={'email': 'refresh@example.com', 'password': PASSWORD}
    ).get_json()['data']

    response = client.post('/v1/auth/refresh', headers={'Authorization': f"Bearer {tokens['refresh_token']}"})

    assert response.status_code == 200
    access_token = response.get_json()['data']['access_token']
    profile = client.get('/v1/pacientes/mi-perfil', headers={'Authorization': f'Bearer {access_token}'})
    assert profile.status_code == 200


def test_invalid_token(client):
    response = client.get('/v1/pacientes/mi-perfil', headers={'Authorization': 'Bearer not.a.token'})

    assert response.status_code == 401
    assert response.get_json()['error']['code'] == 'INVALID_TOKEN'


def test_deactivated_account_with_valid_token(client, make_patient, auth_headers):
    patient = make_patient()
    headers = auth_headers(patient)
    patient.user.is_active = False
    db.session.commit()

    response = client.get('/v1/pacientes/mi-perfil', headers=headers)

    assert response.status_code == 403
    assert response.get_json()['error']['code'] == 'ACCOUNT_DISABLED'


def test_register_and_login_with_non_object_body(client):
    for path in ('/v1/auth/register', '/v1/auth/login'):
        response = client.post(path, json=['ana@example.com'])

        assert response.status_code == 400
        assert response.get_json()['error']['code'] == 'VALIDATION_ERROR'
