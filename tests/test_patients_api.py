from datetime import date, time

from nutrito.services.appointment_service import AppointmentService


def test_my_profile(client, make_patient, auth_headers):
    patient = make_patient(first_name='Ana', last_name='García')

    response = client.get('/v1/pacientes/mi-perfil', headers=auth_headers(patient))

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['id'] == patient.id
    assert data['first_name'] == 'Ana'
    assert 'password_hash' not in data


def test_get_patient_as_owner_admin_and_stranger(client, make_patient, admin, auth_headers):
    patient = make_patient()

    assert client.get(f'/v1/pacientes/{patient.id}', headers=auth_headers(patient)).status_code == 200
    assert client.get(f'/v1/pacientes/{patient.id}', headers=auth_headers(admin)).status_code == 200

    response = client.get(f'/v1/pacientes/{patient.id}', headers=auth_headers(make_patient()))
    assert response.status_code == 403


def test_update_profile(client, make_patient, auth_headers):
    patient = make_patient()

    response = client.patch(
        f'/v1/pacientes/{patient.id}',
        json={'first_name': 'Anabel', 'phone': '+54 9 11 4444 3333', 'email': 'Anabel@Example.com'},
        headers=auth_headers(patient),
    )

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['first_name'] == 'Anabel'
    assert data['phone'] == '+54 9 11 4444 3333'
    assert data['email'] == 'anabel@example.com'
    assert patient.user.email == 'anabel@example.com'


def test_update_profile_with_taken_email(client, make_patient, auth_headers):
    make_patient(email='taken@example.com')
    patient = make_patient()

    response = client.patch(
        f'/v1/pacientes/{patient.id}', json={'email': 'taken@example.com'}, headers=auth_headers(patient)
    )

    assert response.status_code == 409
    assert response.get_json()['error']['code'] == 'EMAIL_ALREADY_EXISTS'


def test_update_profile_without_fields(client, make_patient, auth_headers):
    patient = make_patient()

    response = client.patch(f'/v1/pacientes/{patient.id}', json={'password': 'x'}, headers=auth_headers(patient))

    assert response.status_code == 400


def test_update_other_patient_is_denied(client, make_patient, auth_headers):
    patient = make_patient(first_name='Ana')

    response = client.patch(
        f'/v1/pacientes/{patient.id}', json={'first_name': 'Hacked'}, headers=auth_headers(make_patient())
    )

    assert response.status_code == 403
    assert patient.first_name == 'Ana'


def test_linked_nutritionists_and_summary(client, make_patient, make_nutritionist, session_for, auth_headers):
    patient = make_patient()
    first = make_nutritionist(last_name='Gómez')
    second = make_nutritionist(last_name='Pereyra')
    service = AppointmentService(session_for(patient))
    service.book(first.id, date(2025, 3, 10), time(9, 0), 'remote', 'cash')
    cancelled = service.book(second.id, date(2025, 3, 11), time(9, 0), 'remote', 'cash')
    service.cancel(cancelled.id, 'Changed plans')
    headers = auth_headers(patient)

    linked = client.get(f'/v1/pacientes/{patient.id}/nutricionistas', headers=headers).get_json()['data']
    assert {n['id'] for n in linked} == {first.id, second.id}
    assert all('linked_at' in n for n in linked)

    summary = client.get(f'/v1/pacientes/{patient.id}/resumen', headers=headers).get_json()['data']
    assert summary['appointments']['pending'] == 1
    assert summary['appointments']['cancelled'] == 1
    assert summary['appointments']['completed'] == 0
    assert summary['total_documents'] == 0
    assert summary['linked_nutritionists'] == 2


def test_summary_of_other_patient_is_denied(client, make_patient, auth_headers):
    patient = make_patient()
    response = client.get(f'/v1/pacientes/{patient.id}/resumen', headers=auth_headers(make_patient()))
    assert response.status_code == 403


def test_unknown_patient_as_admin(client, admin, auth_headers):
    response = client.get('/v1/pacientes/7b0c4f0e-3a53-4a4e-9c66-3f1f8f9f2c11', headers=auth_headers(admin))
    assert response.status_code == 404
    assert response.get_json()['error']['code'] == 'PATIENT_NOT_FOUND'


def test_update_profile_with_non_object_body(client, make_patient, auth_headers):
    patient = make_patient()

    response = client.patch(f'/v1/pacientes/{patient.id}', json=['email'], headers=auth_headers(patient))

    assert response.status_code == 400
    assert response.get_json()['error']['details'][0]['field'] == 'body'
