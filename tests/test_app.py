import pytest

from config import TestingConfig
from nutrito import create_app


def test_health(client):
    response = client.get('/health')

    assert response.status_code == 200
    assert response.get_json()['status'] == 'OK'


def test_index_describes_the_service(client):
    body = client.get('/').get_json()
    assert body['api'] == '/v1'


def test_unknown_route_uses_error_envelope(client):
    response = client.get('/v1/does-not-exist')

    assert response.status_code == 404
    body = response.get_json()
    assert body['error']['code'] == 'NOT_FOUND'
    assert body['path'] == '/v1/does-not-exist'


def test_wrong_method_uses_error_envelope(client):
    response = client.delete('/v1/turnos')

    assert response.status_code == 405
    assert response.get_json()['error']['code'] == 'METHOD_NOT_ALLOWED'


def test_non_positive_slot_length_stops_startup(monkeypatch):
    monkeypatch.setattr(TestingConfig, 'APPOINTMENT_SLOT_MINUTES', 0)
    with pytest.raises(ValueError):
        create_app('testing')
