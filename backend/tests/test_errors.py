from hubconsole.constants.roles import SUPER_ADMIN
from tests.test_utils_seed import jwt_headers, make_principal


def test_404_error_shape(client):
    r = client.get('/nonexistent-endpoint-xyz')
    assert r.status_code == 404
    data = r.get_json()
    assert 'error' in data
    assert data['error']['status'] == 404
    assert data['error']['title'] == 'Not Found'
    assert 'redirect' not in data['error']


def test_405_error_shape(client):
    r = client.delete('/healthz')
    assert r.status_code == 405
    assert r.get_json()['error']['status'] == 405


def test_unhandled_exception_is_500(client, app_instance, monkeypatch):
    def broken_db():
        raise RuntimeError('database unavailable')
    monkeypatch.setattr('hubconsole.routes.orders.get_db', broken_db)
    r = client.get('/orders', headers=jwt_headers(app_instance, make_principal(SUPER_ADMIN)))
    assert r.status_code == 500
    assert r.get_json() == {'error': {'status': 500, 'title': 'Internal Server Error', 'detail': 'Unexpected error'}}


def test_forbidden_carries_redirect(client, app_instance):
    r = client.get('/access/permissions', headers=jwt_headers(app_instance, make_principal('hub_packing')))
    assert r.status_code == 200
    r = client.post('/orders', json={'customer_name': 'X'},
                    headers=jwt_headers(app_instance, make_principal('store_delivery')))
    assert r.status_code == 403
    assert r.get_json()['error'] == {
        'status': 403, 'title': 'Forbidden', 'detail': 'Missing permission', 'redirect': '/dashboard',
    }
