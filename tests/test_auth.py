from conftest import PASSWORD, login_client


def test_register_starts_a_session(app):
    client = app.test_client()
    resp = client.post('/api/register', json={'username': 'meera', 'password': PASSWORD, 'name': 'Meera'})
    assert resp.status_code == 201
    body = resp.get_json()
    assert body['user']['username'] == 'meera'
    assert body['token']
    assert 'passwordHash' not in body['user']

    me = client.get('/api/auth/user')
    assert me.status_code == 200
    assert me.get_json()['id'] == body['user']['id']


def test_register_duplicate_username(app, alice):
    resp = app.test_client().post('/api/register', json={'username': 'alice', 'password': PASSWORD})
    assert resp.status_code == 409


def test_register_validates_password_length(app):
    resp = app.test_client().post('/api/register', json={'username': 'short', 'password': '123'})
    assert resp.status_code == 400
    assert resp.get_json()['field'] == 'password'


def test_login_with_valid_and_invalid_credentials(app, alice):
    client = app.test_client()
    bad = client.post('/api/login', json={'username': 'alice', 'password': 'wrong-password'})
    assert bad.status_code == 401
    assert bad.get_json() == {'message': 'Invalid username or password'}

    unknown = client.post('/api/login', json={'username': 'nobody', 'password': PASSWORD})
    assert unknown.status_code == 401

    good = client.post('/api/login', json={'username': 'alice', 'password': PASSWORD})
    assert good.status_code == 200
    assert good.get_json()['user']['id'] == alice.user_id
    assert client.get('/api/auth/user').status_code == 200


def test_protected_endpoints_require_session(app):
    client = app.test_client()
    for path in ['/api/farms', '/api/farms/1', '/api/fields/1', '/api/activities', '/api/advisories']:
        resp = client.get(path)
        assert resp.status_code == 401, path
        assert resp.get_json() == {'message': 'Unauthorized'}


def test_invalid_bearer_token_is_unauthorized(app):
    resp = app.test_client().get('/api/farms', headers={'Authorization': 'Bearer not-a-jwt'})
    assert resp.status_code == 401
    assert resp.get_json() == {'message': 'Unauthorized'}


def test_bearer_token_is_accepted(app):
    reg = app.test_client().post('/api/register', json={'username': 'tokenuser', 'password': PASSWORD})
    token = reg.get_json()['token']

    resp = app.test_client().get('/api/auth/user', headers={'Authorization': f'Bearer {token}'})
    assert resp.status_code == 200
    assert resp.get_json()['username'] == 'tokenuser'


def test_logout_clears_session(app):
    client = login_client(app, 'leaving')
    assert client.post('/api/logout').status_code == 200
    assert client.get('/api/auth/user').status_code == 401
