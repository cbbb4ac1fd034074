import json

import pytest

from farmtrack.app import create_app
from farmtrack.config import TestingConfig
from farmtrack.database.db import db

PASSWORD = 'secret123'


def make_app(config_class=TestingConfig):
    app = create_app(config_class)
    return app


def login_client(app, username):
    """A test client with its own cookie jar, registered and signed in."""
    client = app.test_client()
    resp = client.post('/api/register', json={'username': username, 'password': PASSWORD})
    assert resp.status_code == 201, resp.get_json()
    client.user_id = resp.get_json()['user']['id']
    return client


@pytest.fixture
def app():
    app = make_app()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def alice(app):
    return login_client(app, 'alice')


@pytest.fixture
def bob(app):
    return login_client(app, 'bob')


@pytest.fixture
def farm(alice):
    resp = alice.post('/api/farms', json={
        'name': 'Riverbend', 'location': 'Punjab', 'size': 40, 'sizeUnit': 'hectares',
    })
    assert resp.status_code == 201
    return resp.get_json()


@pytest.fixture
def field(alice, farm):
    resp = alice.post(f"/api/farms/{farm['id']}/fields", json={
        'name': 'East Block', 'area': 12.5, 'soilType': 'Alluvial',
    })
    assert resp.status_code == 201
    return resp.get_json()


@pytest.fixture
def crop(alice, field):
    resp = alice.post(f"/api/fields/{field['id']}/crops", json={
        'name': 'Rice', 'variety': 'Basmati 370', 'sowingDate': '2024-06-20T00:00:00Z',
    })
    assert resp.status_code == 201
    return resp.get_json()


class _CookieJar:
    def __init__(self, test_client):
        self.test_client = test_client

    def get(self, name):
        cookie = self.test_client.get_cookie(name)
        return cookie.value if cookie else None


class _Response:
    def __init__(self, status_code, content):
        self.status_code = status_code
        self.content = content

    def json(self):
        return json.loads(self.content)


class FlaskSession:
    """requests.Session stand-in that forwards to a Flask test client."""

    def __init__(self, test_client):
        self.test_client = test_client
        self.cookies = _CookieJar(test_client)
        self.calls = []

    def request(self, method, url, json=None, params=None, headers=None, timeout=None):
        path = url.split('://', 1)[-1]
        path = '/' + path.split('/', 1)[1] if '/' in path else '/'
        self.calls.append((method, path))
        resp = self.test_client.open(path, method=method, json=json,
                                     query_string=params, headers=headers or {})
        return _Response(resp.status_code, resp.get_data())
