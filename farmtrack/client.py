"""
Contract Client — a requests-based consumer of the Farmtrack API.

Every call is built from the shared contract: the URL from the path
template, the body checked against the endpoint's input schema before
sending, and the reply checked against the schema declared for its status.

    client = FarmtrackClient("http://localhost:5000")
    client.login("grower", "secret123")
    farms = client.list_farms()
"""

import requests

from farmtrack.contract import api, build_url
from farmtrack.errors import ContractViolation

CSRF_COOKIE = 'csrf_access_token'
CSRF_HEADER = 'X-CSRF-TOKEN'


class RequestFailed(Exception):
    """The server answered with a declared error status."""

    def __init__(self, status_code, message, field=None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.field = field


class FarmtrackClient:

    def __init__(self, base_url, session=None, timeout=30):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def call(self, endpoint, params=None, json=None, query=None):
        """Send one contract-described request and return the validated payload."""
        path = build_url(endpoint.path, params)
        if endpoint.input is not None and endpoint.method != 'GET':
            checked = endpoint.parse_input(json or {})
            json = checked.model_dump(mode='json', by_alias=True, exclude_unset=True)

        headers = {}
        if endpoint.method != 'GET':
            csrf = self.session.cookies.get(CSRF_COOKIE)
            if csrf:
                headers[CSRF_HEADER] = csrf

        if query:
            query = {key: value for key, value in query.items() if value is not None}

        response = self.session.request(
            endpoint.method,
            self.base_url + path,
            json=json,
            params=query or None,
            headers=headers,
            timeout=self.timeout,
        )
        payload = self._decode(response)
        validated = endpoint.parse_response(response.status_code, payload)

        if response.status_code >= 400:
            raise RequestFailed(response.status_code, validated.message, validated.field)
        return validated

    @staticmethod
    def _decode(response):
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ContractViolation(f'Response is not JSON ({response.status_code})',
                                    response.status_code) from e

    # ──────────────────────────────────────────
    # SESSION
    # ──────────────────────────────────────────

    def register(self, username, password, name=None):
        body = {'username': username, 'password': password}
        if name:
            body['name'] = name
        return self.call(api.auth.register, json=body)

    def login(self, username, password):
        return self.call(api.auth.login, json={'username': username, 'password': password})

    def logout(self):
        return self.call(api.auth.logout)

    def current_user(self):
        return self.call(api.auth.user)

    # ──────────────────────────────────────────
    # FARMS / FIELDS / CROPS
    # ──────────────────────────────────────────

    def list_farms(self):
        return self.call(api.farms.list)

    def create_farm(self, **data):
        return self.call(api.farms.create, json=data)

    def get_farm(self, farm_id):
        return self.call(api.farms.get, params={'id': farm_id})

    def update_farm(self, farm_id, **changes):
        return self.call(api.farms.update, params={'id': farm_id}, json=changes)

    def delete_farm(self, farm_id):
        return self.call(api.farms.delete, params={'id': farm_id})

    def list_fields(self, farm_id):
        return self.call(api.fields.list, params={'farmId': farm_id})

    def create_field(self, farm_id, **data):
        return self.call(api.fields.create, params={'farmId': farm_id}, json=data)

    def get_field(self, field_id):
        return self.call(api.fields.get, params={'id': field_id})

    def update_field(self, field_id, **changes):
        return self.call(api.fields.update, params={'id': field_id}, json=changes)

    def delete_field(self, field_id):
        return self.call(api.fields.delete, params={'id': field_id})

    def list_crops(self, field_id):
        return self.call(api.crops.list, params={'fieldId': field_id})

    def create_crop(self, field_id, **data):
        return self.call(api.crops.create, params={'fieldId': field_id}, json=data)

    def get_crop(self, crop_id):
        return self.call(api.crops.get, params={'id': crop_id})

    def update_crop(self, crop_id, **changes):
        return self.call(api.crops.update, params={'id': crop_id}, json=changes)

    # ──────────────────────────────────────────
    # ACTIVITIES / ADVISORIES
    # ──────────────────────────────────────────

    def list_activities(self, field_id=None, crop_id=None):
        return self.call(api.activities.list, query={'fieldId': field_id, 'cropId': crop_id})

    def create_activity(self, **data):
        return self.call(api.activities.create, json=data)

    def list_advisories(self, field_id=None, crop_id=None):
        return self.call(api.advisories.list, query={'fieldId': field_id, 'cropId': crop_id})

    def generate_advisory(self, field_id=None, crop_id=None, context=None):
        body = {'fieldId': field_id, 'cropId': crop_id, 'context': context}
        return self.call(api.advisories.generate,
                         json={key: value for key, value in body.items() if value is not None})
