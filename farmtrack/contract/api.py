"""
API contract — one place that names every endpoint's method, path
template, input schema and response schema per status code.

The Flask blueprints register their rules from here and the contract
client builds its requests from here, so neither side can drift.
"""

import re
from types import SimpleNamespace
from typing import List

from pydantic import TypeAdapter, ValidationError

from farmtrack.errors import ContractViolation, ValidationFailed
from farmtrack.contract.schemas import (
    ActivityCreate, ActivityFilters, ActivityOut,
    AdvisoryFilters, AdvisoryGenerate, AdvisoryOut,
    AuthOut, CropCreate, CropOut, CropUpdate,
    ErrorOut, FarmCreate, FarmDetailOut, FarmOut, FarmUpdate,
    FieldCreate, FieldOut, FieldUpdate,
    LoginInput, MessageOut, RegisterInput, UserOut,
)

_PLACEHOLDER = re.compile(r':([A-Za-z_]\w*)')


def build_url(path, params=None):
    """Substitute ``:name`` placeholders in ``path`` with values from ``params``.

    Names not present in ``params`` are left untouched.
    """
    if not params:
        return path

    def _replace(match):
        name = match.group(1)
        if name in params:
            return str(params[name])
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, path)


def _first_error(exc):
    error = exc.errors()[0]
    field = '.'.join(str(part) for part in error.get('loc', ())) or None
    message = error['msg']
    if field:
        message = f'{field}: {message}'
    return message, field


class Endpoint:
    def __init__(self, method, path, input=None, responses=None):
        self.method = method
        self.path = path
        self.input = input
        self.responses = responses or {}
        self._adapters = {
            status: TypeAdapter(schema)
            for status, schema in self.responses.items()
            if schema is not None
        }

    def __repr__(self):
        return f'<Endpoint {self.method} {self.path}>'

    @property
    def rule(self):
        """The path template as a Flask URL rule (``:id`` → ``<int:id>``)."""
        return _PLACEHOLDER.sub(r'<int:\1>', self.path)

    @property
    def placeholders(self):
        return _PLACEHOLDER.findall(self.path)

    def url(self, **params):
        return build_url(self.path, params)

    def parse_input(self, data):
        """Validate a request body (or query dict) against the input schema."""
        if self.input is None:
            return None
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValidationFailed('Request body must be a JSON object')
        try:
            return self.input.model_validate(data)
        except ValidationError as exc:
            message, field = _first_error(exc)
            raise ValidationFailed(message, field=field)

    def parse_response(self, status, payload):
        """Validate a response payload against the schema declared for ``status``."""
        if status not in self.responses:
            raise ContractViolation(f'{self.method} {self.path} does not declare status {status}', status)
        if self.responses[status] is None:
            if payload not in (None, '', b''):
                raise ContractViolation(f'{self.method} {self.path} → {status} must have an empty body', status)
            return None
        try:
            return self._adapters[status].validate_python(payload)
        except ValidationError as exc:
            message, _ = _first_error(exc)
            raise ContractViolation(f'{self.method} {self.path} → {status}: {message}', status)


def _responses(success, *errors):
    declared = dict(success)
    for status in errors:
        declared[status] = ErrorOut
    return declared


# Every authenticated endpoint may answer 401/500 and 429 from the default
# rate limit; ownership denials may be configured to 403 instead of 401.
_AUTHED = (401, 403, 429, 500)


api = SimpleNamespace(
    auth=SimpleNamespace(
        register=Endpoint('POST', '/api/register', RegisterInput,
                          _responses({201: AuthOut}, 400, 409, 429, 500)),
        login=Endpoint('POST', '/api/login', LoginInput,
                       _responses({200: AuthOut}, 400, 401, 429, 500)),
        logout=Endpoint('POST', '/api/logout', None,
                        _responses({200: MessageOut}, 429, 500)),
        user=Endpoint('GET', '/api/auth/user', None,
                      _responses({200: UserOut}, *_AUTHED)),
    ),
    farms=SimpleNamespace(
        list=Endpoint('GET', '/api/farms', None,
                      _responses({200: List[FarmOut]}, *_AUTHED)),
        create=Endpoint('POST', '/api/farms', FarmCreate,
                        _responses({201: FarmOut}, 400, *_AUTHED)),
        get=Endpoint('GET', '/api/farms/:id', None,
                     _responses({200: FarmDetailOut}, 404, *_AUTHED)),
        update=Endpoint('PUT', '/api/farms/:id', FarmUpdate,
                        _responses({200: FarmOut}, 400, 404, *_AUTHED)),
        delete=Endpoint('DELETE', '/api/farms/:id', None,
                        _responses({204: None}, 404, *_AUTHED)),
    ),
    fields=SimpleNamespace(
        list=Endpoint('GET', '/api/farms/:farmId/fields', None,
                      _responses({200: List[FieldOut]}, 404, *_AUTHED)),
        create=Endpoint('POST', '/api/farms/:farmId/fields', FieldCreate,
                        _responses({201: FieldOut}, 400, 404, *_AUTHED)),
        get=Endpoint('GET', '/api/fields/:id', None,
                     _responses({200: FieldOut}, 404, *_AUTHED)),
        update=Endpoint('PUT', '/api/fields/:id', FieldUpdate,
                        _responses({200: FieldOut}, 400, 404, *_AUTHED)),
        delete=Endpoint('DELETE', '/api/fields/:id', None,
                        _responses({204: None}, 404, *_AUTHED)),
    ),
    crops=SimpleNamespace(
        list=Endpoint('GET', '/api/fields/:fieldId/crops', None,
                      _responses({200: List[CropOut]}, 404, *_AUTHED)),
        create=Endpoint('POST', '/api/fields/:fieldId/crops', CropCreate,
                        _responses({201: CropOut}, 400, 404, *_AUTHED)),
        get=Endpoint('GET', '/api/crops/:id', None,
                     _responses({200: CropOut}, 404, *_AUTHED)),
        update=Endpoint('PUT', '/api/crops/:id', CropUpdate,
                        _responses({200: CropOut}, 400, 404, *_AUTHED)),
    ),
    activities=SimpleNamespace(
        list=Endpoint('GET', '/api/activities', ActivityFilters,
                      _responses({200: List[ActivityOut]}, 400, 404, *_AUTHED)),
        create=Endpoint('POST', '/api/activities', ActivityCreate,
                        _responses({201: ActivityOut}, 400, 404, *_AUTHED)),
    ),
    advisories=SimpleNamespace(
        list=Endpoint('GET', '/api/advisories', AdvisoryFilters,
                      _responses({200: List[AdvisoryOut]}, 400, 404, *_AUTHED)),
        generate=Endpoint('POST', '/api/advisories/generate', AdvisoryGenerate,
                          _responses({201: AdvisoryOut}, 400, 404, *_AUTHED)),
    ),
)


def endpoints():
    """Iterate ``(resource, name, endpoint)`` over the whole contract."""
    for resource, group in vars(api).items():
        for name, endpoint in vars(group).items():
            yield resource, name, endpoint
