"""
API error taxonomy.

Services and guards raise these; a single error handler in
services.observability renders them as ``{"message": ..., "field"?: ...}``.
"""


class ApiError(Exception):
    status_code = 500
    message = 'Internal Server Error'

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        if status_code:
            self.status_code = status_code

    def to_dict(self):
        return {'message': self.message}


class ValidationFailed(ApiError):
    status_code = 400
    message = 'Invalid request'

    def __init__(self, message=None, field=None):
        super().__init__(message)
        self.field = field

    def to_dict(self):
        data = {'message': self.message}
        if self.field:
            data['field'] = self.field
        return data


class Unauthorized(ApiError):
    status_code = 401
    message = 'Unauthorized'


class Forbidden(ApiError):
    """Caller is authenticated but does not own the resource.

    The status code is taken from OWNERSHIP_DENIED_STATUS (401 by default).
    """
    status_code = 401
    message = 'Unauthorized'


class NotFound(ApiError):
    status_code = 404
    message = 'Not found'


class Conflict(ApiError):
    status_code = 409
    message = 'Conflict'


class ContractViolation(Exception):
    """A payload did not match the shape declared in the API contract."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code
