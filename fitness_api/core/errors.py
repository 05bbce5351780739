# fitness_api/core/errors.py
"""Domain error taxonomy.

Services raise these; the HTTP layer maps each one to a status code and a
``{"code", "message"}`` body (see ``fitness_api.main``).
"""


class AppError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "Internal error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError, ValueError):
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid request."


class AuthenticationError(AppError):
    status_code = 401
    code = "AUTHENTICATION_FAILED"
    default_message = "Invalid credentials"


class AccessDeniedError(AppError):
    status_code = 403
    code = "FORBIDDEN"
    default_message = "Insufficient permissions"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Not found."


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"
    default_message = "Conflicting record."


class ConfigurationError(AppError):
    code = "CONFIGURATION_ERROR"
    default_message = "Server configuration error."
