"""
Error taxonomy for the login and registration flows.

``AuthError`` subclasses are raised by the use cases and carry the HTTP
status the router answers with. The remaining classes are raised by
infrastructure components and never reach a client directly.
"""


class AuthError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(AuthError):
    status_code = 400


class NotFound(AuthError):
    status_code = 404


class Unauthorized(AuthError):
    status_code = 401


class MissingDocument(InvalidInput):
    pass


class UnsupportedMediaType(AuthError):
    status_code = 400


class ServerError(AuthError):
    status_code = 500

    def __init__(self, message: str = "Internal server error."):
        super().__init__(message)


class ConfigError(Exception):
    """Missing or invalid configuration detected at startup."""


class TokenInvalid(Exception):
    pass


class TokenExpired(TokenInvalid):
    pass


class UploadError(Exception):
    pass
