class TinyAppError(Exception):
    """Base for errors the web layer turns into a status code and a message."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFound(TinyAppError):
    status_code = 404


class Unauthorized(TinyAppError):
    status_code = 401


class Forbidden(TinyAppError):
    status_code = 403


class ValidationError(TinyAppError):
    status_code = 400
