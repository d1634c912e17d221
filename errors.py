"""API errors and their HTTP status codes.

Every error leaves the service as ``{"success": false, "message": ...}``.
Credential failures share one message so callers cannot tell an unknown
email from a wrong password.
"""


class APIError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message}


class DuplicateUser(APIError):
    status_code = 400
    message = "User already exists"


class InvalidCredentials(APIError):
    status_code = 401
    message = "Invalid email or password"


class InvalidId(APIError):
    status_code = 400
    message = "Invalid product ID format"


class NotFound(APIError):
    status_code = 404
    message = "Product not found"


class InternalError(APIError):
    pass


class InvalidRequestBody(APIError):
    status_code = 400
    message = "Invalid request body"
