class ShopException(Exception):
    """Base for errors that map onto an HTTP status at the request boundary."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ShopException):
    status_code = 400


class AuthenticationError(ShopException):
    status_code = 401


class NotFound(ShopException):
    status_code = 404


class Conflict(ShopException):
    status_code = 409


class StorageError(ShopException):
    status_code = 500
