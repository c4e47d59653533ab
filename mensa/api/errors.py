"""Errors intentionally raised by the API.

Each carries the HTTP status and the message sent to the client. Any other
exception reaching the app is treated as a bug: it is logged and answered
with a 500 that does not reveal the message.
"""
from mensa.utilities.constants import MSG_INTERNAL_SERVER_ERROR


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class BadRequestError(ApiError):
    def __init__(self, message: str):
        super().__init__(400, message)


class NotFoundError(ApiError):
    def __init__(self, what: str):
        super().__init__(404, f"{what} not found")


class InternalServerError(ApiError):
    def __init__(self):
        super().__init__(500, MSG_INTERNAL_SERVER_ERROR)
