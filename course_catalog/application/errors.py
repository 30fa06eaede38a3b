"""Errors that end a request early.

Each error knows the HTTP status it maps to and the JSON body the client
receives. The handlers registered in ``main`` render them.
"""


class CatalogError(Exception):
    status_code = 500
    message = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def body(self) -> dict:
        return {"error": self.message}


class ValidationError(CatalogError):
    status_code = 400
    message = "Validation failed"

    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))

    def body(self) -> dict:
        return {"errors": self.messages}


class AuthenticationError(CatalogError):
    """The client only ever sees "Access Denied"; ``reason`` is for the logs."""

    status_code = 401
    message = "Access Denied"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__()


class AuthorizationError(CatalogError):
    status_code = 403
    message = "The course you are attempting to modify is owned by a different user"


class NotFoundError(CatalogError):
    status_code = 404
    message = "We were unable to find the course you requested"
