"""
Exception hierarchy for the pocket server.

Request errors carry the HTTP status they map to; the app registers a single
handler that renders them as plain-text responses. Startup errors are fatal
and end the process with exit code 1.
"""

from fastapi import status


class PocketError(Exception):
    """Base class for all pocket server errors"""


class RequestError(PocketError):
    """Error raised while handling a single request"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequest(RequestError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(RequestError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "unauthorized"):
        super().__init__(message)


class NotFound(RequestError):
    status_code = status.HTTP_404_NOT_FOUND


class MethodNotAllowed(RequestError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED

    def __init__(self, message: str = "Invalid request method"):
        super().__init__(message)


class DuplicateTag(RequestError):
    """Tag already exists in the store (surfaced as a server-side failure)"""


class StorageFailure(RequestError):
    pass


class RelayFailure(RequestError):
    pass


class StartupError(PocketError):
    """Fatal error before or while starting the listeners"""


class StartupConfigError(StartupError):
    pass


class ListenerError(StartupError):
    pass
