"""Interface layer errors.

Each error carries the HTTP status and envelope code it is rendered with.
"""


class InterfaceError(Exception):
    """Base interface error."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnauthorizedError(InterfaceError):
    """Missing, invalid or expired credentials.

    ``clear_credentials`` makes the handler drop the auth cookies so the
    browser stops resending stale tokens.
    """

    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(
        self,
        message: str = "Authentication required",
        clear_credentials: bool = False,
    ):
        super().__init__(message)
        self.clear_credentials = clear_credentials


class ForbiddenError(InterfaceError):
    """Authenticated but not allowed."""

    status_code = 403
    code = "FORBIDDEN"

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message)


class NotFoundError(InterfaceError):
    """Resource not found error."""

    status_code = 404
    code = "NOT_FOUND"
