class LedgerError(Exception):
    """Base error; the HTTP layer turns it into ``{"message": ...}`` with ``status_code``."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(LedgerError):
    status_code = 404


class ValidationError(LedgerError):
    status_code = 400


class UnauthorizedError(LedgerError):
    status_code = 401


class PersistenceError(LedgerError):
    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
