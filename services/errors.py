# services/errors.py


class HydrationError(Exception):
    """Base class for errors raised by the hydration services"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(HydrationError):
    """Bad input from the caller. Nothing was written."""
    status_code = 400


class NotFoundError(HydrationError):
    status_code = 404


class ConflictError(HydrationError):
    """A conditional write kept losing against concurrent writers"""
    status_code = 409


class TransientIOError(HydrationError):
    """The remote store call failed"""
    status_code = 502
