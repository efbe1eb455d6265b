"""Domain errors raised by the hunt services.

Each error knows the HTTP status it maps to so the blueprint can render it
without a lookup table.
"""


class HuntError(Exception):
    status_code = 500

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(HuntError):
    status_code = 400


class InsufficientQuestionsError(HuntError):
    status_code = 400


class DuplicateGroupError(HuntError):
    status_code = 403


class NotFoundError(HuntError):
    status_code = 404


class NoAvailableQuestionsError(NotFoundError):
    pass


class DatabaseError(HuntError):
    status_code = 500
