# app/core/exceptions.py
#
# Domain errors raised by the services. The HTTP layer maps each kind
# to a status code in app/main.py.


class BookstoreError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookstoreError):
    """Missing required field, empty sale, disallowed stock level."""

    status_code = 400


class NotFoundError(BookstoreError):
    status_code = 404


class InvalidStateError(BookstoreError):
    """Reorder transition attempted from a disallowed status."""

    status_code = 400


class StoreError(BookstoreError):
    """Underlying persistence failure."""

    status_code = 500
