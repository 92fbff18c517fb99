"""
Error types raised by the job repository and its callers.

Store-level failures (connection problems, constraint violations) are not
wrapped: they surface as the SQLAlchemy exceptions that caused them.
"""

from typing import Any, Optional


class JobboardError(Exception):
    """Base error carrying a message and an HTTP-style status code."""

    status = 500

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class NotFoundError(JobboardError):
    """Raised when an identifier does not match an existing row."""

    status = 404

    def __init__(self, message: str = "Not Found", identifier: Any = None):
        super().__init__(message)
        self.identifier = identifier


class BadRequestError(JobboardError):
    """Raised for update or filter payloads that cannot be applied."""

    status = 400

    def __init__(self, message: str = "Bad Request"):
        super().__init__(message)
