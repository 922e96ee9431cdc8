from __future__ import annotations


class MindPathError(Exception):
    """Base class for errors reported to API callers."""

    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MindPathError):
    status_code = 400
    error = "Bad Request"


class NotFoundError(MindPathError):
    status_code = 404
    error = "Not Found"


class NoNotesError(MindPathError):
    status_code = 400
    error = "Bad Request"


class AnalyzerFailure(MindPathError):
    status_code = 502
    error = "Bad Gateway"


class StoreFailure(MindPathError):
    pass
