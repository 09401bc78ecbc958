from __future__ import annotations

from typing import Any, Optional


class GasErrorCode:
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    API_NOT_CONFIGURED = "API_NOT_CONFIGURED"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    EXISTING_RECORD = "EXISTING_RECORD"
    NO_TIME_IN = "NO_TIME_IN"
    ALREADY_TIMED_OUT = "ALREADY_TIMED_OUT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_BANNED = "ACCOUNT_BANNED"


class GasAPIError(Exception):
    """Raised when the spreadsheet web app cannot serve a request."""

    def __init__(self, code: str, message: str, details: Any = None, existing_record: Optional[dict] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details
        self.existing_record = existing_record

    def __repr__(self) -> str:
        return f"GasAPIError(code={self.code!r}, message={self.message!r})"


class ExistingRecordError(GasAPIError):
    """The member already has an attendance record for this event today."""

    def __init__(self, message: str, existing_record: Optional[dict] = None):
        super().__init__(GasErrorCode.EXISTING_RECORD, message, existing_record=existing_record)


class NoTimeInError(GasAPIError):
    def __init__(self, message: str):
        super().__init__(GasErrorCode.NO_TIME_IN, message)


class AlreadyTimedOutError(GasAPIError):
    def __init__(self, message: str):
        super().__init__(GasErrorCode.ALREADY_TIMED_OUT, message)
