from __future__ import annotations


class CollaboratorError(Exception):
    def __init__(self, error_type: str, detail: str = ""):
        super().__init__(f"{error_type}: {detail}")
        self.error_type = error_type
        self.detail = detail


class SessionError(CollaboratorError):
    pass


class FetchError(CollaboratorError):
    pass


class NavigationError(CollaboratorError):
    pass


ERROR_TIMEOUT = "TIMEOUT"
ERROR_STRUCTURE = "MISSING_STRUCTURE"
ERROR_HTTP = "HTTP_ERROR"
ERROR_UNKNOWN = "UNKNOWN"


def is_timeout_message(detail: str) -> bool:
    return "Timeout" in detail or "timeout" in detail
