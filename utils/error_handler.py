"""Custom exception classes for the application."""

class BaseGraderException(Exception):
    """Base exception for all application-specific errors."""
    pass

class ConfigError(BaseGraderException):
    """Error related to configuration loading or values (e.g. a bad rules file)."""
    pass

class APIError(BaseGraderException):
    """Error talking to a remote endpoint (GitHub, Drive, a submitted site)."""
    def __init__(self, message: str, status_code: int | None = None, service: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.service = service

    def __str__(self) -> str:
        base = super().__str__()
        details = []
        if self.service:
            details.append(f"Service: {self.service}")
        if self.status_code:
            details.append(f"Status Code: {self.status_code}")
        if details:
            return f"{base} ({', '.join(details)})"
        return base

class GradingError(BaseGraderException):
    """Error in the grading input or logic."""
    pass

class UserCancelledError(BaseGraderException):
    """Error raised when the user cancels an operation."""
    pass
