"""
Domain exceptions for the employee service.

These are independent of HTTP; the API layer maps them to status codes
through the handler registered in main.py.
"""

from typing import Optional


class EmployeeServiceException(Exception):
    """Base exception for all employee service errors."""

    status_code: int = 400

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class EmployeeNotFoundException(EmployeeServiceException):
    """Raised when no employee exists for an identifier."""

    status_code = 404

    def __init__(self, employee_id: int):
        super().__init__(
            message=f"Employee not found: {employee_id}",
            details={"employee_id": employee_id},
        )


class EmailNotFoundException(EmployeeServiceException):
    """Raised when no employee is registered under an e-mail address."""

    status_code = 404

    def __init__(self, email: str):
        super().__init__(
            message=f"Employee with email not found: {email}",
            details={"email": email},
        )
