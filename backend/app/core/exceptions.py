"""Custom exception classes"""

from typing import Any, Optional


class MarketplaceException(Exception):
    """Base exception for FreelanceHub"""
    
    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(MarketplaceException):
    """Client-correctable input error.

    ``errors`` lists every violated field rule as ``{"field", "message"}``
    pairs; it is empty for rule checks that are not tied to one field
    (e.g. applying to a job that is no longer open).
    """
    
    def __init__(
        self,
        message: str,
        errors: Optional[list[dict[str, str]]] = None,
        details: Optional[dict[str, Any]] = None
    ):
        super().__init__(message, status_code=400, details=details)
        self.errors = errors or []


class AuthenticationException(MarketplaceException):
    """Exception for authentication errors"""
    
    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, status_code=401)


class AuthorizationException(MarketplaceException):
    """Exception for authorization errors"""
    
    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, status_code=403)


class NotFoundException(MarketplaceException):
    """Exception for resource not found errors"""
    
    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class ConflictException(MarketplaceException):
    """Exception for resource conflict errors"""
    
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, status_code=409, details=details)
