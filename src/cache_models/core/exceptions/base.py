"""Base exceptions for cache-models.

This module defines the base exception hierarchy for the cache-models library.
All exceptions inherit from CacheModelsError and carry an error code and a
details mapping for diagnostics.
"""

from typing import Any, Dict, Optional


class CacheModelsError(Exception):
    """Base exception for all cache-models errors.
    
    All exceptions in the cache-models library inherit from this base class
    and include structured error information for better debugging.
    """
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def create_error_response(exception: CacheModelsError) -> Dict[str, Any]:
    """Create standardized error response from exception.
    
    Args:
        exception: The cache-models exception
        
    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
