from typing import Any, Dict, Optional
from fastapi import HTTPException, status

class CallPulseException(Exception):
    """Base exception for CallPulse application."""
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

class SpecUnavailable(CallPulseException):
    """The remote API description could not be fetched or parsed."""
    pass

class EndpointProbeFailure(CallPulseException):
    """A single endpoint probe failed. Always recovered by the prober."""
    pass

class NoUsableEndpoints(CallPulseException):
    """No probed endpoint produced usable interaction records."""
    pass

class InteractionNotFound(CallPulseException):
    """A single interaction could not be located."""
    pass

class InteractionLookupFailed(CallPulseException):
    """A single interaction lookup failed upstream."""
    pass

# HTTP Exception handlers
def create_http_exception(
    status_code: int,
    message: str,
    error_code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None
) -> HTTPException:
    """Create an HTTP exception with structured error response."""
    
    error_detail = {
        "message": message,
        "error_code": error_code,
        "details": details or {}
    }
    
    return HTTPException(
        status_code=status_code,
        detail=error_detail
    )

# Common HTTP exceptions
def not_found_exception(message: str = "Resource not found") -> HTTPException:
    return create_http_exception(
        status_code=status.HTTP_404_NOT_FOUND,
        message=message,
        error_code="RESOURCE_NOT_FOUND"
    )

def bad_gateway_exception(message: str = "Upstream API error") -> HTTPException:
    return create_http_exception(
        status_code=status.HTTP_502_BAD_GATEWAY,
        message=message,
        error_code="UPSTREAM_ERROR"
    )
