"""
Client-side error taxonomy
Every failed API call is raised as a RemoteError subclass and caught by the stores
"""

from typing import Optional
import httpx

class RemoteError(Exception):
    """API call failed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

class UnauthorizedError(RemoteError):
    """401: no valid session"""

class NotFoundError(RemoteError):
    """404: mutation target absent server-side"""

class ConflictError(RemoteError):
    """409: resource already exists"""

class NetworkError(RemoteError):
    """Transport failure, no response received"""

def error_message(response: httpx.Response, default: str) -> str:
    """
    Extract a human-readable message from an error response

    Looks at ``error.message``, then ``message``, then ``detail``.
    """
    try:
        body = response.json()
    except ValueError:
        return default

    if not isinstance(body, dict):
        return default

    error = body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        return error
    if body.get("message"):
        return str(body["message"])

    detail = body.get("detail")
    if isinstance(detail, str) and detail:
        return detail
    if isinstance(detail, list) and detail:
        # FastAPI validation errors
        return "; ".join(str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail)

    return default

def error_from_response(response: httpx.Response, default: str) -> RemoteError:
    """Map an error response onto the client taxonomy"""
    message = error_message(response, default)
    status_code = response.status_code

    if status_code == 401:
        return UnauthorizedError(message, status_code)
    if status_code == 404:
        return NotFoundError(message, status_code)
    if status_code == 409:
        return ConflictError(message, status_code)
    return RemoteError(message, status_code)
