# products_api/errors.py
from typing import Optional

# Every failure raised by middleware or handlers is one of these; main.py
# turns them into the {"success": false, "error": ...} envelope.


class ApiError(Exception):
    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(ApiError):
    status_code = 401
    default_message = "Authentication required"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Not found"
