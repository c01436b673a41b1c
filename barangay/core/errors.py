"""
Error taxonomy for the barangay backend.

Every failure the services raise derives from BarangayError and carries the
HTTP status the boundary layer should answer with, so clients can tell
"wrong password" apart from "not yet approved" apart from "unknown account".
"""


class BarangayError(Exception):
    """Base exception for all service errors"""

    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message, "code": self.code}


class ValidationError(BarangayError):
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid request"


class DuplicateIdentity(BarangayError):
    status_code = 400
    code = "DUPLICATE_IDENTITY"
    default_message = "Identity exists"


class AccountNotFound(BarangayError):
    status_code = 404
    code = "ACCOUNT_NOT_FOUND"
    default_message = "Account not found"


class RecordNotFound(BarangayError):
    status_code = 404
    code = "RECORD_NOT_FOUND"
    default_message = "Record not found"


class AccountRejected(BarangayError):
    status_code = 403
    code = "ACCOUNT_REJECTED"
    default_message = "Privileged account has been rejected"


class AccountNotApproved(BarangayError):
    status_code = 403
    code = "ACCOUNT_NOT_APPROVED"
    default_message = "Privileged account not approved yet"


class InvalidCredentials(BarangayError):
    status_code = 401
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid credentials"


class NotAuthorized(BarangayError):
    status_code = 403
    code = "NOT_AUTHORIZED"
    default_message = "Not authorized"


class InvalidTransition(BarangayError):
    """Approval decision on an account that is not privileged and pending"""

    status_code = 409
    code = "INVALID_TRANSITION"
    default_message = "Account is not pending approval"


class StorageFailure(BarangayError):
    status_code = 500
    code = "STORAGE_FAILURE"
    default_message = "Storage unavailable"


class NotAuthenticated(BarangayError):
    status_code = 401
    code = "NOT_AUTHENTICATED"
    default_message = "Bearer access token required"
