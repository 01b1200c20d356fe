# portal/errors.py
"""
Error types raised by services and rendered by main.py as {"message": ...}.

ValidationError  → 400  missing or invalid required field
AuthError        → 401  bad credentials, passcode, OTP or session
ExternalDependencyError → 500  store or provider call failed
"""


class PortalError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(PortalError):
    status_code = 400
    message = "Invalid request"


class AuthError(PortalError):
    status_code = 401
    message = "Unauthorized"


class InvalidCredentials(AuthError):
    message = "Invalid credentials"


class AdminNotConfigured(AuthError):
    message = "Admin password not configured"


class InvalidPasscode(AuthError):
    message = "Invalid passcode"


class InvalidOtp(AuthError):
    message = "Invalid OTP"


class SessionRequired(AuthError):
    message = "admin session required"


class ExternalDependencyError(PortalError):
    status_code = 500
    message = "External dependency failed"


class ExternalStoreError(ExternalDependencyError):
    """A store call returned a non-success status (status 0 = no response)."""

    def __init__(self, status: int, body: str, method: str = "", table: str = ""):
        self.status = status
        self.body = body
        self.method = method
        self.table = table
        super().__init__(f"Supabase {method} {table} failed: {status} {body}")


class NotificationError(ExternalDependencyError):
    def __init__(self, provider: str, status: int, body: str):
        self.provider = provider
        self.status = status
        self.body = body
        super().__init__(f"{provider} send failed: {status} {body}")
