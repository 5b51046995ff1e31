class RentLedgerError(Exception):
    """Base class for errors that map onto a structured API response."""

    status_code: int = 500
    error: str = "RentLedgerError"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"success": False, "error": self.error, "detail": self.detail}


class Unauthenticated(RentLedgerError):
    status_code = 401
    error = "Unauthenticated"

    def __init__(self, detail: str = "No token provided"):
        super().__init__(detail)


class InvalidToken(RentLedgerError):
    status_code = 401
    error = "InvalidToken"

    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(detail)


class NotFound(RentLedgerError):
    # Also raised for rows owned by another landlord; the message must not differ.
    status_code = 404
    error = "NotFound"

    def __init__(self, entity: str):
        super().__init__(f"{entity} not found")
        self.entity = entity


class ValidationError(RentLedgerError):
    status_code = 422
    error = "ValidationError"

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

    def to_dict(self) -> dict:
        return {
            "success": False,
            "error": self.error,
            "field": self.field,
            "detail": self.message,
        }


class GatewayError(RentLedgerError):
    status_code = 502
    error = "GatewayError"
