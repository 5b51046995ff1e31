import httpx
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

DEFAULT_MESSAGE = "Something went wrong on our end. Please try again."

# Checked in order; subclasses before their bases.
FRIENDLY_MESSAGES = (
    (IntegrityError, "The record conflicts with existing data."),
    (OperationalError, "The ledger database is temporarily unavailable. Please try again shortly."),
    (DBAPIError, "Temporary issue while accessing the ledger. Please try again shortly."),
    (httpx.TimeoutException, "A payment or identity service took too long to answer."),
    (httpx.HTTPError, "Unable to reach a payment or identity service. Please try again later."),
    (TimeoutError, "The request took too long. Please try again later."),
)


def get_friendly_message(error: Exception) -> str:
    for error_type, message in FRIENDLY_MESSAGES:
        if isinstance(error, error_type):
            return message
    return DEFAULT_MESSAGE
