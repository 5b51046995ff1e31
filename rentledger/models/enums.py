from enum import Enum


class LeaseStatus(str, Enum):
    ACTIVE = "Active"
    EXPIRING_SOON = "ExpiringSoon"
    TERMINATED = "Terminated"


class PaymentStatus(str, Enum):
    SUCCESS = "success"
    PENDING = "pending"
    FAILED = "failed"


class MaintenancePriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class MaintenanceStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"


class ReconciliationOutcome(str, Enum):
    RECORDED = "recorded"
    DUPLICATE = "duplicate"
    IGNORED_EVENT = "ignored_event"
    NO_CUSTOMER = "no_customer"
    UNKNOWN_CUSTOMER = "unknown_customer"
    MALFORMED = "malformed"
