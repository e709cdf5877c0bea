from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"

    def __str__(self):
        return self.value


class QuoteStatus(str, Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    APPROVED = "approved"
    REJECTED = "rejected"

    def __str__(self):
        return self.value


# Strict review flow, only applied when ENFORCE_QUOTE_TRANSITIONS is on.
QUOTE_TRANSITIONS = {
    QuoteStatus.PENDING: {QuoteStatus.REVIEWED, QuoteStatus.APPROVED, QuoteStatus.REJECTED},
    QuoteStatus.REVIEWED: {QuoteStatus.APPROVED, QuoteStatus.REJECTED},
    QuoteStatus.APPROVED: set(),
    QuoteStatus.REJECTED: set(),
}


class AuditAction(str, Enum):
    LOGIN = "login"
    REGISTER = "register"
    CREATE_QUOTE = "create_quote"
    UPDATE_QUOTE = "update_quote"
    DELETE_QUOTE = "delete_quote"
    CREATE_SERVICE = "create_service"
    UPDATE_SERVICE = "update_service"
    DELETE_SERVICE = "delete_service"
    INITIALIZE_SERVICE_AREAS = "initialize_service_areas"
    CREATE_SERVICE_AREA = "create_service_area"
    UPDATE_SERVICE_AREA = "update_service_area"
    TOGGLE_SERVICE_AREA = "toggle_service_area"
    DELETE_SERVICE_AREA = "delete_service_area"
    UPDATE_USER = "update_user"
    DELETE_USER = "delete_user"

    def __str__(self):
        return self.value
