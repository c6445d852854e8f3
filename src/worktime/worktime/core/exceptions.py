class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NoCheckInError(ValidationError):
    """Raised when checking out on a date that has no session."""


class PersistenceError(DomainError):
    """Raised when the storage layer fails to load or save state."""


class ProviderError(DomainError):
    """Base for failures of external collaborators (HR API, holiday API, webhooks)."""


class AttendanceProviderError(ProviderError):
    pass


class HolidayProviderError(ProviderError):
    pass


class NotificationError(ProviderError):
    pass
