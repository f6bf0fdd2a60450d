"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidRecordError(DomainException):
    """Record data is malformed (e.g. a timestamp that cannot be parsed)"""

    pass


class ScreeningProviderError(DomainException):
    """External screening provider returned an error or is unavailable"""

    pass


class TenantNotFoundError(DomainException):
    """Tenant does not exist or has no lease on the owner's units"""

    pass


class UnitNotFoundError(DomainException):
    """Unit does not exist or is not owned by the requesting landlord"""

    pass
