"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NoDataToExportError(DomainException):
    """Export requested before any KPI snapshot was available"""

    pass
