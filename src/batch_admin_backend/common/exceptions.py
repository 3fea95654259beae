"""
This file contains custom, application-specific exceptions.
"""

class TeacherNotFoundError(Exception):
    """Raised when a teacher ID is not found in the database."""
    pass

class InvalidBatchDatesError(ValueError):
    """Raised when a batch would end before it starts."""
    pass
