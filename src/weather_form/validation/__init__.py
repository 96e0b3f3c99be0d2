"""
Validation engine for the weather query form.

Synchronous field rules plus asynchronous, cached existence checks for each
location entry, coordinated across the whole location list.
"""

from .cache import ResultCache
from .checker import ExistenceChecker, LookupOutcome
from .coordinator import ListValidationCoordinator, find_duplicates
from .errors import ErrorKind, FieldError, FieldPath
from .keys import ValidationKey
from .session import EntryState, EntryValidationSession, EntryValidationStatus

__all__ = [
    "EntryState",
    "EntryValidationSession",
    "EntryValidationStatus",
    "ErrorKind",
    "ExistenceChecker",
    "FieldError",
    "FieldPath",
    "ListValidationCoordinator",
    "LookupOutcome",
    "ResultCache",
    "ValidationKey",
    "find_duplicates",
]
