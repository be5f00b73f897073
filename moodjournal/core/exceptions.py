"""
Exception taxonomy for the storage core.

Absent records are never exceptions at the storage layer: lookups return
``None`` and deletes return ``False``.
"""


class MoodJournalError(Exception):
    """Base class for all mood journal errors."""


class InitializationError(MoodJournalError):
    """Schema creation or backend construction failed; startup must abort."""


class StorageError(MoodJournalError):
    """A read or write against the selected backend failed."""
