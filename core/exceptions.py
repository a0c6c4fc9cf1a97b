"""
Matching errors reported to the caller.

Provider and notification failures never show up here: they are recovered
or swallowed inside the engine.
"""


class MatchingError(Exception):
    """Base exception for matching-layer errors."""
    pass


class ProfileNotFoundError(MatchingError):
    """Raised when the candidate profile does not exist (precondition failure)."""

    def __init__(self, identifier: str, message: str = "Nurse profile not found"):
        self.identifier = identifier
        super().__init__(f"{message}: {identifier}")


class JobStoreError(MatchingError):
    """Raised when the set of active jobs cannot be retrieved."""
    pass


class MatchingCancelledError(MatchingError):
    """Raised when the caller cancels a matching run before it completes."""
    pass
