"""Exception types raised at the engine boundary."""


class StudyPerfError(Exception):
    """Base class for all study_perf errors."""


class InvalidInputError(StudyPerfError, ValueError):
    """Raised when a record or config object is structurally invalid."""
