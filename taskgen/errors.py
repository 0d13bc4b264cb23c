"""Error types raised across the application."""


class TaskGenError(Exception):
    """Base class for application errors."""


class InvalidInput(TaskGenError):
    """Generation context is missing or blank."""


class SchemaViolation(TaskGenError):
    """A structured response does not match the task list schema."""


class GenerationFailed(TaskGenError):
    """The model provider could not produce a valid task list."""


class RelayError(TaskGenError):
    """Base class for webhook relay failures."""


class RelayUnreachable(RelayError):
    """The webhook endpoint could not be reached."""


class PersistenceParseError(TaskGenError):
    """Persisted task list could not be decoded."""
