"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class RecordValidationError(Exception):
    """Raised when required fields are missing or out of range.

    ``errors`` maps each offending field to a human-readable message so
    callers can surface them next to the matching input.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        details = "; ".join(f"{field}: {message}" for field, message in errors.items())
        super().__init__(f"Validation failed — {details}")


class InvalidTransitionError(RecordValidationError):
    """Raised when a service record cannot move to the requested status."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(
            {"status": f"cannot transition from '{current}' to '{target}'"}
        )


class UnauthorizedError(Exception):
    """Raised when an operator or shop may not perform the operation.

    ``reason`` is a short machine-readable code (e.g. ``operator_inactive``,
    ``trial_expired``) so clients can pick a support flow.
    """

    def __init__(self, reason: str, message: str):
        self.reason = reason
        self.message = message
        super().__init__(message)


class TransientIOError(Exception):
    """Raised when persistence or network I/O fails in a retryable way."""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Temporary failure during {operation}{detail}")


class AuthProviderError(Exception):
    """Raised when the authentication provider rejects a request.

    Provider-agnostic — ``code`` carries the provider's error code
    (e.g. ``INVALID_PASSWORD``) for mapping to user-facing messages.
    """

    def __init__(self, provider: str, status_code: int, code: str):
        self.provider = provider
        self.status_code = status_code
        self.code = code
        super().__init__(f"[{provider}] {status_code}: {code}")
