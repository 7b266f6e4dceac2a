"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist or is not visible to the caller.

    Both cases produce the same message so callers cannot probe for the
    existence of records they are not allowed to see.
    """

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DomainValidationError(Exception):
    """Raised when input is malformed or a required field is missing."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class ContentRejectedError(DomainValidationError):
    """Raised when user-supplied text is flagged by the moderation service."""

    def __init__(self, field: str, reason: str | None):
        self.reason = reason or "Content violation"
        super().__init__(field, f"rejected by moderation ({self.reason})")


class PermissionDeniedError(Exception):
    """Raised when a non-owner attempts to mutate an entity."""

    def __init__(self, action: str, entity_type: str, entity_id: int | str):
        self.action = action
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"Not allowed to {action} {entity_type} '{entity_id}'")


class RateLimitExceededError(Exception):
    """Raised when an owner exceeds an admission rate limit."""

    def __init__(self, scope: str, limit: int):
        self.scope = scope
        self.limit = limit
        super().__init__(f"Rate limit reached for {scope}: at most {limit} allowed")


class DuplicateRecordError(Exception):
    """Raised by persistence when an insert collides with a store-level uniqueness rule."""

    def __init__(self, entity_type: str, key: str):
        self.entity_type = entity_type
        self.key = key
        super().__init__(f"{entity_type} with key '{key}' already exists")


class ChatProviderError(Exception):
    """Raised when a chat provider returns an error.

    Provider-agnostic — works for OpenRouter, Groq, OpenAI, etc.
    """

    def __init__(self, provider: str, status_code: int, message: str):
        self.provider = provider
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{provider}] {status_code}: {message}")
