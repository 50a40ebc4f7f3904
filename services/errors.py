"""Domain errors raised by the user store and log query.

Every error carries the message sent back to clients as ``{"error": message}``
and the HTTP status the API layer answers with.
"""

from enum import Enum


class ValidationKind(str, Enum):
    """Reason a field failed validation."""
    REQUIRED = "Required"
    TOO_SHORT = "TooShort"
    INVALID = "Invalid"


class TrackerError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UserNotFoundError(TrackerError):
    status_code = 404

    def __init__(self, user_id: str):
        super().__init__("No user was found")
        self.user_id = user_id


class DuplicateUsernameError(TrackerError):
    status_code = 409

    def __init__(self, username: str):
        super().__init__("There is already a user with that username")
        self.username = username


class ValidationError(TrackerError):
    """A required field is missing, too short, or of the wrong type."""

    status_code = 400

    def __init__(self, field: str, kind: ValidationKind, message: str):
        super().__init__(message)
        self.field = field
        self.kind = kind


class UsernameValidationError(ValidationError):
    MESSAGES = {
        ValidationKind.REQUIRED: "Username is a required field",
        ValidationKind.TOO_SHORT: "Username must be at least 3 characters long",
    }

    def __init__(self, kind: ValidationKind):
        super().__init__("username", kind, self.MESSAGES[kind])


class EntryValidationError(ValidationError):
    def __init__(self, field: str, kind: ValidationKind):
        if kind == ValidationKind.REQUIRED:
            message = f"{field.capitalize()} is a required field"
        else:
            message = f"{field.capitalize()} must be a number"
        super().__init__(field, kind, message)


class InvalidDateFormatError(TrackerError):
    status_code = 400

    def __init__(self, value: str):
        super().__init__(f"Invalid date format: '{value}'")
        self.value = value
