"""Exception hierarchy for lively-langs."""


class LivelyLangsError(Exception):
    """Base exception for all lively-langs errors."""

    message = "internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class UserError(LivelyLangsError):
    """Error caused by client input; its message is safe to return."""


# ========== Not found ==========

class NotFoundError(UserError):
    """Entity doesn't exist in the database."""

    message = "not found"


class LanguageNotFoundError(NotFoundError):
    message = "no language found"


class WordNotFoundError(NotFoundError):
    message = "no word found"


# ========== Invalid input ==========

class InvalidInputError(UserError):
    """Empty or malformed name, word or alias."""

    message = "invalid input"


class InvalidLanguageError(InvalidInputError):
    message = "invalid language"


class InvalidWordError(InvalidInputError):
    message = "invalid word"


# ========== Already exists ==========

class AlreadyExistsError(UserError):
    """Unique constraint collision."""

    message = "already exists"


class LanguageExistsError(AlreadyExistsError):
    message = "language already exists"
