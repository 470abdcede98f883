"""
Exceptions raised by the team balancing engine.
"""

from domain import error_codes


class ConfigError(ValueError):
    """
    Caller mistake detected before any search begins.

    Carries a stable code from domain.error_codes so the service layer can
    report it without parsing the message.
    """

    def __init__(self, message: str, code: str = error_codes.VALIDATION_ERROR):
        super().__init__(message)
        self.code = code


class GenerationFailure(RuntimeError):
    """The bounded search, fallback included, produced no usable arrangement."""
