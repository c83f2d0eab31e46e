"""
Error types for DrillStack

Provides:
- Custom exception classes
- Consistent error payload format for the UI layer
"""

from typing import Optional, Dict, Any


class DrillStackError(Exception):
    """Base exception class for DrillStack."""

    def __init__(
        self,
        message: str,
        code: str = 'UNKNOWN_ERROR',
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert error to dictionary for the UI layer."""
        return {
            'success': False,
            'message': self.message,
            'code': self.code,
            'details': self.details
        }


class PreconditionError(DrillStackError):
    """A session cannot start with the current word set."""

    def __init__(self, message: str, code: str = 'PRECONDITION_FAILED', required: int = None, available: int = None):
        details = {}
        if required is not None:
            details['required'] = required
        if available is not None:
            details['available'] = available
        super().__init__(
            message=message,
            code=code,
            details=details
        )


class PlaybackError(DrillStackError):
    """Audio could not be synthesized or played."""

    def __init__(self, message: str = 'Audio playback failed', text: str = None, language_code: str = None):
        details = {}
        if text:
            details['text'] = text
        if language_code:
            details['language_code'] = language_code
        super().__init__(
            message=message,
            code='PLAYBACK_FAILED',
            details=details
        )


class ConfigurationError(DrillStackError):
    """Invalid engine configuration."""

    def __init__(self, message: str = 'Invalid configuration', key: str = None):
        super().__init__(
            message=message,
            code='CONFIG_ERROR',
            details={'key': key} if key else None
        )


def error_payload(
    message: str,
    code: str = 'ERROR',
    details: Dict = None
) -> dict:
    """Create a standardized error payload."""
    response = {
        'success': False,
        'message': message,
        'code': code
    }
    if details:
        response['details'] = details

    return response
