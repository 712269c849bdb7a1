"""
Console Logger - Exceptions

Centralized exception hierarchy for logger configuration and animation errors.
"""

from typing import List, Optional


class ClogError(Exception):
    """Base exception for all clog operations."""
    pass


class InvalidLevelError(ClogError, ValueError):
    """Exception for unknown log level names.

    Raised when:
    - parse_level() receives a name that is not a known level
    - CLOG_LOG_LEVEL holds an unrecognised value (logged, not raised)
    """

    def __init__(self, value: str) -> None:
        super().__init__(f"unknown level: {value!r}")
        self.value = value


class InvalidColorModeError(ClogError, ValueError):
    """Exception for unknown colour mode names.

    Raised when:
    - ColorMode.parse() receives something other than auto/always/never
    """

    def __init__(self, value: str) -> None:
        super().__init__(
            f"unknown color mode: {value!r} (valid: 'auto', 'always', 'never')"
        )
        self.value = value


class AnimationCancelledError(ClogError):
    """Exception returned when an animation stops before its task finished.

    Raised when:
    - The caller's cancel event is set while the task is still running
    """
    pass


class AnimationTimeoutError(AnimationCancelledError, TimeoutError):
    """Exception returned when an animation outlives its deadline.

    Raised when:
    - The timeout given to wait()/progress() elapses before the task returns
    """
    pass


class GroupError(ClogError):
    """Exception joining the failures of a group of animations.

    Raised when:
    - One or more tasks of a Group returned an error
    """

    def __init__(self, errors: List[BaseException]) -> None:
        message = "; ".join(str(err) for err in errors)
        super().__init__(message)
        self.errors = errors

    def first(self) -> Optional[BaseException]:
        """Return the first collected error, if any."""
        return self.errors[0] if self.errors else None


class InvalidHyperlinkPresetError(ClogError, ValueError):
    """Exception for unknown hyperlink preset names.

    Raised when:
    - set_hyperlink_preset() receives a name that is not a known preset
    - CLOG_HYPERLINK_FORMAT holds an unknown preset (logged, not raised)
    """

    def __init__(self, value: str, valid: Optional[List[str]] = None) -> None:
        message = f"unknown hyperlink preset: {value!r}"
        if valid:
            message += f" (valid: {', '.join(valid)})"
        super().__init__(message)
        self.value = value


class GroupClosedError(ClogError, RuntimeError):
    """Exception for using a group after it was waited on.

    Raised when:
    - Group.add() or GroupEntry.run()/progress() is called after Group.wait()
    - Group.wait() is called a second time
    """

    def __init__(self) -> None:
        super().__init__("group already waited on; create a new group for more tasks")
