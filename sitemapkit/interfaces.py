"""
Protocols shared across the package, plus the clock implementations.
Time is read through a Clock so callers and tests can pin it.
"""
from datetime import datetime, timezone
from typing import Any, Protocol


class Clock(Protocol):
    """Protocol for time sources"""

    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime"""
        ...


class ConfigurationProvider(Protocol):
    """Protocol for configuration providers"""

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value"""
        ...

    def validate(self) -> bool:
        """Validate configuration completeness"""
        ...


class Logger(Protocol):
    """Protocol for logging operations"""

    def info(self, message: str) -> None:
        """Log info message"""
        ...

    def error(self, message: str) -> None:
        """Log error message"""
        ...

    def debug(self, message: str) -> None:
        """Log debug message"""
        ...


class SystemClock:
    """Clock backed by the wall clock"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock that always returns the same instant"""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self.instant = instant

    def now(self) -> datetime:
        return self.instant
