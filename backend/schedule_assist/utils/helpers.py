"""
Shared Utility Functions for the Schedule Assist engine

Provides the interval primitives every engine component relies on
("HH:MM" parsing, half-open overlap checks), formatting helpers for
time windows and durations, and execution timing for logging.
"""

import logging
import re
from typing import Any, List, Union
from datetime import datetime
from functools import wraps

# Configure module logger
logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

DAY_NAMES = [
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"
]

_TIME_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})$')


class InvalidTimeFormatError(ValueError):
    """Raised when a wall-clock time string is not a valid "HH:MM" value"""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid time '{value}', expected HH:MM between 00:00 and 23:59")


# =============================================================================
# Interval Utilities
# =============================================================================

def time_to_minutes(time_str: str) -> int:
    """
    Convert an "HH:MM" wall-clock string to minutes since midnight

    Args:
        time_str: Time of day such as "09:30"

    Returns:
        Minutes since midnight, 0 to 1439

    Raises:
        InvalidTimeFormatError: if the string is not a valid time of day
    """
    if not isinstance(time_str, str):
        raise InvalidTimeFormatError(time_str)

    match = _TIME_PATTERN.match(time_str.strip())
    if not match:
        raise InvalidTimeFormatError(time_str)

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeFormatError(time_str)

    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight back to an "HH:MM" string"""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"Minutes out of range for a single day: {minutes}")
    hours, remainder = divmod(minutes, 60)
    return f"{hours:02d}:{remainder:02d}"


def minutes_since_midnight(moment: datetime) -> int:
    """Wall-clock position of a datetime within its own day"""
    return moment.hour * 60 + moment.minute


def overlaps(
    start_a: Union[int, datetime],
    end_a: Union[int, datetime],
    start_b: Union[int, datetime],
    end_b: Union[int, datetime]
) -> bool:
    """Check if two half-open ranges [start, end) overlap.

    Ranges that only touch at an endpoint do not overlap.
    """
    return start_a < end_b and start_b < end_a


# =============================================================================
# Formatting Utilities
# =============================================================================

def get_day_name(weekday: int) -> str:
    """English day name for a weekday number (0=Monday)"""
    return DAY_NAMES[weekday]


def format_time_window(window) -> str:
    """Format a time window as '09:00 - 17:00'"""
    return f"{window.start_time} - {window.end_time}"


def format_duration(minutes: int) -> str:
    """Format duration in minutes to human-readable string"""
    if minutes < 60:
        return f"{minutes} minute{'s' if minutes != 1 else ''}"

    hours = minutes // 60
    remaining_minutes = minutes % 60
    if remaining_minutes == 0:
        return f"{hours} hour{'s' if hours != 1 else ''}"
    return (
        f"{hours} hour{'s' if hours != 1 else ''} and "
        f"{remaining_minutes} minute{'s' if remaining_minutes != 1 else ''}"
    )


# =============================================================================
# Performance Utilities
# =============================================================================

def measure_execution_time(func):
    """Decorator to measure function execution time"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = datetime.now()
        try:
            result = func(*args, **kwargs)
            execution_time = (datetime.now() - start_time).total_seconds()
            logger.debug(f"{func.__name__} executed in {execution_time:.3f} seconds")
            return result
        except Exception as e:
            execution_time = (datetime.now() - start_time).total_seconds()
            logger.error(f"{func.__name__} failed after {execution_time:.3f} seconds: {str(e)}")
            raise

    return wrapper


__all__: List[str] = [
    # Interval utilities
    'time_to_minutes',
    'minutes_to_time',
    'minutes_since_midnight',
    'overlaps',

    # Formatting
    'get_day_name',
    'format_time_window',
    'format_duration',

    # Performance
    'measure_execution_time',

    # Errors and constants
    'InvalidTimeFormatError',
    'DAY_NAMES',
    'MINUTES_PER_DAY',
]
