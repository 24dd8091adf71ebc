"""
Schedule Assist Configuration Management
Handles environment variables, suggestion search settings, and logging setup
"""

import os
import logging
import logging.config
from typing import Dict, Any, List
from dataclasses import dataclass
from pathlib import Path

from .helpers import time_to_minutes, InvalidTimeFormatError

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

# Upper bounds on the suggestion search
MAX_HORIZON_DAYS = 7
MAX_SUGGESTIONS = 4

@dataclass
class SuggestionConfig:
    """Time-suggestion search grid and horizon"""
    horizon_days: int
    grid_start: str
    grid_end: str
    grid_step_minutes: int
    max_suggestions: int
    default_duration_minutes: int

    @classmethod
    def from_env(cls) -> 'SuggestionConfig':
        return cls(
            horizon_days=int(os.getenv('SUGGESTION_HORIZON_DAYS', '7')),
            grid_start=os.getenv('SUGGESTION_GRID_START', '08:00'),
            grid_end=os.getenv('SUGGESTION_GRID_END', '17:30'),
            grid_step_minutes=int(os.getenv('SUGGESTION_GRID_STEP', '30')),
            max_suggestions=int(os.getenv('SUGGESTION_LIMIT', '4')),
            default_duration_minutes=int(os.getenv('SUGGESTION_DEFAULT_DURATION', '60'))
        )

@dataclass
class LoggingConfig:
    """Logging Configuration"""
    log_level: str

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        return cls(
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper()
        )

class Config:
    """Main Configuration Manager"""

    def __init__(self):
        self.load_environment()

        # Load all configuration sections
        self.suggestions = SuggestionConfig.from_env()
        self.logging = LoggingConfig.from_env()

        # Validate critical configurations
        self.validate_config()

    def load_environment(self) -> None:
        """Load environment variables from .env file if it exists"""
        env_path = Path(__file__).parent.parent / 'config' / '.env'

        if env_path.exists():
            with open(env_path, 'r') as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith('#'):
                        key, value = line.split('=', 1)
                        os.environ.setdefault(key.strip(), value.strip())
            logger.info(f"Loaded environment from {env_path}")

    def validate_config(self) -> None:
        """Validate configuration values"""
        errors: List[str] = []
        suggestions = self.suggestions

        for name in ('horizon_days', 'grid_step_minutes', 'max_suggestions', 'default_duration_minutes'):
            if getattr(suggestions, name) <= 0:
                errors.append(f"suggestions.{name} must be a positive integer")

        if suggestions.horizon_days > MAX_HORIZON_DAYS:
            errors.append(f"SUGGESTION_HORIZON_DAYS must be at most {MAX_HORIZON_DAYS}")
        if suggestions.max_suggestions > MAX_SUGGESTIONS:
            errors.append(f"SUGGESTION_LIMIT must be at most {MAX_SUGGESTIONS}")

        try:
            if time_to_minutes(suggestions.grid_start) > time_to_minutes(suggestions.grid_end):
                errors.append("SUGGESTION_GRID_START must not be after SUGGESTION_GRID_END")
        except InvalidTimeFormatError as e:
            errors.append(f"Suggestion grid bounds: {e}")

        if self.logging.log_level not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")

        if errors:
            error_msg = "Configuration validation failed:\n" + "\n".join(f"- {error}" for error in errors)
            logger.error(error_msg)
            raise ValueError(error_msg)

        logger.debug("Configuration validation passed")

    def get_log_config(self) -> Dict[str, Any]:
        """Get logging configuration"""
        return {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                },
            },
            'handlers': {
                'default': {
                    'formatter': 'default',
                    'class': 'logging.StreamHandler',
                    'stream': 'ext://sys.stdout',
                },
            },
            'loggers': {
                'schedule_assist': {
                    'level': self.logging.log_level,
                    'handlers': ['default'],
                    'propagate': False,
                },
            },
        }

def configure_logging() -> None:
    """Apply the engine's logging configuration (for host applications and scripts)"""
    logging.config.dictConfig(config.get_log_config())

# Global configuration instance
config = Config()

# Export commonly used configurations
__all__ = [
    'config',
    'configure_logging',
    'SuggestionConfig',
    'LoggingConfig',
    'Config'
]
