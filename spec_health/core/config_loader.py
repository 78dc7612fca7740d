# Path: spec_health/core/config_loader.py
"""
Configuration Loader for Spec Health Module

Loads configuration from .env file for the spec health check system.
Singleton pattern ensures consistent configuration across all components.

All configuration comes from environment variables.
Nothing here is required: an unconfigured install scores documents
and prints to the console without writing logs or reports.
"""

import os
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

from ..constants import VOCABULARY_FILE


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================

# Logging Defaults
DEFAULT_LOG_LEVEL: str = 'INFO'

# Evaluation Defaults
DEFAULT_ENABLE_SELF_REPAIR: bool = True
DEFAULT_MAX_ACTIONABLE_FINDINGS: int = 3

# Report Defaults
DEFAULT_REPORT_DECIMALS: int = 2

# Bundled vocabulary (weasel phrases, vague verbs, ...)
DEFAULT_VOCABULARY_PATH: Path = Path(__file__).resolve().parent.parent / 'data' / VOCABULARY_FILE


class ConfigLoader:
    """
    Singleton configuration loader for spec health module.

    Loads configuration from environment variables with validation,
    type conversion, and sensible defaults.

    Example:
        config = ConfigLoader()
        output_dir = config.get('output_dir')  # Returns Path object or None
        repair = config.get('enable_self_repair')  # Returns bool
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern. Loads .env file
        and validates all configuration on first instantiation.
        """
        if ConfigLoader._initialized:
            return

        # spec_health/core/config_loader.py -> go up 3 levels to project root
        current_file = Path(__file__).resolve()
        project_root = current_file.parent.parent.parent
        env_path = project_root / '.env'

        if env_path.exists():
            load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    def _load_configuration(self) -> dict[str, any]:
        """
        Load and validate all configuration from environment.

        Returns:
            Dictionary of validated configuration values with proper types
        """
        config = {
            # ================================================================
            # ENVIRONMENT & DEBUG
            # ================================================================
            'environment': self._get_env('SPEC_HEALTH_ENVIRONMENT', 'development'),
            'debug': self._get_bool('SPEC_HEALTH_DEBUG', False),

            # ================================================================
            # OUTPUT PATHS (WRITE)
            # ================================================================
            'output_dir': self._get_path('SPEC_HEALTH_OUTPUT_DIR'),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_dir': self._get_path('SPEC_HEALTH_LOG_DIR'),
            'log_level': self._get_env('SPEC_HEALTH_LOG_LEVEL', DEFAULT_LOG_LEVEL),

            # ================================================================
            # EVALUATION
            # ================================================================
            'enable_self_repair': self._get_bool(
                'SPEC_HEALTH_ENABLE_SELF_REPAIR', DEFAULT_ENABLE_SELF_REPAIR
            ),
            'max_actionable_findings': self._get_int(
                'SPEC_HEALTH_MAX_ACTIONABLE_FINDINGS', DEFAULT_MAX_ACTIONABLE_FINDINGS
            ),
            'vocabulary_path': (
                self._get_path('SPEC_HEALTH_VOCABULARY_PATH') or DEFAULT_VOCABULARY_PATH
            ),

            # ================================================================
            # REPORTING
            # ================================================================
            'report_decimals': self._get_int(
                'SPEC_HEALTH_REPORT_DECIMALS', DEFAULT_REPORT_DECIMALS
            ),
        }

        return config

    def _get_env(
        self,
        key: str,
        default: Optional[str] = None,
        required: bool = False
    ) -> Optional[str]:
        """Get string environment variable."""
        value = os.getenv(key)

        if value is None:
            if required:
                raise ValueError(f"Required environment variable '{key}' is not set")
            return default

        return value.strip()

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default

        return value.strip().lower() in ('true', '1', 'yes', 'on')

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value.strip())
        except ValueError:
            return default

    def _get_path(self, key: str, required: bool = False) -> Optional[Path]:
        """Get path environment variable."""
        value = os.getenv(key)

        if value is None or not value.strip():
            if required:
                raise ValueError(f"Required environment variable '{key}' is not set")
            return None

        return Path(value.strip())

    def get(self, key: str, default: any = None) -> any:
        """Get configuration value."""
        value = self._config.get(key, default)
        return default if value is None else value

    def set(self, key: str, value: any) -> None:
        """Override a configuration value (CLI flags)."""
        self._config[key] = value

    def __getitem__(self, key: str) -> any:
        """Get configuration value using dictionary syntax."""
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        """Check if configuration key exists."""
        return key in self._config

    def keys(self):
        """Get all configuration keys."""
        return self._config.keys()

    def items(self):
        """Get all configuration key-value pairs."""
        return self._config.items()

    @classmethod
    def reset(cls):
        """Reset singleton for testing purposes."""
        cls._instance = None
        cls._initialized = False


__all__ = ['ConfigLoader']
