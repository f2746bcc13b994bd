"""Core types: results, exit codes and configuration."""

from .config import ConfigError, JetsamConfig, load_config, load_project_config
from .errors import ErrorCode, exit_status
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "JetsamConfig",
    "load_config",
    "load_project_config",
    # errors
    "ErrorCode",
    "exit_status",
    # result
    "Err",
    "Ok",
    "Result",
]
