"""Core domain types and logic."""

from .credentials import Credentials, load_credentials
from .errors import ErrorCode
from .options import DeployOptions, Target, validate_target
from .result import Err, Ok, Result
from .settings import Settings, SettingsError, load_settings

__all__ = [
    # credentials
    "Credentials",
    "load_credentials",
    # errors
    "ErrorCode",
    # options
    "DeployOptions",
    "Target",
    "validate_target",
    # result
    "Err",
    "Ok",
    "Result",
    # settings
    "Settings",
    "SettingsError",
    "load_settings",
]
