"""
Environment parsing helpers for the FAQ bot configuration.

Every helper reads one variable and turns bad values into ConfigurationError,
so a misconfigured deployment fails at startup instead of on the first query.
"""
import os
import warnings
from typing import Callable, Optional, TypeVar

from .exceptions import ConfigurationError

T = TypeVar("T")

# Values copied from .env.example that were never filled in
_PLACEHOLDER_MARKERS = (
    "your_",
    "your-",
    "placeholder",
    "changeme",
    "xxx",
    "sk-0000",
    "secret_0000",
    "replace",
)

_TRUE_VALUES = ("1", "true", "yes", "on")


def get_required_env(key: str, description: str = None) -> str:
    """
    Read a variable the service cannot start without.

    :param key: Environment variable name
    :param description: What the value is for, shown when it is missing
    :raises ConfigurationError: if unset, empty or still a placeholder
    """
    value = os.environ.get(key, "").strip()
    if not value:
        raise ConfigurationError(
            f"{key} is required but not set.\n"
            f"Add it to the environment or to .env in the project root.\n"
            f"Description: {description or key}"
        )

    if _is_placeholder(value):
        raise ConfigurationError(
            f"{key} still holds a placeholder value ({_mask_secret(value)}); "
            f"replace it with the real setting."
        )
    return value


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Read a variable, using ``default`` when it is unset or a placeholder."""
    value = os.environ.get(key)
    if value is None:
        return default

    if _is_placeholder(value):
        warnings.warn(
            f"{key} looks like a placeholder ({_mask_secret(value)}); using the default.",
            UserWarning,
        )
        return default
    return value


def get_bool_env(key: str, default: bool) -> bool:
    value = get_optional_env(key)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUE_VALUES


def get_int_env(key: str, default: Optional[int]) -> Optional[int]:
    return _get_parsed_env(key, default, int, "an integer")


def get_float_env(key: str, default: Optional[float]) -> Optional[float]:
    return _get_parsed_env(key, default, float, "a number")


def _get_parsed_env(
    key: str, default: Optional[T], parse: Callable[[str], T], kind: str
) -> Optional[T]:
    value = get_optional_env(key)
    if value is None or not value.strip():
        return default
    try:
        return parse(value.strip())
    except ValueError:
        raise ConfigurationError(f"{key} must be {kind}, got {value!r}") from None


def validate_path(path: str, env_name: str, must_exist: bool = False) -> str:
    """
    Check a file setting such as FAQ_CSV_PATH.

    :raises ConfigurationError: if empty, or missing on disk while ``must_exist``
    """
    if not path:
        raise ConfigurationError(f"{env_name} is required for this source.")

    if must_exist and not os.path.isfile(path):
        raise ConfigurationError(
            f"{env_name} does not exist: {path}\n"
            f"Point it at the exported FAQ table."
        )
    return path


def _is_placeholder(value: str) -> bool:
    lowered = (value or "").lower()
    return any(marker in lowered for marker in _PLACEHOLDER_MARKERS)


def _mask_secret(secret: str, visible: int = 4) -> str:
    if len(secret) <= visible * 2:
        return "***"
    return f"{secret[:visible]}...{secret[-visible:]}"
