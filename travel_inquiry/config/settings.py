"""
Settings resolution for the submission service

Every setting is looked up through a prioritized list of environment
variable names, then an optional YAML file, then a default. The result is a
single frozen Settings object handed to the handler.
"""
import logging
import os
from pathlib import Path
from typing import Any, Literal, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "TRAVEL_INQUIRY_CONFIG"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# field name -> environment variable names, highest priority first
ENV_NAMES: dict[str, tuple[str, ...]] = {
    "table_name": ("TABLE_NAME", "DYNAMODB_TABLE_NAME"),
    "email_index": ("EMAIL_INDEX_NAME",),
    "from_email": ("FROM_EMAIL", "SES_SENDER"),
    "to_email": ("BUSINESS_EMAIL", "SES_RECIPIENT", "TO_EMAIL"),
    "region": ("AWS_REGION", "AWS_DEFAULT_REGION"),
    "environment": ("APP_ENV", "NODE_ENV", "ENVIRONMENT"),
    "storage_backend": ("STORAGE_BACKEND",),
    "email_backend": ("EMAIL_BACKEND",),
    "storage_dir": ("STORAGE_DIR",),
    "brand_name": ("BRAND_NAME",),
    "log_level": ("LOG_LEVEL",),
}

DEFAULTS: dict[str, Any] = {
    "table_name": None,
    "email_index": "email-index",
    "from_email": None,
    "to_email": None,
    "region": "us-east-1",
    "environment": "production",
    "storage_backend": None,
    "email_backend": "ses",
    "storage_dir": ".travel_inquiry/submissions",
    "brand_name": "Travel with Ease",
    "log_level": "INFO",
}


class Settings(BaseModel):
    """Resolved, immutable service configuration"""

    model_config = ConfigDict(frozen=True)

    table_name: Optional[str] = None
    email_index: str = "email-index"
    from_email: Optional[str] = None
    to_email: Optional[str] = None
    region: str = "us-east-1"
    environment: str = "production"
    storage_backend: Literal["dynamodb", "file", "memory"] = "file"
    email_backend: Literal["ses", "memory"] = "ses"
    storage_dir: Path = Path(".travel_inquiry/submissions")
    brand_name: str = "Travel with Ease"
    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"

    @property
    def is_development(self) -> bool:
        """Whether internal error detail may be returned to callers"""
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def customer_email_configured(self) -> bool:
        return bool(self.from_email)

    @property
    def business_email_configured(self) -> bool:
        return bool(self.from_email and self.to_email)


def _clean(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def lookup(
    names: tuple[str, ...],
    environ: Mapping[str, str],
    file_values: Mapping[str, Any],
    field: str,
) -> Any:
    """Return the first non-blank value for a setting

    Args:
        names: Environment variable names in priority order
        environ: Environment mapping
        file_values: Values read from the YAML config file
        field: Settings field name, also used as the YAML key

    Returns:
        The resolved value or the field default
    """
    for name in names:
        value = _clean(environ.get(name))
        if value is not None:
            return value

    value = _clean(file_values.get(field))
    if value is not None:
        return value

    return DEFAULTS[field]


def load_config_file(path: Optional[Path]) -> dict[str, Any]:
    """Load settings from a YAML file

    Args:
        path: YAML file path (None to skip)

    Returns:
        Mapping of settings field names to values

    Raises:
        ValueError: If the file does not contain a mapping
    """
    if path is None or not path.exists():
        return {}

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    config_file: Optional[Path] = None,
) -> Settings:
    """Resolve the service settings

    Args:
        environ: Environment mapping (defaults to os.environ)
        config_file: Optional YAML file; falls back to $TRAVEL_INQUIRY_CONFIG

    Returns:
        Frozen Settings instance
    """
    if environ is None:
        environ = os.environ

    if config_file is None and _clean(environ.get(CONFIG_FILE_ENV)):
        config_file = Path(environ[CONFIG_FILE_ENV].strip())

    file_values = load_config_file(config_file)
    values = {
        field: lookup(names, environ, file_values, field)
        for field, names in ENV_NAMES.items()
    }

    if values["storage_backend"] is None:
        values["storage_backend"] = "dynamodb" if values["table_name"] else "file"
    values["storage_backend"] = str(values["storage_backend"]).lower()
    values["email_backend"] = str(values["email_backend"]).lower()
    values["log_level"] = str(values["log_level"]).upper()
    if values["log_level"] not in LOG_LEVELS:
        logger.warning("Unknown LOG_LEVEL %r, using INFO", values["log_level"])
        values["log_level"] = "INFO"

    return Settings(**values)
