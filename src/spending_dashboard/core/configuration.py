import os
from dataclasses import dataclass
from typing import Any, Literal

from spending_dashboard.core import settings
from spending_dashboard.logger import get_logger

ValueType = Literal["string", "int"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConfigField:
    key: str
    label: str
    description: str
    placeholder: str
    category: str
    value_type: ValueType = "string"
    options: tuple[str, ...] | None = None
    min_value: int | None = None
    max_value: int | None = None
    restart_required: bool = False


CONFIG_FIELDS: tuple[ConfigField, ...] = (
    ConfigField(
        key="TOP_CATEGORY_LIMIT",
        label="Top Categories",
        description="Number of categories shown in the category breakdown.",
        placeholder="10",
        category="Dashboard",
        value_type="int",
        min_value=1,
        max_value=100,
    ),
    ConfigField(
        key="DATA_DIR",
        label="Data Directory",
        description="Directory holding the persisted transactions and ignored categories.",
        placeholder="/app/data",
        category="Storage",
        restart_required=True,
    ),
    ConfigField(
        key="STORE_FILENAME",
        label="Store File",
        description="JSON file name inside the data directory.",
        placeholder=settings.DEFAULT_STORE_FILENAME,
        category="Storage",
        restart_required=True,
    ),
    ConfigField(
        key="LOG_DIR",
        label="Log Directory",
        description="Directory for application logs (app.log).",
        placeholder="/app/logs",
        category="Logging",
        restart_required=True,
    ),
    ConfigField(
        key="LOG_LEVEL",
        label="Log Level",
        description="Logging verbosity for the application.",
        placeholder="INFO",
        category="Logging",
        options=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        restart_required=True,
    ),
)

CONFIG_TEMPLATE = """# Spending Dashboard configuration
# These settings only take effect when the same environment variable is not set.
# Remove the leading "#" to enable a setting here.

# Number of categories in the category breakdown (minimum 1)
# TOP_CATEGORY_LIMIT:

# Data directory (dashboard.json)
# DATA_DIR:

# Store file name inside the data directory
# STORE_FILENAME:

# Log directory (app.log)
# LOG_DIR:

# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
# LOG_LEVEL:
"""


def get_config_path() -> str | None:
    config_path = settings.get_config_path()
    if config_path:
        return config_path
    return os.path.join(os.getcwd(), "config", settings.CONFIG_FILENAME)


def build_config_context() -> dict[str, Any]:
    config_path = get_config_path()
    config_values = settings.read_config_file(config_path)
    fields: list[dict[str, Any]] = []

    for field in CONFIG_FIELDS:
        env_override = settings.is_env_override(field.key)
        value = os.getenv(field.key, "") if env_override else config_values.get(field.key, "")
        fields.append(
            {
                "key": field.key,
                "label": field.label,
                "description": field.description,
                "placeholder": field.placeholder,
                "category": field.category,
                "value": value,
                "options": field.options,
                "env_override": env_override,
                "restart_required": field.restart_required,
            }
        )

    return {
        "config_path": config_path or "Not configured",
        "fields": fields,
        "env_override_count": sum(1 for f in fields if f["env_override"]),
    }


def _validate_value(field: ConfigField, raw_value: str) -> tuple[str, str | None]:
    value = raw_value.strip()
    if not value:
        return "", None

    if "\n" in value or "\r" in value:
        return value, "Value must be a single line."

    if "\"" in value or "'" in value:
        return value, "Value must not contain quotes."

    if field.options:
        normalized = value.upper()
        if normalized not in field.options:
            return value, f"Must be one of: {', '.join(field.options)}."
        return normalized, None

    if field.value_type == "int":
        try:
            parsed = int(value)
        except ValueError:
            return value, "Must be a whole number."
        if field.min_value is not None and parsed < field.min_value:
            return value, f"Must be at least {field.min_value}."
        if field.max_value is not None and parsed > field.max_value:
            return value, f"Must be at most {field.max_value}."
        return str(parsed), None

    return value, None


def apply_config_updates(values: dict[str, str]) -> tuple[dict[str, str], dict[str, str]]:
    """Validate, persist and apply submitted values.

    Returns ``(errors, updates)``; nothing is written when any value fails.
    Keys that are set in the real environment are skipped.
    """
    errors: dict[str, str] = {}
    updates: dict[str, str] = {}

    for field in CONFIG_FIELDS:
        if settings.is_env_override(field.key):
            continue

        raw_value = values.get(field.key)
        if raw_value is None:
            continue

        cleaned, error = _validate_value(field, raw_value)
        if error:
            errors[field.key] = error
            continue
        updates[field.key] = cleaned

    if errors:
        return errors, {}

    _write_config_file(updates)
    _apply_runtime_overrides(updates)
    return {}, updates


def _write_config_file(updates: dict[str, str]) -> None:
    if not updates:
        return
    config_path = get_config_path()
    if not config_path:
        raise RuntimeError("No configuration path available.")

    config_dir = os.path.dirname(config_path)
    if config_dir:
        os.makedirs(config_dir, exist_ok=True)
    lines: list[str]
    if os.path.exists(config_path):
        with open(config_path, encoding="utf-8") as handle:
            lines = handle.read().splitlines()
    else:
        lines = CONFIG_TEMPLATE.splitlines()

    key_indexes: dict[str, int] = {}
    for index, line in enumerate(lines):
        stripped = line.strip()
        if not stripped or ":" not in stripped:
            continue
        candidate = stripped
        if candidate.startswith("#"):
            candidate = candidate[1:].lstrip()
        key = candidate.split(":", 1)[0].strip()
        if key in updates and key not in key_indexes:
            key_indexes[key] = index

    for key, value in updates.items():
        new_line = f"{key}: {_format_yaml_value(value)}" if value else f"# {key}:"
        if key in key_indexes:
            lines[key_indexes[key]] = new_line
        else:
            lines.append(new_line)

    with open(config_path, "w", encoding="utf-8") as handle:
        handle.write("\n".join(lines).rstrip("\n") + "\n")
    logger.info("[CONFIG] Wrote %d setting(s) to %s.", len(updates), config_path)


def _apply_runtime_overrides(updates: dict[str, str]) -> None:
    for key, value in updates.items():
        if value:
            os.environ[key] = value
        else:
            os.environ.pop(key, None)


def apply_runtime_updates(app: Any, updates: dict[str, str]) -> None:
    if "TOP_CATEGORY_LIMIT" not in updates:
        return
    state = getattr(app, "state", None)
    service = getattr(state, "service", None) if state is not None else None

    from spending_dashboard.manager import DashboardService

    if not isinstance(service, DashboardService):
        return
    service.top_categories = settings.get_top_category_limit()
    logger.info("[CONFIG] Top category limit set to %s.", service.top_categories)


def _format_yaml_value(value: str) -> str:
    if ":" in value or "#" in value:
        return f"\"{value}\""
    return value
