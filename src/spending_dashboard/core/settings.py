import os

from dotenv import find_dotenv, load_dotenv

from spending_dashboard.logger import get_logger

logger = get_logger(__name__)


CONFIG_FILENAME = "config.yaml"

DEFAULT_TOP_CATEGORY_LIMIT = 10
DEFAULT_STORE_FILENAME = "dashboard.json"

# Keys that config.yaml may provide; anything already in the environment wins.
CONFIG_KEYS = (
    "LOG_LEVEL",
    "LOG_DIR",
    "DATA_DIR",
    "STORE_FILENAME",
    "TOP_CATEGORY_LIMIT",
)

_CONFIG_FILE_PATH: str | None = None
_EXTERNAL_ENV_KEYS: set[str] = set()


def _config_dir_file(name: str) -> str | None:
    config_dir = os.getenv("CONFIG_DIR")
    return os.path.join(config_dir, name) if config_dir else None


def _resolve_config_path() -> str:
    explicit = _config_dir_file(CONFIG_FILENAME)
    if explicit:
        return explicit
    nested = os.path.join(os.getcwd(), "config", CONFIG_FILENAME)
    if os.path.exists(nested):
        return nested
    return os.path.join(os.getcwd(), CONFIG_FILENAME)


def _strip_inline_comment(raw_value: str) -> str:
    quote: str | None = None
    for index, char in enumerate(raw_value):
        if quote:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "#":
            return raw_value[:index].rstrip()
    return raw_value


def _parse_config_line(line: str) -> tuple[str, str] | None:
    stripped = line.strip()
    if not stripped or stripped.startswith("#") or ":" not in stripped:
        return None
    key, raw_value = stripped.split(":", 1)
    value = _strip_inline_comment(raw_value).strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        value = value[1:-1]
    key = key.strip()
    if not key or not value:
        return None
    return key, value


def read_config_file(path: str | None) -> dict[str, str]:
    """Read flat ``KEY: value`` lines; comments and blank values are skipped."""
    if not path or not os.path.exists(path):
        return {}
    with open(path, encoding="utf-8") as handle:
        pairs = (_parse_config_line(line) for line in handle)
        return dict(pair for pair in pairs if pair)


def load_environment() -> None:
    global _CONFIG_FILE_PATH
    global _EXTERNAL_ENV_KEYS

    dotenv_path = _config_dir_file(".env")
    if not dotenv_path or not os.path.exists(dotenv_path):
        dotenv_path = find_dotenv(usecwd=True) or None
    if dotenv_path:
        load_dotenv(dotenv_path=dotenv_path, override=False)

    _EXTERNAL_ENV_KEYS = set(os.environ)
    _CONFIG_FILE_PATH = _resolve_config_path()

    for key, value in read_config_file(_CONFIG_FILE_PATH).items():
        if key in CONFIG_KEYS:
            os.environ.setdefault(key, value)


def get_config_path() -> str | None:
    return _CONFIG_FILE_PATH


def is_env_override(name: str) -> bool:
    return name in _EXTERNAL_ENV_KEYS


def get_env_int(name: str, default: int, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("[ENV] Invalid %s='%s', using default %s.", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("[ENV] %s='%s' below minimum %s, using default %s.", name, raw, min_value, default)
        return default
    return value


def get_top_category_limit() -> int:
    return get_env_int("TOP_CATEGORY_LIMIT", DEFAULT_TOP_CATEGORY_LIMIT, min_value=1)


def get_store_path() -> str:
    filename = os.getenv("STORE_FILENAME") or DEFAULT_STORE_FILENAME
    return os.path.join(DATA_DIR, filename)


def log_environment() -> None:
    logger.info("[ENV] Effective settings (config file: %s).", _CONFIG_FILE_PATH)
    for key in (*CONFIG_KEYS, "CONFIG_DIR"):
        value = os.getenv(key)
        source = "env" if is_env_override(key) else "config"
        if value is None:
            logger.info("[ENV] %s=<unset>", key)
        else:
            logger.info("[ENV] %s=%s (%s)", key, value.replace("\n", "\\n"), source)


load_environment()

DATA_DIR = os.getenv("DATA_DIR", ".")
if DATA_DIR not in {".", "./"}:
    os.makedirs(DATA_DIR, exist_ok=True)
