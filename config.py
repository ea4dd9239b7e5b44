"""Service settings.

Everything configurable lives in environment variables (optionally loaded
from a .env file by python-dotenv). load_settings() reads them once and
returns an immutable Settings object; main.py builds the app from it.
"""

import os
import pathlib
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_ORIGINS = (
    "https://bernalo-lab.github.io",
    "http://localhost:5500",
    "http://127.0.0.1:5500",
)
DEFAULT_LOG_FILE = pathlib.Path(__file__).parent / "explain_error.log"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the HTTP service.

    Attributes:
        host: Interface uvicorn binds to.
        port: Listening port (PORT).
        allowed_origins: Origins allowed to call the API cross-origin
            (ALLOWED_ORIGINS, comma-separated).
        max_body_bytes: Largest request body accepted (MAX_BODY_BYTES).
        log_file: Rotating log file path (LOG_FILE).
        log_level: Root logger level name (LOG_LEVEL).
    """

    host: str = "0.0.0.0"
    port: int = 3000
    allowed_origins: tuple[str, ...] = DEFAULT_ORIGINS
    max_body_bytes: int = 1_048_576
    log_file: pathlib.Path = DEFAULT_LOG_FILE
    log_level: str = "INFO"


def load_settings(environ: dict | None = None) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read instead of os.environ. When omitted, .env
            is loaded first (existing variables win).

    Raises:
        ValueError: If PORT or MAX_BODY_BYTES is not a positive integer.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    origins = tuple(
        o.strip() for o in environ.get("ALLOWED_ORIGINS", "").split(",") if o.strip()
    )

    return Settings(
        host=environ.get("HOST", Settings.host),
        port=_positive_int(environ, "PORT", Settings.port),
        allowed_origins=origins or DEFAULT_ORIGINS,
        max_body_bytes=_positive_int(environ, "MAX_BODY_BYTES", Settings.max_body_bytes),
        log_file=pathlib.Path(environ.get("LOG_FILE", DEFAULT_LOG_FILE)),
        log_level=environ.get("LOG_LEVEL", Settings.log_level).upper(),
    )


def _positive_int(environ, key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return value
