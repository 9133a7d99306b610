import json
import logging
import os
import threading

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .privileges import NAMESPACE_SEPARATOR, RESERVED_PREFIX


load_dotenv()


class Settings(BaseModel):
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    # extra prefix -> namespace URI bindings for the in-memory session
    namespaces: dict[str, str] = Field(default_factory=dict)
    # custom privilege name -> constituent privilege names
    custom_privileges: dict[str, list[str]] = Field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "Settings":
        raw_debug = os.getenv("DEBUG", "false").strip().lower()
        if raw_debug in {"1", "true", "yes", "on"}:
            debug = True
        elif raw_debug in {"0", "false", "no", "off", ""}:
            debug = False
        else:
            raise ValueError("DEBUG must be a boolean value")

        log_level = os.getenv("LOG_LEVEL", cls.model_fields["log_level"].default).strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"LOG_LEVEL '{log_level}' is not a logging level")

        return cls(
            debug=debug,
            log_level=log_level,
            namespaces=_parse_namespaces(os.getenv("PRIVILEGE_NAMESPACES", "").strip()),
            custom_privileges=_parse_custom_privileges(os.getenv("CUSTOM_PRIVILEGES", "").strip()),
        )


def _parse_namespaces(raw: str) -> dict[str, str]:
    if not raw:
        return {}

    # Support both CSV format and JSON object format
    namespaces: dict[str, str] = {}
    if raw.startswith("{"):
        # JSON object format: {"pho": "http://www.pentaho.org/jcr/2.0"}
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"PRIVILEGE_NAMESPACES JSON is malformed: {exc}") from exc
        if not isinstance(parsed, dict):
            raise ValueError("PRIVILEGE_NAMESPACES JSON must be an object")
        for prefix, uri in parsed.items():
            if not isinstance(uri, str):
                raise ValueError(f"PRIVILEGE_NAMESPACES URI for '{prefix}' must be a string")
            namespaces[prefix.strip()] = uri.strip()
    else:
        # CSV format: pho=http://www.pentaho.org/jcr/2.0,ex=urn:example
        for item in raw.split(","):
            if not item.strip():
                continue
            prefix, separator, uri = item.partition("=")
            if not separator:
                raise ValueError(f"PRIVILEGE_NAMESPACES entry '{item.strip()}' must be prefix=uri")
            namespaces[prefix.strip()] = uri.strip()

    for prefix, uri in namespaces.items():
        if not prefix or not uri:
            raise ValueError("PRIVILEGE_NAMESPACES entries must have a prefix and a URI")
        if NAMESPACE_SEPARATOR in prefix:
            raise ValueError(f"PRIVILEGE_NAMESPACES prefix '{prefix}' must not contain ':'")
        if prefix == RESERVED_PREFIX:
            raise ValueError(f"PRIVILEGE_NAMESPACES cannot rebind the reserved prefix '{RESERVED_PREFIX}'")
    return namespaces


def _parse_custom_privileges(raw: str) -> dict[str, list[str]]:
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"CUSTOM_PRIVILEGES JSON is malformed: {exc}") from exc
    if not isinstance(parsed, dict):
        raise ValueError("CUSTOM_PRIVILEGES JSON must be an object")

    custom_privileges: dict[str, list[str]] = {}
    for name, constituents in parsed.items():
        if not name.strip():
            raise ValueError("CUSTOM_PRIVILEGES names must not be empty")
        if not isinstance(constituents, list) or not all(
            isinstance(constituent, str) for constituent in constituents
        ):
            raise ValueError(f"CUSTOM_PRIVILEGES entry '{name}' must be a list of privilege names")
        custom_privileges[name.strip()] = constituents
    return custom_privileges


_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """Get settings instance, creating it on first access.

    Raises:
        ValueError: If environment variables are invalid
    """
    global _settings_instance

    if _settings_instance is not None:
        return _settings_instance

    with _settings_lock:
        # another thread may have initialized while we waited for the lock
        if _settings_instance is None:
            _settings_instance = Settings.from_env()

    return _settings_instance


def reset_settings() -> None:
    global _settings_instance
    with _settings_lock:
        _settings_instance = None


class _SettingsProxy:
    """Proxy to defer settings creation until first attribute access."""

    def __getattr__(self, name: str):
        return getattr(get_settings(), name)


settings = _SettingsProxy()  # type: ignore[assignment]
