"""
Configuration management.

Settings are resolved once per invocation and handed to the client
explicitly; the client never reads files or the environment itself.

Precedence (lowest to highest):
- built-in defaults
- YAML config file (default ~/.inu/config.yaml)
- legacy single-value files ~/.inu/server and ~/.inu/key
- environment variables DOGBIN_SERVER, DOGBIN_KEY, DOGBIN_TIMEOUT
- command line flags (applied by the runner)
"""

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional

import yaml

from .dogbin_client import DOGBIN_SERVER_URL, ServerConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path("~/.inu")
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.yaml"


class ConfigValidationError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


@dataclass
class InuConfig:
    """Application configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    # Request timeout (seconds); None waits indefinitely
    timeout: Optional[float] = None

    def with_overrides(
        self,
        server: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> "InuConfig":
        """Return a copy with the given non-None values applied."""
        server_config = self.server
        if server is not None:
            server_config = replace(server_config, server=server)
        if api_key is not None:
            server_config = replace(server_config, api_key=_clean_key(api_key))
        return InuConfig(
            server=server_config,
            timeout=self.timeout if timeout is None else timeout,
        )

    def validate(self) -> list[str]:
        """Validate configuration completeness and consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if not self.server.server.strip():
            errors.append("server is required")
        if self.timeout is not None and self.timeout <= 0:
            errors.append("timeout must be positive")

        return errors


def _clean_key(value: Optional[str]) -> Optional[str]:
    """Strip whitespace from an API key; blank means no key."""
    if value is None:
        return None
    return value.strip() or None


def _read_value_file(path: Path) -> Optional[str]:
    """Read a single-value settings file, None when absent or blank."""
    if not path.is_file():
        return None
    value = path.read_text(encoding="utf-8").strip()
    return value or None


def _parse_timeout(value: object, source: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigValidationError(f"{source}: invalid timeout {value!r}") from e


def load_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    config_dir: Optional[Path] = None,
) -> InuConfig:
    """
    Load configuration from YAML file, legacy files and environment.

    Environment variables override file values:
    - DOGBIN_SERVER
    - DOGBIN_KEY
    - DOGBIN_TIMEOUT (seconds)

    Args:
        config_path: YAML file (default ~/.inu/config.yaml); missing is fine
        environ: Environment mapping (default os.environ)
        config_dir: Directory holding the legacy "server" and "key" files

    Raises:
        ConfigValidationError: the YAML file is malformed
    """
    environ = os.environ if environ is None else environ
    config_dir = (config_dir or DEFAULT_CONFIG_DIR).expanduser()
    config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()

    data: dict = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"{config_path}: invalid YAML: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError(f"{config_path}: expected a mapping at top level")
        logger.debug(f"Loaded config from {config_path}")

    server = str(data.get("server") or DOGBIN_SERVER_URL)
    api_key = _clean_key(data.get("api_key"))
    timeout = _parse_timeout(data.get("timeout"), str(config_path))

    # Legacy files written for earlier inu versions
    server = _read_value_file(config_dir / "server") or server
    api_key = _clean_key(_read_value_file(config_dir / "key")) or api_key

    server = environ.get("DOGBIN_SERVER") or server
    if environ.get("DOGBIN_KEY"):
        api_key = _clean_key(environ["DOGBIN_KEY"])
    if environ.get("DOGBIN_TIMEOUT"):
        timeout = _parse_timeout(environ["DOGBIN_TIMEOUT"], "DOGBIN_TIMEOUT")

    return InuConfig(
        server=ServerConfig(server=server, api_key=api_key),
        timeout=timeout,
    )


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    default_config = f"""# inu configuration
#
# Environment variables DOGBIN_SERVER, DOGBIN_KEY and DOGBIN_TIMEOUT
# override these values; command line flags override both.

server: "{DOGBIN_SERVER_URL}"   # dogbin or hastebin server, https is assumed without a scheme
api_key: null          # dogbin API key (optional)
timeout: null          # request timeout in seconds (null = wait indefinitely)
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        f.write(default_config)
