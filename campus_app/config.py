"""Configuration helpers for the CampusStyle app."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

from campus_app.errors import ConfigurationError

DEFAULT_GEMINI_MODEL = "gemini-3-flash-preview"


@dataclass
class AppConfig:
    """Configuration values for the CampusStyle app.

    The API key is carried here and handed explicitly to the component that
    talks to Gemini. Nothing else in the codebase reads it from the process
    environment.
    """

    api_key: Optional[str] = None
    model: str = DEFAULT_GEMINI_MODEL
    search_model: Optional[str] = None
    timeout_seconds: Optional[float] = None
    log_level: str = "INFO"
    environment: str | None = None

    @property
    def shopping_model(self) -> str:
        return self.search_model or self.model

    def require_api_key(self) -> str:
        """Return the API key or fail fast when it was never configured."""

        if not self.api_key:
            raise ConfigurationError(
                "No Gemini API key configured. Set GEMINI_API_KEY (or GOOGLE_API_KEY)."
            )
        return self.api_key

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables so that secrets can be
        injected by the runtime environment.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("APP_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        api_key = get_value("gemini_api_key") or get_value("google_api_key")
        model = get_value("model", DEFAULT_GEMINI_MODEL)
        search_model = get_value("search_model")
        raw_timeout = get_value("model_timeout_seconds")
        log_level = get_value("log_level", "INFO")

        return cls(
            api_key=api_key or None,
            model=str(model or DEFAULT_GEMINI_MODEL),
            search_model=search_model or None,
            timeout_seconds=cls._parse_timeout(raw_timeout),
            log_level=str(log_level or "INFO").upper(),
            environment=env_name,
        )

    @staticmethod
    def _parse_timeout(raw: Optional[str]) -> Optional[float]:
        if raw is None or not str(raw).strip():
            return None
        try:
            value = float(raw)
        except ValueError as exc:
            raise ConfigurationError(f"MODEL_TIMEOUT_SECONDS must be a number, got {raw!r}") from exc
        if value <= 0:
            raise ConfigurationError("MODEL_TIMEOUT_SECONDS must be positive")
        return value

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
