import logging
import os
from dataclasses import dataclass
from typing import Mapping


class MissingCredential(RuntimeError):
    pass


class ListenFailure(RuntimeError):
    pass


@dataclass(frozen=True, slots=True)
class Settings:
    """Process configuration, read once from the environment at startup."""

    upload_path: str
    public_url: str
    api_key: str
    port: str
    log_level: str = "INFO"

    def listen_port(self) -> int:
        raw = self.port.strip()
        try:
            port = int(raw)
        except ValueError as e:
            raise ListenFailure(f"invalid PORT {self.port!r}") from e
        if not 0 <= port <= 65535:
            raise ListenFailure(f"PORT out of range: {port}")
        return port


def _log_level(raw: str | None) -> str:
    level = (raw or "").strip().upper()
    # getLevelName maps known names to their int, unknown ones to "Level %s"
    if not isinstance(logging.getLevelName(level), int):
        return "INFO"
    return level


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    settings = Settings(
        upload_path=env.get("UPLOAD_PATH", ""),
        public_url=env.get("PUBLIC_URL", ""),
        api_key=env.get("API_KEY", ""),
        port=env.get("PORT", ""),
        log_level=_log_level(env.get("LOG_LEVEL")),
    )
    if not settings.api_key:
        raise MissingCredential("API_KEY environment variable is required")
    return settings
