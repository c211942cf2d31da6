"""Configuration loader for the minireq client."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

DEFAULT_USER_AGENT = "minireq/0.1"


@dataclass
class ClientConfig:
    """Settings applied to every transfer.

    Redirects stay off by default; the engine's own timeout defaults apply.
    """

    user_agent: str = DEFAULT_USER_AGENT
    default_headers: Dict[str, str] = field(default_factory=dict)
    max_body_bytes: Optional[int] = None
    follow_redirects: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.max_body_bytes is not None and self.max_body_bytes < 0:
            raise ValueError("max_body_bytes must be non-negative")
        self.default_headers = {str(k): str(v) for k, v in (self.default_headers or {}).items()}
        self.log_level = str(self.log_level).upper()

    @property
    def headers(self) -> Dict[str, str]:
        """Default headers with the User-Agent applied."""
        headers = {"User-Agent": self.user_agent} if self.user_agent else {}
        headers.update(self.default_headers)
        return headers

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientConfig":
        return cls(
            user_agent=data.get("user_agent", DEFAULT_USER_AGENT),
            default_headers=data.get("default_headers") or {},
            max_body_bytes=data.get("max_body_bytes"),
            follow_redirects=bool(data.get("follow_redirects", False)),
            log_level=data.get("log_level", "WARNING"),
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ClientConfig":
        """Load configuration from a YAML file; a missing file yields defaults."""
        config_path = Path(path)
        if not config_path.exists():
            return cls()
        with open(config_path, "r", encoding="utf-8") as handle:
            try:
                data = yaml.safe_load(handle) or {}
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Invalid configuration in {config_path}: expected a mapping")
        return cls.from_dict(data.get("client", data))

    @classmethod
    def from_env(cls, base: Optional["ClientConfig"] = None) -> "ClientConfig":
        """Overlay environment variables on ``base`` (or the defaults)."""
        base = base or cls()
        max_body_raw = os.environ.get("MINIREQ_MAX_BODY_BYTES")
        max_body_bytes = base.max_body_bytes
        if max_body_raw:
            try:
                max_body_bytes = int(max_body_raw)
            except ValueError as exc:
                raise ValueError(f"MINIREQ_MAX_BODY_BYTES must be an integer, got {max_body_raw!r}") from exc

        return cls(
            user_agent=os.environ.get("MINIREQ_USER_AGENT", base.user_agent),
            default_headers=dict(base.default_headers),
            max_body_bytes=max_body_bytes,
            follow_redirects=base.follow_redirects,
            log_level=os.environ.get("MINIREQ_LOG_LEVEL", base.log_level),
        )
