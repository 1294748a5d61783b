from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from jewepe_portal.clients.jewepe_sdk.config import ConfigError, SDKConfig, read_int

PAGE_SIZE_OPTIONS = (5, 10, 20, 50)


@dataclass(frozen=True)
class AppConfig:
    sdk: SDKConfig = field(default_factory=SDKConfig)
    debounce_ms: int = 350
    page_size: int = 10
    export_dir: Path = Path("out/exports")

    @classmethod
    def from_env(cls, env_file: str | None = ".env") -> "AppConfig":
        sdk = SDKConfig.from_env(env_file)
        config = cls(
            sdk=sdk,
            debounce_ms=read_int("JEWEPE_DEBOUNCE_MS", "350"),
            page_size=read_int("JEWEPE_PAGE_SIZE", "10"),
            export_dir=Path(os.getenv("JEWEPE_EXPORT_DIR", "out/exports").strip() or "out/exports"),
        )
        config.validate()
        return config

    def validate(self) -> None:
        self.sdk.validate()
        if self.debounce_ms < 0:
            raise ConfigError(f"Invalid JEWEPE_DEBOUNCE_MS: expected >= 0, got {self.debounce_ms}")
        if self.page_size not in PAGE_SIZE_OPTIONS:
            raise ConfigError(f"Invalid JEWEPE_PAGE_SIZE: expected one of {PAGE_SIZE_OPTIONS}, got {self.page_size}")
