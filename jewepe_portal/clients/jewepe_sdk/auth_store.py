from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir
from pydantic import ValidationError as SchemaError

from jewepe_portal.clients.jewepe_sdk.models import SessionData


@dataclass
class AuthStore:
    """Persists the admin session between CLI runs."""

    app_name: str = "jewepe"
    filename: str = "session.json"
    base_dir: Path | None = None

    def _path(self) -> Path:
        base = self.base_dir or Path(user_data_dir(self.app_name, "JeWePe"))
        base.mkdir(parents=True, exist_ok=True)
        return base / self.filename

    def load(self) -> SessionData | None:
        path = self._path()
        if not path.exists():
            return None
        try:
            return SessionData.model_validate(json.loads(path.read_text(encoding="utf-8")))
        except (ValueError, SchemaError):
            path.unlink(missing_ok=True)
            return None

    def save(self, data: SessionData) -> None:
        self._path().write_text(data.model_dump_json(), encoding="utf-8")

    def clear(self) -> None:
        self._path().unlink(missing_ok=True)
