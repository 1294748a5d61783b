from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SubmitResult:
    ok: bool
    message: str
    data: Any = None
    field_errors: dict[str, str] = field(default_factory=dict)
