from __future__ import annotations

from jewepe_portal.clients.jewepe_sdk.models import PageMeta


def summary_text(item_count: int, meta: PageMeta | None) -> str:
    if meta is None:
        return "Menampilkan 0 dari 0 data"
    page_count = max(1, meta.page_count)
    return f"Menampilkan {item_count} dari {meta.total} data • Halaman {meta.page}/{page_count}"
