from __future__ import annotations

from collections.abc import Iterable

from jewepe_portal.clients.jewepe_sdk.models import Package

LOW_PRICE_CEILING = 50_000_000
HIGH_PRICE_FLOOR = 100_000_000

PRICE_BANDS = ("all", "low", "mid", "high")


def in_price_band(price: int, band: str | None) -> bool:
    if band == "low":
        return price < LOW_PRICE_CEILING
    if band == "mid":
        return LOW_PRICE_CEILING <= price <= HIGH_PRICE_FLOOR
    if band == "high":
        return price > HIGH_PRICE_FLOOR
    return True


def filter_by_price_band(packages: Iterable[Package], band: str | None) -> list[Package]:
    """Client-side band filter applied to the page the catalog already loaded."""
    return [package for package in packages if in_price_band(package.price, band)]
