from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

from jewepe_portal.app.listing.controller import ListController
from jewepe_portal.app.listing.mutations import MutationBridge, MutationMessages
from jewepe_portal.app.listing.query import ListQuery
from jewepe_portal.app.ui.components.notification_center import NotificationCenter
from jewepe_portal.app.ui.filters import filter_by_price_band
from jewepe_portal.clients.jewepe_sdk.models import Contact, Order, Package
from jewepe_portal.clients.jewepe_sdk.resource_client import ResourceClient

ALL_STATUS = "ALL"

PACKAGE_SORTS = ("az", "za", "cheap", "expensive")
ORDER_SORTS = ("newest", "oldest", "event_asc", "event_desc", "price_asc", "price_desc", "name_asc", "name_desc")
CONTACT_SORTS = ("newest", "oldest", "name_asc", "name_desc", "email_asc", "email_desc")

ORDER_STATUS_FILTERS = (ALL_STATUS, "PENDING", "APPROVED", "REJECTED")
CONTACT_STATUS_FILTERS = (ALL_STATUS, "NEW", "READ")


@dataclass(frozen=True)
class ScreenPreset:
    name: str
    sort_keys: tuple[str, ...]
    default_sort: str
    load_error: str
    mutations: MutationMessages
    status_filters: tuple[str, ...] = ()
    page_size: int = 10

    def default_query(self, page_size: int | None = None) -> ListQuery:
        return ListQuery(page=1, limit=page_size or self.page_size, sort_key=self.default_sort)


CATALOG = ScreenPreset(
    name="catalog",
    sort_keys=PACKAGE_SORTS,
    default_sort="az",
    load_error="Gagal memuat katalog paket.",
    mutations=MutationMessages(
        create_success="Paket berhasil ditambahkan.",
        create_error="Gagal menambah paket.",
        update_success="Paket berhasil diperbarui.",
        update_error="Gagal memperbarui paket.",
        delete_success="Paket berhasil dihapus.",
        delete_error="Gagal menghapus paket.",
    ),
)

ORDERS = ScreenPreset(
    name="orders",
    sort_keys=ORDER_SORTS,
    default_sort="newest",
    load_error="Gagal memuat pesanan.",
    mutations=MutationMessages(
        status_success="Status pesanan diperbarui.",
        status_error="Gagal memperbarui status.",
    ),
    status_filters=ORDER_STATUS_FILTERS,
)

CONTACTS = ScreenPreset(
    name="contacts",
    sort_keys=CONTACT_SORTS,
    default_sort="newest",
    load_error="Gagal memuat kontak.",
    mutations=MutationMessages(
        status_success="Status kontak diperbarui.",
        status_error="Gagal memperbarui status kontak.",
    ),
    status_filters=CONTACT_STATUS_FILTERS,
)

PUBLIC_CATALOG = ScreenPreset(
    name="public_catalog",
    sort_keys=PACKAGE_SORTS,
    default_sort="az",
    load_error="Terjadi kesalahan",
    mutations=MutationMessages(),
    page_size=4,
)


def normalize_status_filter(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = str(getattr(value, "value", value)).strip().upper()
    if not normalized or normalized == ALL_STATUS:
        return None
    return normalized


class ManagedList(ListController[Any]):
    """List controller bound to a screen preset.

    Sort keys and status filters outside the preset are rejected before any
    request is made.
    """

    def __init__(self, client: ResourceClient[Any], preset: ScreenPreset, **kwargs: Any) -> None:
        page_size = kwargs.pop("page_size", None)
        kwargs.setdefault("module", preset.name)
        super().__init__(
            client,
            query=preset.default_query(page_size),
            load_error_message=preset.load_error,
            **kwargs,
        )
        self.preset = preset

    def set_sort(self, sort_key: str) -> asyncio.Task[None] | None:
        if sort_key not in self.preset.sort_keys:
            raise ValueError(f"Unknown sort for {self.preset.name}: {sort_key}")
        return super().set_sort(sort_key)

    def set_status_filter(self, status_filter: str | None) -> asyncio.Task[None] | None:
        normalized = normalize_status_filter(status_filter)
        if normalized is not None and normalized not in self.preset.status_filters:
            raise ValueError(f"Unknown status for {self.preset.name}: {status_filter}")
        return super().set_status_filter(normalized)


class PublicCatalog(ManagedList):
    """Public package catalog with a client-side price band on top."""

    def __init__(self, client: ResourceClient[Package], **kwargs: Any) -> None:
        super().__init__(client, PUBLIC_CATALOG, **kwargs)
        self.price_band = "all"

    def set_price_band(self, band: str) -> asyncio.Task[None] | None:
        self.price_band = band
        if self.query.page != 1:
            return self._apply(page=1)
        return None

    def visible_items(self) -> list[Package]:
        return filter_by_price_band(self.items, self.price_band)


@dataclass
class Screen:
    controller: ManagedList
    bridge: MutationBridge


def mutation_bridge(
    client: ResourceClient[Any],
    preset: ScreenPreset,
    notifications: NotificationCenter,
    controller: ListController[Any] | None = None,
) -> MutationBridge:
    """Bridge for ``preset``; without a controller nothing is reloaded after a write."""
    return MutationBridge(
        client=client,
        controller=controller,
        notifications=notifications,
        messages=preset.mutations,
        module=f"{preset.name}.mutation",
    )


def build_screen(client: ResourceClient[Any], preset: ScreenPreset, notifications: NotificationCenter, **kwargs: Any) -> Screen:
    controller = ManagedList(client, preset, notifications=notifications, **kwargs)
    return Screen(controller=controller, bridge=mutation_bridge(client, preset, notifications, controller))


def catalog_screen(client: ResourceClient[Package], notifications: NotificationCenter, **kwargs: Any) -> Screen:
    return build_screen(client, CATALOG, notifications, **kwargs)


def orders_screen(client: ResourceClient[Order], notifications: NotificationCenter, **kwargs: Any) -> Screen:
    return build_screen(client, ORDERS, notifications, **kwargs)


def contacts_screen(client: ResourceClient[Contact], notifications: NotificationCenter, **kwargs: Any) -> Screen:
    return build_screen(client, CONTACTS, notifications, **kwargs)
