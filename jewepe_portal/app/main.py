from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from jewepe_portal.app.application.state.session_context import SessionContext
from jewepe_portal.app.application.use_cases.dashboard_overview_use_case import DashboardOverviewUseCase
from jewepe_portal.app.application.use_cases.login_use_case import LoginUseCase
from jewepe_portal.app.application.use_cases.lookup_order_use_case import LookupOrderUseCase
from jewepe_portal.app.config import PAGE_SIZE_OPTIONS, AppConfig
from jewepe_portal.app.export.csv_exporter import OrdersCsvExporter
from jewepe_portal.app.infrastructure.logging.logger import ROOT_LOGGER
from jewepe_portal.app.listing.mutations import Delete, MutationOutcome, SetStatus
from jewepe_portal.app.listing.screens import (
    CATALOG,
    CONTACTS,
    ORDERS,
    ScreenPreset,
    build_screen,
    mutation_bridge,
    normalize_status_filter,
)
from jewepe_portal.app.session_guard import SessionGuard
from jewepe_portal.app.ui.components.notification_center import NotificationCenter, Toast
from jewepe_portal.clients.jewepe_sdk.auth_client import AuthClient
from jewepe_portal.clients.jewepe_sdk.auth_store import AuthStore
from jewepe_portal.clients.jewepe_sdk.config import ConfigError
from jewepe_portal.clients.jewepe_sdk.contacts_client import ContactsClient
from jewepe_portal.clients.jewepe_sdk.http_client import HttpClient
from jewepe_portal.clients.jewepe_sdk.orders_client import OrdersClient
from jewepe_portal.clients.jewepe_sdk.packages_client import PackagesClient
from jewepe_portal.clients.jewepe_sdk.reports_client import ReportsClient


@dataclass
class Runtime:
    config: AppConfig
    http_client: HttpClient
    session: SessionContext
    notifications: NotificationCenter


def _print_toast(toast: Toast) -> None:
    print(f"[{toast.kind.value}] {toast.message}")


def _build_runtime(config: AppConfig) -> Runtime:
    http_client = HttpClient(config=config.sdk)
    session = SessionContext.restore(AuthStore())
    session.bind(http_client)
    notifications = NotificationCenter()
    notifications.subscribe(_print_toast)
    return Runtime(config=config, http_client=http_client, session=session, notifications=notifications)


def _rupiah(value: int | None) -> str:
    return "-" if value is None else f"Rp{value:,}"


def _format_package(item: Any) -> str:
    state = "aktif" if item.is_active else "nonaktif"
    return f"{item.id}  {item.name}  Rp{item.price:,}  {state}"


def _format_order(item: Any) -> str:
    return f"{item.id}  {item.order_code}  {item.customer_name}  {item.status.value}  Rp{item.total_price:,}"


def _format_contact(item: Any) -> str:
    return f"{item.id}  {item.name} <{item.email}>  {item.status.value}"


_LISTS: dict[str, tuple[ScreenPreset, Callable[[HttpClient], Any], Callable[[Any], str]]] = {
    "packages": (CATALOG, PackagesClient, _format_package),
    "orders": (ORDERS, OrdersClient, _format_order),
    "contacts": (CONTACTS, ContactsClient, _format_contact),
}


def _require_admin(runtime: Runtime) -> bool:
    result = SessionGuard(runtime.session).require_session()
    if result.allowed:
        return True
    print(f"Sesi tidak valid ({result.reason}). Silakan login: {result.redirect_to}")
    return False


async def _cmd_login(runtime: Runtime, args: argparse.Namespace) -> int:
    password = args.password or getpass.getpass("Password: ")
    use_case = LoginUseCase(AuthClient(runtime.http_client), runtime.session, runtime.notifications)
    result = await use_case.execute(args.email, password)
    if not result.ok and result.field_errors:
        for name, message in result.field_errors.items():
            print(f"{name}: {message}")
    return 0 if result.ok else 1


async def _cmd_logout(runtime: Runtime, args: argparse.Namespace) -> int:
    runtime.session.logout()
    print("Sesi dihapus.")
    return 0


async def _cmd_list(runtime: Runtime, args: argparse.Namespace) -> int:
    if not _require_admin(runtime):
        return 1
    preset, client_cls, formatter = _LISTS[args.entity]
    screen = build_screen(
        client_cls(runtime.http_client), preset, runtime.notifications, page_size=args.limit or runtime.config.page_size
    )
    controller = screen.controller
    query = controller.query.with_changes(search_text=args.search or "")
    if args.sort:
        query = query.with_changes(sort_key=args.sort)
    if getattr(args, "status", None):
        status = normalize_status_filter(args.status)
        if status is not None and status not in controller.preset.status_filters:
            print(f"Status tidak dikenal: {args.status}")
            return 2
        query = query.with_changes(status_filter=status)
    query = query.with_changes(page=args.page)
    controller.apply_query(query)
    await controller.settle()
    if controller.error_message:
        return 1
    for item in controller.items:
        print(formatter(item))
    print(controller.summary())
    return 0


async def _cmd_set_status(runtime: Runtime, args: argparse.Namespace) -> int:
    if not _require_admin(runtime):
        return 1
    preset, client_cls, _formatter = _LISTS[args.entity]
    bridge = mutation_bridge(client_cls(runtime.http_client), preset, runtime.notifications)
    outcome = await bridge.perform(SetStatus(args.status.upper()), args.id)
    return 0 if outcome is MutationOutcome.SUCCESS else 1


async def _cmd_delete_package(runtime: Runtime, args: argparse.Namespace) -> int:
    if not _require_admin(runtime):
        return 1
    bridge = mutation_bridge(PackagesClient(runtime.http_client), CATALOG, runtime.notifications)
    outcome = await bridge.perform(Delete(), args.id)
    return 0 if outcome is MutationOutcome.SUCCESS else 1


async def _cmd_export_orders(runtime: Runtime, args: argparse.Namespace) -> int:
    if not _require_admin(runtime):
        return 1
    exporter = OrdersCsvExporter(
        reports_client=ReportsClient(runtime.http_client),
        notifications=runtime.notifications,
        output_dir=args.output_dir or runtime.config.export_dir,
    )
    path = await exporter.export()
    if path is None:
        return 1
    print(f"Tersimpan: {path}")
    return 0


async def _cmd_overview(runtime: Runtime, args: argparse.Namespace) -> int:
    if not _require_admin(runtime):
        return 1
    overview = await DashboardOverviewUseCase(ReportsClient(runtime.http_client), runtime.notifications).execute()
    if overview is None:
        return 1
    summary = overview.summary
    print(f"Total pesanan: {summary.total} (disetujui {summary.approved}, menunggu {summary.pending}, ditolak {summary.rejected})")
    print(f"Pendapatan bulan ini: {_rupiah(overview.revenue.revenue_this_month)}")
    for rank, package in enumerate(overview.top_packages, start=1):
        print(f"{rank}. {package.name or package.package_id}  {package.count} pesanan  {_rupiah(package.revenue)}")
    return 0


async def _cmd_check_order(runtime: Runtime, args: argparse.Namespace) -> int:
    use_case = LookupOrderUseCase(OrdersClient(runtime.http_client))
    result = await (use_case.by_code(args.code) if args.code else use_case.by_email(args.email))
    if not result.found:
        print(result.error)
        return 1
    for detail in result.details:
        print(f"{detail.order_code}  {detail.package_name}  {detail.status_label}  {detail.progress}%")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jewepe-portal", description="JeWePe wedding organizer back office")
    parser.add_argument("--env-file", default=".env")
    parser.add_argument("--verbose", action="store_true")
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Login as admin")
    login.add_argument("--email", required=True)
    login.add_argument("--password")
    login.set_defaults(handler=_cmd_login)

    logout = commands.add_parser("logout", help="Forget the stored session")
    logout.set_defaults(handler=_cmd_logout)

    for entity, (preset, _client, _formatter) in _LISTS.items():
        entity_parser = commands.add_parser(entity, help=f"Manage {entity}")
        actions = entity_parser.add_subparsers(dest="action", required=True)
        listing = actions.add_parser("list")
        listing.add_argument("--search")
        listing.add_argument("--sort", choices=preset.sort_keys)
        listing.add_argument("--limit", type=int, choices=PAGE_SIZE_OPTIONS)
        listing.add_argument("--page", type=int, default=1)
        if entity != "packages":
            listing.add_argument("--status")
        listing.set_defaults(handler=_cmd_list, entity=entity)
        if entity == "packages":
            delete = actions.add_parser("delete")
            delete.add_argument("id")
            delete.set_defaults(handler=_cmd_delete_package)
        else:
            status = actions.add_parser("set-status")
            status.add_argument("id")
            status.add_argument("status")
            status.set_defaults(handler=_cmd_set_status, entity=entity)

    export = commands.add_parser("export-orders", help="Download the orders CSV")
    export.add_argument("--output-dir")
    export.set_defaults(handler=_cmd_export_orders)

    overview = commands.add_parser("overview", help="Dashboard summary")
    overview.set_defaults(handler=_cmd_overview)

    check = commands.add_parser("check-order", help="Customer order status")
    target = check.add_mutually_exclusive_group(required=True)
    target.add_argument("--code")
    target.add_argument("--email")
    check.set_defaults(handler=_cmd_check_order)
    return parser


async def _run(config: AppConfig, args: argparse.Namespace) -> int:
    runtime = _build_runtime(config)
    try:
        return await args.handler(runtime, args)
    finally:
        await runtime.http_client.aclose()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.getLogger(ROOT_LOGGER).setLevel(logging.DEBUG if args.verbose else logging.WARNING)
    try:
        config = AppConfig.from_env(args.env_file)
    except ConfigError as exc:
        print(f"Konfigurasi tidak valid: {exc}", file=sys.stderr)
        return 2
    return asyncio.run(_run(config, args))


if __name__ == "__main__":
    raise SystemExit(main())
