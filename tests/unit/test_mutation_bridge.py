import asyncio

from jewepe_portal.app.listing.controller import ListController
from jewepe_portal.app.listing.mutations import Create, Delete, MutationBridge, MutationOutcome, SetStatus, Update
from jewepe_portal.app.listing.query import ListQuery
from jewepe_portal.app.listing.screens import CATALOG, ORDERS
from jewepe_portal.app.ui.components.notification_center import NotificationCenter, ToastKind
from jewepe_portal.clients.jewepe_sdk.errors import NetworkError, ServerError
from tests.helpers import Row, StubResource


def _setup(rows: list[Row], messages=CATALOG.mutations):
    resource = StubResource(rows={row.id: row for row in rows})
    notifications = NotificationCenter()
    controller = ListController(resource, query=ListQuery(limit=10), notifications=notifications)
    bridge = MutationBridge(client=resource, controller=controller, notifications=notifications, messages=messages)
    return resource, notifications, controller, bridge


def test_failed_delete_shows_server_message_and_keeps_item() -> None:
    async def scenario() -> None:
        resource, notifications, controller, bridge = _setup([Row(id="x", name="Silver"), Row(id="y", name="Gold")])
        controller.mount()
        await controller.settle()
        resource.fail_with = ServerError(
            code="CONFLICT",
            human_message="Paket ini masih digunakan.",
            server_message="Paket ini masih digunakan.",
            status_code=409,
        )

        outcome = await bridge.perform(Delete(), controller.items[0])
        await controller.settle()

        assert outcome is MutationOutcome.FAILED
        assert notifications.last().kind is ToastKind.ERROR
        assert notifications.last().message == "Paket ini masih digunakan."
        assert [row.id for row in controller.items] == ["x", "y"]
        assert controller.items[0] == Row(id="x", name="Silver")
        assert [call for call in resource.calls if call[0] == "list"] == [("list", 1)]
        assert not bridge.is_busy("x")

    asyncio.run(scenario())


def test_failure_without_server_message_uses_screen_message() -> None:
    async def scenario() -> None:
        resource, notifications, controller, bridge = _setup([Row(id="x")])
        resource.fail_with = ServerError(code="HTTP_ERROR", human_message="generic", status_code=500)

        outcome = await bridge.perform(Delete(), "x")

        assert outcome is MutationOutcome.FAILED
        assert notifications.last().message == "Gagal menghapus paket."

    asyncio.run(scenario())


def test_network_failure_reports_network_message() -> None:
    async def scenario() -> None:
        resource, notifications, controller, bridge = _setup([Row(id="x")])
        resource.fail_with = NetworkError(code="NETWORK_ERROR", human_message="offline")

        outcome = await bridge.perform(Update({"name": "Baru"}), "x")

        assert outcome is MutationOutcome.FAILED
        assert notifications.last().message == "offline"

    asyncio.run(scenario())


def test_status_update_reloads_list_with_new_status() -> None:
    async def scenario() -> None:
        resource, notifications, controller, bridge = _setup(
            [Row(id="y", status="PENDING"), Row(id="z", status="PENDING")],
            messages=ORDERS.mutations,
        )
        controller.mount()
        await controller.settle()
        target = controller.items[0]

        outcome = await bridge.perform(SetStatus("APPROVED"), target)
        await controller.settle()

        assert outcome is MutationOutcome.SUCCESS
        assert resource.calls[1] == ("set_status", ("y", "APPROVED"))
        assert {row.id: row.status for row in controller.items} == {"y": "APPROVED", "z": "PENDING"}
        assert notifications.last().kind is ToastKind.SUCCESS
        assert notifications.last().message == "Status pesanan diperbarui."

    asyncio.run(scenario())


def test_repeating_current_status_sends_nothing() -> None:
    async def scenario() -> None:
        resource, notifications, controller, bridge = _setup([Row(id="y", status="APPROVED")], messages=ORDERS.mutations)
        controller.mount()
        await controller.settle()
        target = controller.items[0]

        assert bridge.can_set_status(target, "APPROVED") is False
        assert bridge.can_set_status(target, "REJECTED") is True

        outcome = await bridge.perform(SetStatus("APPROVED"), target)

        assert outcome is MutationOutcome.NOOP
        assert [call[0] for call in resource.calls] == ["list"]
        assert notifications.history == []
        assert controller.items[0] is target

    asyncio.run(scenario())


def test_second_mutation_on_busy_target_is_rejected() -> None:
    async def scenario() -> None:
        resource, notifications, controller, bridge = _setup([Row(id="x"), Row(id="y")])
        resource.gate = asyncio.Event()

        first = asyncio.create_task(bridge.perform(Delete(), "x"))
        await asyncio.sleep(0)
        assert bridge.is_busy("x")
        assert not bridge.is_busy("y")
        assert bridge.can_set_status(Row(id="x", status="PENDING"), "APPROVED") is False

        second = await bridge.perform(Delete(), "x")
        assert second is MutationOutcome.REJECTED
        assert notifications.last().kind is ToastKind.WARNING

        resource.gate.set()
        assert await first is MutationOutcome.SUCCESS
        await controller.settle()
        assert not bridge.is_busy("x")
        assert [call for call in resource.calls if call[0] == "delete"] == [("delete", "x")]

    asyncio.run(scenario())


def test_create_uses_new_item_slot_and_refreshes() -> None:
    async def scenario() -> None:
        resource, notifications, controller, bridge = _setup([])
        controller.mount()
        await controller.settle()

        outcome = await bridge.perform(Create({"name": "Platinum"}))
        await controller.settle()

        assert outcome is MutationOutcome.SUCCESS
        assert notifications.last().message == "Paket berhasil ditambahkan."
        assert [row.name for row in controller.items] == ["Platinum"]

    asyncio.run(scenario())
