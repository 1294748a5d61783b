import asyncio

from jewepe_portal.app.listing.typeahead import TypeaheadController
from jewepe_portal.clients.jewepe_sdk.errors import ServerError
from tests.helpers import FakeScheduler, InstantSource, Row


def _rows(count: int) -> list[Row]:
    return [Row(id=f"p{i}", name=f"Paket {i}") for i in range(count)]


def test_load_more_appends_next_page() -> None:
    async def scenario() -> None:
        source = InstantSource(_rows(25))
        picker = TypeaheadController(source, scheduler=FakeScheduler())

        picker.open()
        await picker.settle()
        assert len(picker.items) == 10
        assert source.queries[0].sort_key == "az"
        assert source.queries[0].limit == 10

        assert picker.load_more() is True
        await picker.settle()
        assert [row.id for row in picker.items] == [f"p{i}" for i in range(20)]

        picker.load_more()
        await picker.settle()
        assert len(picker.items) == 25
        assert picker.load_more() is False
        assert picker.find("p24").name == "Paket 24"

    asyncio.run(scenario())


def test_new_search_replaces_options() -> None:
    async def scenario() -> None:
        scheduler = FakeScheduler()
        source = InstantSource(_rows(25))
        picker = TypeaheadController(source, scheduler=scheduler)
        picker.open()
        await picker.settle()
        picker.load_more()
        await picker.settle()

        picker.set_search("gold")
        scheduler.advance_to(299)
        assert len(source.queries) == 2
        scheduler.advance_to(300)
        await picker.settle()

        assert source.queries[-1].search_text == "gold"
        assert source.queries[-1].page == 1
        assert len(picker.items) == 10

    asyncio.run(scenario())


def test_failed_load_more_keeps_options_and_records_message() -> None:
    async def scenario() -> None:
        source = InstantSource(_rows(25))
        picker = TypeaheadController(source, scheduler=FakeScheduler())
        picker.open()
        await picker.settle()

        source.error = ServerError(code="HTTP_ERROR", human_message="Paket tidak tersedia.", status_code=500, server_message="Paket tidak tersedia.")
        assert picker.load_more() is True
        await picker.settle()

        assert picker.error_message == "Paket tidak tersedia."
        assert [row.id for row in picker.items] == [f"p{i}" for i in range(10)]
        assert picker.fetching_more is False

        source.error = None
        assert picker.load_more() is True
        await picker.settle()

        assert source.queries[-1].page == 2
        assert len(picker.items) == 20
        assert picker.error_message is None

    asyncio.run(scenario())
