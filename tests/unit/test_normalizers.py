import pytest

from jewepe_portal.clients.jewepe_sdk.errors import ServerError
from jewepe_portal.clients.jewepe_sdk.models import Package, RevenueSummary
from jewepe_portal.clients.jewepe_sdk.normalizers import normalize_page, parse_model, unwrap_data


def _package(i: int) -> dict:
    return {"id": f"p{i}", "name": f"Paket {i}", "price": 1000 * i, "isActive": True}


def test_envelope_with_full_meta() -> None:
    payload = {
        "status": "success",
        "meta": {"page": 1, "limit": 10, "total": 23, "pageCount": 3, "hasNext": True, "hasPrev": False},
        "data": [_package(i) for i in range(10)],
    }

    page = normalize_page(payload, Package.model_validate, page=1, limit=10)

    assert len(page.items) == 10
    assert page.items[0].is_active is True
    assert (page.meta.page, page.meta.limit, page.meta.total, page.meta.page_count) == (1, 10, 23, 3)
    assert page.meta.has_next is True
    assert page.meta.has_prev is False


def test_missing_meta_fields_are_derived() -> None:
    payload = {"meta": {"page": 3, "limit": 5, "total": 11}, "data": [_package(1)]}

    page = normalize_page(payload, Package.model_validate)

    assert page.meta.page_count == 3
    assert page.meta.has_next is False
    assert page.meta.has_prev is True


def test_without_meta_uses_requested_page() -> None:
    page = normalize_page({"data": [_package(1), _package(2)]}, Package.model_validate, page=2, limit=2)

    assert page.meta.page == 2
    assert page.meta.total == 4
    assert page.meta.has_prev is True


def test_items_beyond_limit_are_truncated() -> None:
    payload = {"meta": {"page": 1, "limit": 2, "total": 5}, "data": [_package(i) for i in range(4)]}

    page = normalize_page(payload, Package.model_validate, limit=2)

    assert [item.id for item in page.items] == ["p0", "p1"]


def test_empty_total_gives_zero_pages() -> None:
    page = normalize_page({"meta": {"page": 1, "limit": 10, "total": 0}, "data": []}, Package.model_validate)

    assert page.items == ()
    assert page.meta.page_count == 0
    assert page.meta.has_next is False


def test_unwrap_data() -> None:
    assert unwrap_data({"status": "success", "data": {"id": "1"}}) == {"id": "1"}
    assert unwrap_data({"id": "1"}) == {"id": "1"}


def test_parse_model_wraps_schema_errors() -> None:
    assert parse_model(RevenueSummary, {"revenueThisMonth": None}).revenue_this_month is None

    with pytest.raises(ServerError) as exc_info:
        parse_model(RevenueSummary, {"revenueThisMonth": "banyak"})

    assert exc_info.value.code == "INVALID_RESPONSE"
    assert exc_info.value.server_message is None
