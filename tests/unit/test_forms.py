from datetime import date

import pytest

from jewepe_portal.app.ui.forms import (
    ContactForm,
    LoginForm,
    OrderCodeLookup,
    OrderForm,
    PackageForm,
    parse_form,
    validate_form,
)
from jewepe_portal.clients.jewepe_sdk.errors import ValidationError


def _order_values(**overrides):
    values = {
        "name": "Zidan Indratama",
        "email": "zidan@example.com",
        "phone": "081234567890",
        "event_date": "2026-12-12",
        "package_id": "pkg-1",
        "venue": "Bekasi Convention Hall",
        "notes": "",
        "consent": True,
    }
    values.update(overrides)
    return values


def test_order_form_builds_booking_payload() -> None:
    result = validate_form(OrderForm, _order_values(notes="  Tema rustic  "))

    assert result.is_valid
    assert result.values == {
        "packageId": "pkg-1",
        "customerName": "Zidan Indratama",
        "customerEmail": "zidan@example.com",
        "customerPhone": "081234567890",
        "eventDate": "2026-12-12T00:00:00.000Z",
        "venue": "Bekasi Convention Hall",
        "notes": "Tema rustic",
    }


def test_order_form_omits_empty_notes() -> None:
    result = validate_form(OrderForm, _order_values(event_date=date(2027, 1, 5)))

    assert "notes" not in result.values
    assert result.values["eventDate"] == "2027-01-05T00:00:00.000Z"


@pytest.mark.parametrize(
    ("field", "value", "message"),
    [
        ("name", "Z", "Nama minimal 2 karakter"),
        ("email", "bukan-email", "Email tidak valid"),
        ("phone", "12345", "Nomor HP Indonesia tidak valid"),
        ("phone", "+6281234", "Nomor HP Indonesia tidak valid"),
        ("package_id", "", "Pilih paket"),
        ("venue", "A", "Venue wajib diisi"),
        ("notes", "x" * 1001, "Maksimal 1000 karakter"),
        ("consent", False, "Anda harus menyetujui kebijakan privasi"),
        ("event_date", "", "Tanggal acara wajib diisi"),
    ],
)
def test_order_form_messages(field, value, message) -> None:
    result = validate_form(OrderForm, _order_values(**{field: value}))

    assert result.field_errors[field] == message


@pytest.mark.parametrize("phone", ["081234567890", "6281234567", "+628123456789"])
def test_indonesian_phone_numbers_accepted(phone) -> None:
    assert validate_form(OrderForm, _order_values(phone=phone)).is_valid


def test_contact_form_limits() -> None:
    result = validate_form(ContactForm, {"name": "A", "email": "x@y.co", "message": "pendek"})

    assert result.field_errors == {"name": "Nama minimal 2 karakter", "message": "Pesan minimal 10 karakter"}
    assert validate_form(ContactForm, {"name": "A" * 101, "email": "x@y.co", "message": "m" * 10}).field_errors == {
        "name": "Terlalu panjang"
    }


def test_contact_form_trims_values() -> None:
    result = validate_form(ContactForm, {"name": "  Rani ", "email": " rani@mail.id ", "message": " Halo, mau tanya paket. "})

    assert result.values == {"name": "Rani", "email": "rani@mail.id", "message": "Halo, mau tanya paket."}


def test_package_form_price_and_url() -> None:
    assert validate_form(PackageForm, {"name": "Gold", "price": 0}).field_errors["price"] == "Harga harus > 0"
    assert validate_form(PackageForm, {"name": "Gold", "price": "12.5"}).field_errors["price"] == "Harga harus > 0"
    assert validate_form(PackageForm, {"name": "Gold", "price": 1, "image_url": "not a url"}).field_errors == {
        "image_url": "URL gambar tidak valid"
    }

    result = validate_form(PackageForm, {"name": "Gold", "price": "75000000", "description": "", "image_url": ""})
    assert result.values == {"name": "Gold", "price": 75000000, "isActive": True}


def test_login_form_password_length() -> None:
    assert validate_form(LoginForm, {"email": "admin@jewepe.id", "password": "123"}).field_errors == {
        "password": "Password minimal 6 karakter"
    }


def test_order_code_lookup_bounds() -> None:
    assert validate_form(OrderCodeLookup, {"order_code": "AB12"}).field_errors["order_code"] == "Minimal 6 karakter"
    assert validate_form(OrderCodeLookup, {"order_code": "A" * 33}).field_errors["order_code"] == "Maksimal 32 karakter"
    assert validate_form(OrderCodeLookup, {"order_code": "  WO-2026-0001 "}).values == {"order_code": "WO-2026-0001"}


def test_parse_form_raises_validation_error() -> None:
    with pytest.raises(ValidationError) as captured:
        parse_form(LoginForm, {"email": "salah", "password": "rahasia"})

    assert captured.value.code == "VALIDATION_ERROR"
    assert captured.value.field_errors == {"email": "Email tidak valid"}
    assert captured.value.human_message == "Email tidak valid"
