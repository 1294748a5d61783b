from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, HttpUrl, TypeAdapter, field_validator
from pydantic import ValidationError as SchemaError
from pydantic_core import PydanticCustomError

from jewepe_portal.clients.jewepe_sdk.errors import ValidationError

EMAIL_REGEX = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_REGEX = re.compile(r"^(\+62|62|0)8[1-9][0-9]{6,11}$")

_URL_ADAPTER = TypeAdapter(HttpUrl)

FormT = TypeVar("FormT", bound="FormSchema")


@dataclass
class FormResult:
    values: dict[str, Any]
    field_errors: dict[str, str] = field(default_factory=dict)

    @property
    def first_invalid_field(self) -> str | None:
        return next(iter(self.field_errors), None)

    @property
    def is_valid(self) -> bool:
        return len(self.field_errors) == 0


def _fail(message: str) -> PydanticCustomError:
    return PydanticCustomError("form_field", message)


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _email(value: Any, max_length: int | None = None) -> str:
    normalized = _text(value)
    if not EMAIL_REGEX.match(normalized):
        raise _fail("Email tidak valid")
    if max_length is not None and len(normalized) > max_length:
        raise _fail("Terlalu panjang")
    return normalized


class FormSchema(BaseModel):
    model_config = ConfigDict(validate_default=True, extra="ignore")

    def payload(self) -> dict[str, Any]:
        return self.model_dump()


class LoginForm(FormSchema):
    email: str = ""
    password: str = ""

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, value: Any) -> str:
        return _email(value)

    @field_validator("password", mode="before")
    @classmethod
    def _check_password(cls, value: Any) -> str:
        raw = "" if value is None else str(value)
        if len(raw) < 6:
            raise _fail("Password minimal 6 karakter")
        return raw


class ContactForm(FormSchema):
    name: str = ""
    email: str = ""
    message: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, value: Any) -> str:
        normalized = _text(value)
        if len(normalized) < 2:
            raise _fail("Nama minimal 2 karakter")
        if len(normalized) > 100:
            raise _fail("Terlalu panjang")
        return normalized

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, value: Any) -> str:
        return _email(value, max_length=160)

    @field_validator("message", mode="before")
    @classmethod
    def _check_message(cls, value: Any) -> str:
        normalized = _text(value)
        if len(normalized) < 10:
            raise _fail("Pesan minimal 10 karakter")
        if len(normalized) > 1000:
            raise _fail("Maksimal 1000 karakter")
        return normalized


class OrderForm(FormSchema):
    """Public booking form."""

    name: str = ""
    email: str = ""
    phone: str = ""
    event_date: Optional[date] = None
    package_id: str = ""
    venue: str = ""
    notes: str = ""
    consent: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, value: Any) -> str:
        normalized = _text(value)
        if len(normalized) < 2:
            raise _fail("Nama minimal 2 karakter")
        return normalized

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, value: Any) -> str:
        return _email(value)

    @field_validator("phone", mode="before")
    @classmethod
    def _check_phone(cls, value: Any) -> str:
        normalized = _text(value)
        if not PHONE_REGEX.match(normalized):
            raise _fail("Nomor HP Indonesia tidak valid")
        return normalized

    @field_validator("event_date", mode="before")
    @classmethod
    def _check_event_date(cls, value: Any) -> date:
        if isinstance(value, date):
            return value
        raw = _text(value)
        if not raw:
            raise _fail("Tanggal acara wajib diisi")
        try:
            return date.fromisoformat(raw[:10])
        except ValueError:
            raise _fail("Tanggal acara tidak valid") from None

    @field_validator("package_id", mode="before")
    @classmethod
    def _check_package(cls, value: Any) -> str:
        normalized = _text(value)
        if not normalized:
            raise _fail("Pilih paket")
        return normalized

    @field_validator("venue", mode="before")
    @classmethod
    def _check_venue(cls, value: Any) -> str:
        normalized = _text(value)
        if len(normalized) < 2:
            raise _fail("Venue wajib diisi")
        return normalized

    @field_validator("notes", mode="before")
    @classmethod
    def _check_notes(cls, value: Any) -> str:
        normalized = _text(value)
        if len(normalized) > 1000:
            raise _fail("Maksimal 1000 karakter")
        return normalized

    @field_validator("consent", mode="before")
    @classmethod
    def _check_consent(cls, value: Any) -> bool:
        if value is not True:
            raise _fail("Anda harus menyetujui kebijakan privasi")
        return True

    def payload(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "packageId": self.package_id,
            "customerName": self.name,
            "customerEmail": self.email,
            "customerPhone": self.phone,
            "eventDate": f"{self.event_date.isoformat()}T00:00:00.000Z" if self.event_date else None,
            "venue": self.venue,
        }
        if self.notes:
            body["notes"] = self.notes
        return body


class PackageForm(FormSchema):
    """Create/update form for a catalog package."""

    name: str = ""
    description: str = ""
    price: int = 0
    is_active: bool = True
    image_url: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, value: Any) -> str:
        normalized = _text(value)
        if len(normalized) < 2:
            raise _fail("Nama minimal 2 karakter")
        return normalized

    @field_validator("description", mode="before")
    @classmethod
    def _check_description(cls, value: Any) -> str:
        normalized = _text(value)
        if len(normalized) > 500:
            raise _fail("Maksimal 500 karakter")
        return normalized

    @field_validator("price", mode="before")
    @classmethod
    def _check_price(cls, value: Any) -> int:
        if isinstance(value, bool):
            raise _fail("Harga harus > 0")
        try:
            number = float(_text(value) or "0")
        except ValueError:
            raise _fail("Harga harus berupa angka") from None
        if not number.is_integer() or number <= 0:
            raise _fail("Harga harus > 0")
        return int(number)

    @field_validator("image_url", mode="before")
    @classmethod
    def _check_image_url(cls, value: Any) -> str:
        normalized = _text(value)
        if not normalized:
            return ""
        try:
            _URL_ADAPTER.validate_python(normalized)
        except SchemaError:
            raise _fail("URL gambar tidak valid") from None
        return normalized

    def payload(self) -> dict[str, Any]:
        body: dict[str, Any] = {"name": self.name, "price": self.price, "isActive": self.is_active}
        if self.description:
            body["description"] = self.description
        if self.image_url:
            body["imageUrl"] = self.image_url
        return body


class OrderCodeLookup(FormSchema):
    order_code: str = ""

    @field_validator("order_code", mode="before")
    @classmethod
    def _check_code(cls, value: Any) -> str:
        normalized = _text(value)
        if len(normalized) < 6:
            raise _fail("Minimal 6 karakter")
        if len(normalized) > 32:
            raise _fail("Maksimal 32 karakter")
        return normalized


class OrderEmailLookup(FormSchema):
    email: str = ""

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, value: Any) -> str:
        return _email(value)


def _field_errors(exc: SchemaError) -> dict[str, str]:
    field_errors: dict[str, str] = {}
    for error in exc.errors():
        name = str(error["loc"][0]) if error.get("loc") else "__root__"
        field_errors.setdefault(name, error["msg"])
    return field_errors


def validate_form(schema: type[FormT], values: dict[str, Any]) -> FormResult:
    try:
        model = schema.model_validate(values)
    except SchemaError as exc:
        return FormResult(values=dict(values), field_errors=_field_errors(exc))
    return FormResult(values=model.payload())


def parse_form(schema: type[FormT], values: dict[str, Any]) -> FormT:
    """Validate ``values`` or raise ValidationError with per-field messages."""
    try:
        return schema.model_validate(values)
    except SchemaError as exc:
        raise ValidationError.from_field_errors(_field_errors(exc)) from exc
