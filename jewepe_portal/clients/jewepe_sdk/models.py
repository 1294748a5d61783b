from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ContactStatus(str, Enum):
    NEW = "NEW"
    READ = "READ"


class Package(WireModel):
    id: str
    name: str
    description: Optional[str] = None
    price: int = 0
    is_active: bool = Field(default=True, alias="isActive")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")


class PackageSummary(WireModel):
    id: str
    name: str
    price: int = 0
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class OrderUser(WireModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None


class Order(WireModel):
    id: str
    order_code: str = Field(alias="orderCode")
    package_id: Optional[str] = Field(default=None, alias="packageId")
    user_id: Optional[str] = Field(default=None, alias="userId")
    customer_name: str = Field(alias="customerName")
    customer_email: str = Field(alias="customerEmail")
    customer_phone: Optional[str] = Field(default=None, alias="customerPhone")
    event_date: Optional[str] = Field(default=None, alias="eventDate")
    venue: Optional[str] = None
    status: OrderStatus = OrderStatus.PENDING
    total_price: int = Field(default=0, alias="totalPrice")
    notes: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")
    package: Optional[PackageSummary] = None
    user: Optional[OrderUser] = None


class Contact(WireModel):
    id: str
    name: str
    email: str
    message: str
    status: ContactStatus = ContactStatus.NEW
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")


class SessionUser(WireModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None


class LoginResult(WireModel):
    access_token: str = Field(alias="accessToken")
    user: SessionUser


class OrdersSummary(WireModel):
    total: int = 0
    approved: int = 0
    pending: int = 0
    rejected: int = 0


class RevenueSummary(WireModel):
    revenue_this_month: Optional[int] = Field(default=None, alias="revenueThisMonth")
    avg_order_value_this_month: Optional[float] = Field(default=None, alias="avgOrderValueThisMonth")
    orders_this_month: int = Field(default=0, alias="ordersThisMonth")


class TopPackage(WireModel):
    package_id: str = Field(alias="packageId")
    name: Optional[str] = None
    count: int = 0
    revenue: Optional[int] = None


class SessionData(BaseModel):
    access_token: str
    user: Optional[SessionUser] = None


class OverviewData(BaseModel):
    summary: OrdersSummary
    revenue: RevenueSummary
    top_packages: List[TopPackage] = Field(default_factory=list)


T = TypeVar("T")


@dataclass(frozen=True)
class PageMeta:
    page: int
    limit: int
    total: int
    page_count: int
    has_next: bool
    has_prev: bool

    @classmethod
    def derive(cls, page: int, limit: int, total: int) -> "PageMeta":
        page_count = math.ceil(total / limit) if limit > 0 else 0
        return cls(
            page=page,
            limit=limit,
            total=total,
            page_count=page_count,
            has_next=page < page_count,
            has_prev=page > 1,
        )


@dataclass(frozen=True)
class PageEnvelope(Generic[T]):
    items: tuple[T, ...]
    meta: PageMeta
