from jewepe_portal.clients.jewepe_sdk.auth_client import AuthClient
from jewepe_portal.clients.jewepe_sdk.auth_store import AuthStore
from jewepe_portal.clients.jewepe_sdk.config import ConfigError, SDKConfig
from jewepe_portal.clients.jewepe_sdk.contacts_client import ContactsClient
from jewepe_portal.clients.jewepe_sdk.errors import (
    ApiError,
    AuthError,
    NetworkError,
    PermissionDeniedError,
    RequestCancelledError,
    ServerError,
    ValidationError,
)
from jewepe_portal.clients.jewepe_sdk.http_client import HttpClient
from jewepe_portal.clients.jewepe_sdk.models import PageEnvelope, PageMeta
from jewepe_portal.clients.jewepe_sdk.orders_client import OrdersClient
from jewepe_portal.clients.jewepe_sdk.packages_client import PackagesClient, PublicPackagesClient
from jewepe_portal.clients.jewepe_sdk.reports_client import ReportsClient

__all__ = [
    "SDKConfig",
    "ConfigError",
    "ApiError",
    "AuthError",
    "NetworkError",
    "PermissionDeniedError",
    "RequestCancelledError",
    "ServerError",
    "ValidationError",
    "HttpClient",
    "AuthClient",
    "AuthStore",
    "PackagesClient",
    "PublicPackagesClient",
    "OrdersClient",
    "ContactsClient",
    "ReportsClient",
    "PageEnvelope",
    "PageMeta",
]
