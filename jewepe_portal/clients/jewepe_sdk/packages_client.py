from __future__ import annotations

from jewepe_portal.clients.jewepe_sdk.models import Package
from jewepe_portal.clients.jewepe_sdk.resource_client import ResourceClient


class PackagesClient(ResourceClient[Package]):
    """Admin view of the package catalog (includes inactive packages)."""

    collection_path = "/packages"
    list_path = "/packages/admin/all"
    search_param = "search"
    model = Package


class PublicPackagesClient(ResourceClient[Package]):
    """Customer-facing catalog; only active packages are returned."""

    collection_path = "/packages"
    search_param = "search"
    model = Package
