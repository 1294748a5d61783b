from __future__ import annotations

from typing import Any

from jewepe_portal.app.application.submit_result import SubmitResult
from jewepe_portal.app.infrastructure.errors.error_mapper import ErrorMapper
from jewepe_portal.app.infrastructure.logging.logger import get_logger, log_action
from jewepe_portal.app.listing.mutations import Create, MutationBridge, MutationOutcome, Update
from jewepe_portal.app.listing.screens import CATALOG
from jewepe_portal.app.ui.components.notification_center import NotificationCenter
from jewepe_portal.app.ui.forms import PackageForm, validate_form
from jewepe_portal.clients.jewepe_sdk.errors import ApiError
from jewepe_portal.clients.jewepe_sdk.packages_client import PackagesClient

logger = get_logger(__name__)

LOAD_FAILED = "Gagal memuat data paket."


class SavePackageUseCase:
    """Create and edit forms of the catalog back office."""

    def __init__(
        self,
        packages_client: PackagesClient,
        notifications: NotificationCenter,
        bridge: MutationBridge | None = None,
    ) -> None:
        self.packages_client = packages_client
        self.notifications = notifications
        self.bridge = bridge or MutationBridge(
            client=packages_client,
            notifications=notifications,
            messages=CATALOG.mutations,
            module="catalog.form",
        )

    async def load_for_edit(self, package_id: str) -> dict[str, Any] | None:
        try:
            package = await self.packages_client.get(package_id)
        except ApiError as exc:
            log_action(logger, "catalog.form", "load", "error", trace_id=exc.trace_id, code=exc.code)
            self.notifications.error(ErrorMapper.to_display_message(exc, LOAD_FAILED))
            return None
        return {
            "name": package.name,
            "description": package.description or "",
            "price": package.price,
            "is_active": package.is_active,
            "image_url": package.image_url or "",
        }

    async def create(self, values: dict[str, Any]) -> SubmitResult:
        return await self._submit(values, target=None)

    async def update(self, package_id: str, values: dict[str, Any]) -> SubmitResult:
        return await self._submit(values, target=package_id)

    async def _submit(self, values: dict[str, Any], target: str | None) -> SubmitResult:
        form = validate_form(PackageForm, values)
        if not form.is_valid:
            return SubmitResult(ok=False, message=form.field_errors[form.first_invalid_field], field_errors=form.field_errors)

        op = Create(form.values) if target is None else Update(form.values)
        outcome = await self.bridge.perform(op, target)
        return SubmitResult(ok=outcome is MutationOutcome.SUCCESS, message=self.bridge.last_message or "", data=outcome)
