"""ProfileService — per-platform user info through the shared workflow."""

from __future__ import annotations

from typing import Any

from patchbay.domain.errors import PatchbayError
from patchbay.domain.records import UserInfo
from patchbay.services.base import BaseService
from patchbay.services.contracts import ProfileResultData, dump_validated
from patchbay.services.result import ServiceResult, error_result
from patchbay.workflow.skeleton import collect_user_info


class ProfileService(BaseService):
    """Collect a user's name and friends from a social network profile URL."""

    def collect(self, network: str, locator: str) -> ServiceResult:
        op = "collect_profile"
        warnings: list[str] = []
        meta: dict[str, Any] = {}
        payload = {"network": str(network), "locator": locator}
        try:
            info: UserInfo = self._run_pipeline(op, self._collect, payload, warnings, meta)
        except PatchbayError as exc:
            return error_result(op, exc, warnings=warnings)

        data = {
            "network": str(network),
            "id": info.identity,
            "name": info.name,
            "count": len(info.friends),
            "items": [{"id": f.identity, "name": f.name} for f in info.friends],
        }
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(ProfileResultData, data),
            warnings=warnings,
            meta=meta,
        )

    def _collect(self, payload: dict[str, str]) -> UserInfo:
        steps = self._hub.networks.resolve(payload["network"])
        return collect_user_info(steps, payload["locator"])
