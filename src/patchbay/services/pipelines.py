"""PipelineService — describe the configured notification pipelines."""

from __future__ import annotations

from patchbay.handlers import HANDLER_FACTORIES
from patchbay.services.base import BaseService
from patchbay.services.contracts import PipelineListData, dump_validated
from patchbay.services.result import ServiceResult


class PipelineService(BaseService):
    """Introspection over pipeline configuration and built pipelines."""

    def describe(self) -> ServiceResult:
        config = self._hub.settings.pipeline
        data = {
            "strategy": str(config.strategy),
            "pass_value": str(config.pass_value),
            "handlers": list(config.handlers),
            "available": sorted(HANDLER_FACTORIES.keys()),
            "pipelines": [
                {"operation": operation, "handlers": pipeline.handler_names()}
                for operation, pipeline in self._hub.pipelines().items()
            ],
        }
        return ServiceResult(
            ok=True, op="describe_pipelines", data=dump_validated(PipelineListData, data)
        )
