"""Notification pipeline — core operation plus isolated post-operation handlers."""

from __future__ import annotations

from typing import Any

from patchbay.dispatch.registry import StrategyRegistry
from patchbay.domain.types import CompositionStrategy, PassValue
from patchbay.pipeline.base import CoreOperation, Handler, NotificationPipeline, PipelineOutcome
from patchbay.pipeline.chain import ChainedPipeline
from patchbay.pipeline.observer import ObserverPipeline

PIPELINE_STRATEGIES: StrategyRegistry[CompositionStrategy, Any] = StrategyRegistry("pipelines")
PIPELINE_STRATEGIES.register(CompositionStrategy.CHAIN, ChainedPipeline)
PIPELINE_STRATEGIES.register(CompositionStrategy.OBSERVER, ObserverPipeline)


def build_pipeline(
    strategy: CompositionStrategy | str,
    core: CoreOperation,
    *,
    operation: str = "execute",
    pass_value: PassValue = PassValue.OUTPUT,
) -> NotificationPipeline:
    """Construct a pipeline using the named composition strategy.

    Raises:
        DispatchError: If *strategy* is not a registered strategy.
    """
    return PIPELINE_STRATEGIES.dispatch(
        strategy, core, operation=operation, pass_value=pass_value
    )


__all__ = [
    "PIPELINE_STRATEGIES",
    "ChainedPipeline",
    "CoreOperation",
    "Handler",
    "NotificationPipeline",
    "ObserverPipeline",
    "PipelineOutcome",
    "build_pipeline",
]
