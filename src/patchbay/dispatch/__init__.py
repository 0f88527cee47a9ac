"""Strategy dispatch — discriminator in, handler out."""

from patchbay.dispatch.registry import StrategyRegistry

__all__ = ["StrategyRegistry"]
