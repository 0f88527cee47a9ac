"""The user-info workflow skeleton.

Order is fixed and not configurable by variants:

    parse_identity → resolve_display_name → fetch_related → convert

Variants supply the four steps as a :class:`WorkflowSteps` record.
:func:`collect_user_info` is the only orchestrator; adding a network
means building a new step record, never touching this module.

INVARIANT: A failed step aborts the workflow. No partial ``UserInfo``
is ever returned.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from patchbay.domain.errors import WorkflowError
from patchbay.domain.records import UserInfo
from patchbay.domain.types import WorkflowStep

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkflowSteps[R]:
    """Step implementations for one platform.

    Attributes:
        parse_identity: Extract the platform identifier from a locator (URL).
        resolve_display_name: Look up the display name for an identity.
        fetch_related: Fetch raw related records (friends, followees).
        convert: Turn raw records into ``UserInfo`` items, preserving order.
    """

    parse_identity: Callable[[str], str]
    resolve_display_name: Callable[[str], str]
    fetch_related: Callable[[str], Sequence[R]]
    convert: Callable[[Sequence[R]], Sequence[UserInfo]]


def convert_each[R](convert_one: Callable[[R], UserInfo]) -> Callable[[Sequence[R]], list[UserInfo]]:
    """Build an order-preserving ``convert`` step from a per-record function."""

    def convert(raw_records: Sequence[R]) -> list[UserInfo]:
        return [convert_one(raw) for raw in raw_records]

    return convert


def _run_step(step: WorkflowStep, func: Callable[[Any], Any], arg: Any) -> Any:
    try:
        return func(arg)
    except WorkflowError:
        raise
    except Exception as exc:
        logger.debug("Workflow step %s failed", step, exc_info=True)
        raise WorkflowError(step, exc) from exc


def _materialized(step: WorkflowStep, func: Callable[[Any], Any]) -> Callable[[Any], list[Any]]:
    """Call *func* and drain its result, so lazy iterables fail inside the step."""

    def call(arg: Any) -> list[Any]:
        result = func(arg)
        if result is None:
            msg = f"{step} returned None instead of a sequence"
            raise TypeError(msg)
        return list(result)

    return call


def collect_user_info[R](steps: WorkflowSteps[R], locator: str) -> UserInfo:
    """Run the four workflow steps against *locator* and aggregate the result."""
    identity = _run_step(WorkflowStep.PARSE_IDENTITY, steps.parse_identity, locator)
    name = _run_step(WorkflowStep.RESOLVE_DISPLAY_NAME, steps.resolve_display_name, identity)

    fetch = _materialized(WorkflowStep.FETCH_RELATED, steps.fetch_related)
    raw_related = _run_step(WorkflowStep.FETCH_RELATED, fetch, identity)

    convert = _materialized(WorkflowStep.CONVERT, steps.convert)
    friends = _run_step(WorkflowStep.CONVERT, convert, raw_related)
    if len(friends) != len(raw_related):
        cause = ValueError(
            f"convert produced {len(friends)} records for {len(raw_related)} inputs"
        )
        raise WorkflowError(WorkflowStep.CONVERT, cause)
    for item in friends:
        if not isinstance(item, UserInfo):
            cause = TypeError(f"convert produced {type(item).__name__}, expected UserInfo")
            raise WorkflowError(WorkflowStep.CONVERT, cause)

    logger.debug("Collected user info for %s (%d friends)", identity, len(friends))
    return UserInfo(identity=str(identity), name=str(name), friends=tuple(friends))
