"""User-info workflow — one fixed algorithm, many step sets."""

from patchbay.workflow.networks import NETWORK_STEP_BUILDERS, SocialClient, build_steps
from patchbay.workflow.skeleton import WorkflowSteps, collect_user_info, convert_each

__all__ = [
    "NETWORK_STEP_BUILDERS",
    "SocialClient",
    "WorkflowSteps",
    "build_steps",
    "collect_user_info",
    "convert_each",
]
