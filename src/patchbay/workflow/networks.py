"""Per-network step sets for the user-info workflow.

Each network differs in how profile URLs are shaped and in the raw
record layout its API returns. Everything else is the shared skeleton.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol
from urllib.parse import parse_qs, urlparse

from patchbay.domain.records import UserInfo
from patchbay.domain.types import Network
from patchbay.workflow.skeleton import WorkflowSteps, convert_each

RawRecord = Mapping[str, Any]


class SocialClient(Protocol):
    """Backend boundary for a social network API."""

    def get_user(self, user_id: str) -> RawRecord: ...

    def get_friends(self, user_id: str) -> Sequence[RawRecord]: ...


# ---------------------------------------------------------------------------
# Locator parsing
# ---------------------------------------------------------------------------


def _locator_path(locator: str, hosts: frozenset[str]) -> tuple[list[str], dict[str, list[str]]]:
    """Split a profile URL into path segments and query, checking its host."""
    text = locator.strip()
    if "://" not in text:
        text = f"https://{text}"
    parsed = urlparse(text)
    host = (parsed.hostname or "").lower().removeprefix("www.").removeprefix("m.")
    if host not in hosts:
        msg = f"Not a {'/'.join(sorted(hosts))} profile URL: {locator!r}"
        raise ValueError(msg)
    segments = [s for s in parsed.path.split("/") if s]
    return segments, parse_qs(parsed.query)


_VK_NUMERIC_ID = re.compile(r"^id(\d+)$")


def parse_vk_identity(locator: str) -> str:
    """``https://vk.com/id123`` → ``123``; ``vk.com/durov`` → ``durov``."""
    segments, _ = _locator_path(locator, frozenset({"vk.com", "vk.ru"}))
    if not segments:
        msg = f"VK profile URL has no user segment: {locator!r}"
        raise ValueError(msg)
    match = _VK_NUMERIC_ID.match(segments[0])
    return match.group(1) if match else segments[0]


def parse_facebook_identity(locator: str) -> str:
    """``facebook.com/profile.php?id=100`` → ``100``; ``facebook.com/zuck`` → ``zuck``."""
    segments, query = _locator_path(locator, frozenset({"facebook.com", "fb.com"}))
    if segments[:1] == ["profile.php"]:
        ids = query.get("id")
        if not ids or not ids[0]:
            msg = f"Facebook profile URL is missing ?id=: {locator!r}"
            raise ValueError(msg)
        return ids[0]
    if not segments:
        msg = f"Facebook profile URL has no user segment: {locator!r}"
        raise ValueError(msg)
    return segments[0]


def parse_twitter_identity(locator: str) -> str:
    """``twitter.com/jack`` or ``x.com/@jack`` → ``jack``."""
    segments, _ = _locator_path(locator, frozenset({"twitter.com", "x.com"}))
    if not segments:
        msg = f"Twitter profile URL has no handle: {locator!r}"
        raise ValueError(msg)
    return segments[0].removeprefix("@")


# ---------------------------------------------------------------------------
# Raw record conversion
# ---------------------------------------------------------------------------


def vk_display_name(raw: RawRecord) -> str:
    return f"{raw['first_name']} {raw['last_name']}".strip()


def vk_user(raw: RawRecord) -> UserInfo:
    return UserInfo(identity=str(raw["id"]), name=vk_display_name(raw))


def facebook_user(raw: RawRecord) -> UserInfo:
    return UserInfo(identity=str(raw["id"]), name=str(raw["name"]))


def twitter_display_name(raw: RawRecord) -> str:
    return str(raw.get("name") or raw["screen_name"])


def twitter_user(raw: RawRecord) -> UserInfo:
    return UserInfo(identity=str(raw["screen_name"]), name=twitter_display_name(raw))


# ---------------------------------------------------------------------------
# Step builders
# ---------------------------------------------------------------------------


def vk_steps(client: SocialClient) -> WorkflowSteps[RawRecord]:
    return WorkflowSteps(
        parse_identity=parse_vk_identity,
        resolve_display_name=lambda identity: vk_display_name(client.get_user(identity)),
        fetch_related=client.get_friends,
        convert=convert_each(vk_user),
    )


def facebook_steps(client: SocialClient) -> WorkflowSteps[RawRecord]:
    return WorkflowSteps(
        parse_identity=parse_facebook_identity,
        resolve_display_name=lambda identity: str(client.get_user(identity)["name"]),
        fetch_related=client.get_friends,
        convert=convert_each(facebook_user),
    )


def twitter_steps(client: SocialClient) -> WorkflowSteps[RawRecord]:
    return WorkflowSteps(
        parse_identity=parse_twitter_identity,
        resolve_display_name=lambda identity: twitter_display_name(client.get_user(identity)),
        fetch_related=client.get_friends,
        convert=convert_each(twitter_user),
    )


NETWORK_STEP_BUILDERS: dict[Network, Callable[[SocialClient], WorkflowSteps[RawRecord]]] = {
    Network.VK: vk_steps,
    Network.FACEBOOK: facebook_steps,
    Network.TWITTER: twitter_steps,
}


def build_steps(network: Network, client: SocialClient) -> WorkflowSteps[RawRecord]:
    """Build the step record for *network* backed by *client*."""
    try:
        builder = NETWORK_STEP_BUILDERS[Network(network)]
    except (KeyError, ValueError) as exc:
        msg = f"Unknown network: {network!r}"
        raise ValueError(msg) from exc
    return builder(client)
