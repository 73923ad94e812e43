"""Notification run orchestration.

Wires the three steps together for a single run: apply the config defaults,
build the payload once, deliver it to every URL. Printing stays in the CLI;
this module only talks back through `DispatchHooks`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from core.domain.models import BuildContext, WebhookConfig
from core.domain.outcome import DeliveryOutcome, FailurePolicy
from core.services.dispatcher import DispatchHooks, dispatch
from core.services.payload_builder import build_payload

logger = logging.getLogger(__name__)


@dataclass
class NotificationResult:
    """Output of a run."""

    config: WebhookConfig
    payload: bytes
    outcomes: list[DeliveryOutcome] = field(default_factory=list)

    @property
    def failed(self) -> list[DeliveryOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.delivered]


def notify(
    context: BuildContext,
    config: WebhookConfig,
    *,
    client: httpx.Client,
    policy: FailurePolicy = FailurePolicy.FAIL_FAST,
    hooks: DispatchHooks | None = None,
) -> NotificationResult:
    effective = config.with_defaults()
    payload = build_payload(context, effective.template, client=client)
    logger.debug("Payload ready (%d bytes) for %d url(s)", len(payload), len(effective.urls))

    outcomes = dispatch(
        effective.urls,
        payload,
        effective,
        client=client,
        policy=policy,
        hooks=hooks,
    )
    return NotificationResult(config=effective, payload=payload, outcomes=outcomes)
