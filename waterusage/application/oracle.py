"""
Application Use Cases — Oracle Administration

Designation of the oracle contract and the registration fee it collects.
Both return a coarse Result: True on success, False on any rejection.
"""

import logging

from django.db import transaction

from waterusage import conf
from waterusage.domain import policy, rules
from waterusage.domain.exceptions import TrackerError
from waterusage.domain.results import Result
from waterusage.models import TrackerState

logger = logging.getLogger(__name__)


def set_oracle_contract(tracker, principal):
    """Designate the oracle principal. Succeeds at most once per tracker."""
    try:
        with transaction.atomic():
            state = TrackerState.objects.lock(tracker)
            policy.require_oracle_assignable(state, principal, conf.get("BURN_PRINCIPAL"))
            state.oracle_contract = principal
            state.save(update_fields=["oracle_contract"])
    except TrackerError as exc:
        logger.warning(
            "Oracle designation rejected: tracker=%s principal=%s code=%s reason=%s",
            tracker.pk, principal, exc.code, exc,
        )
        return Result.failure()

    tracker.refresh_from_db()
    logger.info("Oracle contract set: tracker=%s principal=%s", tracker.pk, principal)
    return Result.success()


def set_logging_fee(tracker, amount):
    # Gated on an oracle being designated, not on who the caller is.
    try:
        with transaction.atomic():
            state = TrackerState.objects.lock(tracker)
            policy.require_oracle_designated(state)
            rules.check_fee(amount)
            state.logging_fee = amount
            state.save(update_fields=["logging_fee"])
    except TrackerError as exc:
        logger.warning(
            "Logging fee change rejected: tracker=%s amount=%s code=%s reason=%s",
            tracker.pk, amount, exc.code, exc,
        )
        return Result.failure()

    tracker.refresh_from_db()
    logger.info("Logging fee set: tracker=%s amount=%s", tracker.pk, amount)
    return Result.success()


def is_verified_oracle(env, principal):
    return Result.success(env.oracles.is_verified(principal))
