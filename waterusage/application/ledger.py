"""
Application Use Case — Usage Ledger

Appends metered usage events and keeps each farm's cumulative usage in step
with its log.

Guarantees:
- Atomicity via transaction.atomic(), with the tracker row locked so the
  ledger sequence cannot be handed out twice
- The (farm, sequence) UNIQUE constraint turns a reused key into
  LogAlreadyExists instead of a silent overwrite
- total_usage is advanced with an F() expression

Quota and min/max usage bounds are descriptive only; logging never checks
them, so a farm may go over quota.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import F

from waterusage.application.registry import get_farm
from waterusage.domain import policy, rules
from waterusage.domain.exceptions import FarmNotFound, LogAlreadyExists, TrackerError
from waterusage.domain.results import Result
from waterusage.models import Farm, TrackerState, UsageLog

logger = logging.getLogger(__name__)


def log_usage(tracker, env, farm_id, amount, timestamp=None):
    """
    Record ``amount`` of usage for a farm, reported by its owner or the oracle.

    ``timestamp`` defaults to the environment clock. The farm's last_update
    takes the event timestamp, not the processing time.
    """
    caller = env.caller
    now = env.now()
    if timestamp is None:
        timestamp = now

    try:
        with transaction.atomic():
            state = TrackerState.objects.lock(tracker)

            farm = get_farm(state, farm_id)
            if farm is None:
                raise FarmNotFound(farm_id)
            policy.require_usage_reporter(state, farm, caller)
            rules.check_amount(amount)
            rules.check_timestamp(timestamp, now)
            rules.check_accumulated_usage(farm.total_usage, amount)

            sequence = state.usage_logs.count()
            try:
                with transaction.atomic():
                    UsageLog.objects.create(
                        tracker=state,
                        farm=farm,
                        sequence=sequence,
                        amount=amount,
                        timestamp=timestamp,
                        reporter=caller,
                    )
            except IntegrityError:
                raise LogAlreadyExists(farm_id, sequence)

            Farm.objects.filter(pk=farm.pk).update(
                total_usage=F("total_usage") + amount,
                last_update=timestamp,
            )
    except TrackerError as exc:
        logger.warning(
            "Usage log rejected: tracker=%s farm_id=%s caller=%s code=%s reason=%s",
            tracker.pk, farm_id, caller, exc.code, exc,
        )
        return Result.failure()

    logger.info(
        "Usage logged: tracker=%s farm_id=%s sequence=%s amount=%s reporter=%s",
        tracker.pk, farm_id, sequence, amount, caller,
    )
    return Result.success()


def get_usage_log(tracker, farm_id, sequence):
    if not (rules.is_valid_id(farm_id) and rules.is_valid_id(sequence)):
        return None
    return UsageLog.objects.filter(
        tracker=tracker, farm__farm_id=farm_id, sequence=sequence
    ).first()
