"""
Application Use Cases — Farm Registry

Registration, parameter updates and the read-only queries over farms.

Core guarantees provided:

- Atomicity: each mutation executes inside a transaction.atomic() block, so
  a rejected call (including a failed fee transfer) leaves no trace.
- Serialization: the tracker row is locked with select_for_update() before
  any rule is evaluated.
- Explicit domain signaling: rules and policy raise domain exceptions inside
  the transaction; they are translated into a Result at this boundary and
  never escape to the caller.

register_farm reports the precise error code. update_farm only reports that it
failed; the precise reason goes to the log.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import F

from waterusage.domain import policy, rules
from waterusage.domain.exceptions import FarmAlreadyRegistered, FarmNotFound, TrackerError
from waterusage.domain.results import Result
from waterusage.models import Farm, FarmUpdate, TrackerState

logger = logging.getLogger(__name__)


def register_farm(
    tracker, env, quota, efficiency_rate, period, location, unit,
    min_usage, max_usage, usage_type, grace_period,
):
    """
    Register a farm owned by the calling principal.

    Charges the tracker's logging fee from the caller to the oracle contract
    and returns the new farm_id on success, or the error code on failure.
    """
    caller = env.caller
    fields = {
        "quota": quota,
        "efficiency_rate": efficiency_rate,
        "period": period,
        "location": location,
        "unit": unit,
        "min_usage": min_usage,
        "max_usage": max_usage,
        "usage_type": usage_type,
        "grace_period": grace_period,
    }

    try:
        with transaction.atomic():
            state = TrackerState.objects.lock(tracker)

            policy.require_oracle_designated(state)
            rules.validate_registration(state.next_id, state.max_logs, fields)
            policy.require_not_registered(
                caller, state.farms.filter(owner=caller).exists()
            )

            try:
                with transaction.atomic():
                    farm = Farm.objects.create(
                        tracker=state,
                        farm_id=state.next_id,
                        owner=caller,
                        last_update=env.now(),
                        **fields,
                    )
            except IntegrityError:
                # Owner index collision: another registration won the row
                raise FarmAlreadyRegistered(caller)

            # Charged last: nothing after the transfer can reject the call.
            env.fee_transfer.transfer(
                state, state.logging_fee, caller, state.oracle_contract
            )

            TrackerState.objects.filter(pk=state.pk).update(next_id=F("next_id") + 1)
    except TrackerError as exc:
        logger.warning(
            "Farm registration rejected: tracker=%s caller=%s code=%s reason=%s",
            tracker.pk, caller, exc.code, exc,
        )
        return Result.failure(exc.code)

    tracker.refresh_from_db()
    logger.info(
        "Farm registered: tracker=%s farm_id=%s owner=%s fee=%s",
        tracker.pk, farm.farm_id, caller, state.logging_fee,
    )
    return Result.success(farm.farm_id)


def update_farm(tracker, env, farm_id, quota, efficiency_rate):
    """Owner-only change of quota and efficiency rate."""
    caller = env.caller

    try:
        with transaction.atomic():
            state = TrackerState.objects.lock(tracker)

            farm = get_farm(state, farm_id)
            if farm is None:
                raise FarmNotFound(farm_id)
            policy.require_owner(farm, caller)
            rules.check_update_params(quota, efficiency_rate)

            now = env.now()
            farm.quota = quota
            farm.efficiency_rate = efficiency_rate
            farm.last_update = now
            farm.save(update_fields=["quota", "efficiency_rate", "last_update"])

            # Single slot per farm: the previous update record is replaced.
            FarmUpdate.objects.update_or_create(
                farm=farm,
                defaults={
                    "update_quota": quota,
                    "update_efficiency_rate": efficiency_rate,
                    "update_timestamp": now,
                    "updater": caller,
                },
            )
    except TrackerError as exc:
        logger.warning(
            "Farm update rejected: tracker=%s farm_id=%s caller=%s code=%s reason=%s",
            tracker.pk, farm_id, caller, exc.code, exc,
        )
        return Result.failure()

    logger.info(
        "Farm updated: tracker=%s farm_id=%s quota=%s efficiency_rate=%s",
        tracker.pk, farm_id, quota, efficiency_rate,
    )
    return Result.success()


def get_farm(tracker, farm_id):
    if not rules.is_valid_id(farm_id):
        return None
    return Farm.objects.filter(tracker=tracker, farm_id=farm_id).first()


def get_farm_update(tracker, farm_id):
    if not rules.is_valid_id(farm_id):
        return None
    return FarmUpdate.objects.filter(
        farm__tracker=tracker, farm__farm_id=farm_id
    ).first()


def get_farm_count(tracker):
    # next_id, not a row count: farms are never removed.
    return TrackerState.objects.values_list("next_id", flat=True).get(pk=tracker.pk)


def check_farm_existence(tracker, owner):
    return Farm.objects.filter(tracker=tracker, owner=owner).exists()


def calculate_remaining_quota(tracker, farm_id):
    """quota - total_usage, or 0 for an unknown farm."""
    farm = get_farm(tracker, farm_id)
    if farm is None:
        return 0
    return farm.remaining_quota
