"""
Validation Rules — Farm and Usage Inputs

Stateless checks over the fields a caller submits. Each rule raises the
domain exception of the violated constraint and returns nothing otherwise.

Registration applies the rules in a fixed order (see REGISTRATION_RULES) so
that an input violating several constraints always reports the same error.
"""

from waterusage.domain.exceptions import ErrorCode, InvalidField, MaxLogsExceeded

ALLOWED_UNITS = ("liters", "gallons", "cubic-meters")
ALLOWED_USAGE_TYPES = ("irrigation", "domestic", "industrial")

MAX_EFFICIENCY_RATE = 100
MAX_LOCATION_LENGTH = 100
MAX_GRACE_PERIOD = 30
# Largest value the integer columns can hold.
MAX_UINT = 2**63 - 1


def check_capacity(next_id, max_logs):
    if next_id >= max_logs:
        raise MaxLogsExceeded(max_logs)


def check_quota(quota):
    if not 0 < quota <= MAX_UINT:
        raise InvalidField(ErrorCode.INVALID_QUOTA, "quota", quota)


def check_efficiency_rate(efficiency_rate):
    if not 0 <= efficiency_rate <= MAX_EFFICIENCY_RATE:
        raise InvalidField(
            ErrorCode.INVALID_EFFICIENCY_RATE, "efficiency_rate", efficiency_rate
        )


def check_period(period):
    if not 0 < period <= MAX_UINT:
        raise InvalidField(ErrorCode.INVALID_PERIOD, "period", period)


def check_location(location):
    if not location or len(location) > MAX_LOCATION_LENGTH:
        raise InvalidField(ErrorCode.INVALID_LOCATION, "location", location)


def check_unit(unit):
    if unit not in ALLOWED_UNITS:
        raise InvalidField(ErrorCode.INVALID_UNIT, "unit", unit)


def check_min_usage(min_usage):
    if not 0 < min_usage <= MAX_UINT:
        raise InvalidField(ErrorCode.INVALID_MIN_USAGE, "min_usage", min_usage)


def check_max_usage(max_usage):
    if not 0 < max_usage <= MAX_UINT:
        raise InvalidField(ErrorCode.INVALID_MAX_USAGE, "max_usage", max_usage)


def check_usage_type(usage_type):
    if usage_type not in ALLOWED_USAGE_TYPES:
        raise InvalidField(ErrorCode.INVALID_USAGE_TYPE, "usage_type", usage_type)


def check_grace_period(grace_period):
    if not 0 <= grace_period <= MAX_GRACE_PERIOD:
        raise InvalidField(
            ErrorCode.INVALID_GRACE_PERIOD, "grace_period", grace_period
        )


def check_amount(amount):
    if not 0 < amount <= MAX_UINT:
        raise InvalidField(ErrorCode.INVALID_AMOUNT, "amount", amount)


def check_timestamp(timestamp, now):
    # Usage events may be stamped in the future but never before the clock.
    if not now <= timestamp <= MAX_UINT:
        raise InvalidField(ErrorCode.INVALID_TIMESTAMP, "timestamp", timestamp)


def check_update_params(quota, efficiency_rate):
    if not 0 < quota <= MAX_UINT:
        raise InvalidField(ErrorCode.INVALID_UPDATE_PARAM, "quota", quota)
    if not 0 <= efficiency_rate <= MAX_EFFICIENCY_RATE:
        raise InvalidField(
            ErrorCode.INVALID_UPDATE_PARAM, "efficiency_rate", efficiency_rate
        )


REGISTRATION_RULES = (
    ("quota", check_quota),
    ("efficiency_rate", check_efficiency_rate),
    ("period", check_period),
    ("location", check_location),
    ("unit", check_unit),
    ("min_usage", check_min_usage),
    ("max_usage", check_max_usage),
    ("usage_type", check_usage_type),
    ("grace_period", check_grace_period),
)


def validate_registration(next_id, max_logs, fields):
    """
    Run every registration rule in order; the first violation is raised.

    ``fields`` maps each name in REGISTRATION_RULES to the submitted value.
    """
    check_capacity(next_id, max_logs)
    for name, rule in REGISTRATION_RULES:
        rule(fields[name])


def check_fee(amount):
    if not 0 <= amount <= MAX_UINT:
        raise InvalidField(ErrorCode.INVALID_AMOUNT, "logging_fee", amount)


def check_accumulated_usage(total_usage, amount):
    if total_usage + amount > MAX_UINT:
        raise InvalidField(ErrorCode.INVALID_AMOUNT, "amount", amount)


def is_valid_id(farm_id):
    return 0 <= farm_id <= MAX_UINT
