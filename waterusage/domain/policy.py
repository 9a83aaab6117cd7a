"""
Authorization Policy

Decides whether a principal may perform a mutation. Functions take the
tracker or farm whose state they inspect and raise a domain exception when
the call must be rejected.
"""

from waterusage.domain.exceptions import (
    ErrorCode,
    FarmAlreadyRegistered,
    NotAuthorized,
    OracleNotVerified,
    TrackerError,
)


def require_oracle_assignable(tracker, principal, burn_principal):
    """The oracle may be designated once, never blank and never as the burn principal."""
    if not principal or principal == burn_principal:
        raise NotAuthorized(principal, "act as oracle contract")
    if tracker.oracle_contract:
        raise TrackerError(
            f"Oracle contract already set to {tracker.oracle_contract}",
            code=ErrorCode.UPDATE_NOT_ALLOWED,
        )


def require_oracle_designated(tracker):
    if not tracker.oracle_contract:
        raise OracleNotVerified()


def require_not_registered(caller, already_registered):
    if already_registered:
        raise FarmAlreadyRegistered(caller)


def require_usage_reporter(tracker, farm, caller):
    if caller != farm.owner and caller != tracker.oracle_contract:
        raise NotAuthorized(caller, f"log usage for farm {farm.farm_id}")


def require_owner(farm, caller):
    if caller != farm.owner:
        raise NotAuthorized(caller, f"update farm {farm.farm_id}")
