"""
Runtime Environment — Collaborators Supplied to the Tracker

The tracker decides whether a mutation is valid and what the resulting state
is. Everything it cannot decide on its own comes from an Environment:

- caller: the principal issuing the call
- clock: current block height, used to stamp mutations and reject backdating
- fee_transfer: moves the registration fee from caller to oracle
- oracles: answers whether a principal is a recognized oracle

Views build an Environment from settings; tests build one by hand with a
BlockClock and a RecordingFeeTransfer so they can drive time and inspect
transfers.
"""

import logging

from django.utils import timezone

from waterusage import conf
from waterusage.domain.exceptions import TransferFailed
from waterusage.models import FeeTransfer

logger = logging.getLogger(__name__)


def wall_clock():
    return int(timezone.now().timestamp())


class BlockClock:
    """Manually advanced block height."""

    def __init__(self, height=0):
        self.height = height

    def __call__(self):
        return self.height

    def advance(self, blocks=1):
        self.height += blocks
        return self.height


class LedgerFeeTransfer:
    """Records each fee payment as a FeeTransfer row in the caller's transaction."""

    def transfer(self, tracker, amount, payer, payee):
        FeeTransfer.objects.create(
            tracker=tracker, amount=amount, payer=payer, payee=payee
        )
        logger.info(
            "Fee transferred: tracker=%s amount=%s payer=%s payee=%s",
            tracker.pk, amount, payer, payee,
        )


class RecordingFeeTransfer:
    """
    Keeps transfers in memory.

    Set ``fail_with`` to an error code to make every transfer fail with it.
    """

    def __init__(self, fail_with=None):
        self.fail_with = fail_with
        self.transfers = []

    def transfer(self, tracker, amount, payer, payee):
        if self.fail_with is not None:
            raise TransferFailed(self.fail_with, amount, payer, payee)
        self.transfers.append({"amount": amount, "from": payer, "to": payee})


class StaticOracleDirectory:
    def __init__(self, principals=()):
        self.principals = set(principals)

    def is_verified(self, principal):
        return principal in self.principals


class SettingsOracleDirectory(StaticOracleDirectory):
    def __init__(self):
        super().__init__(conf.get("VERIFIED_ORACLES"))


class Environment:
    def __init__(self, caller, clock, fee_transfer, oracles):
        self.caller = caller
        self.clock = clock
        self.fee_transfer = fee_transfer
        self.oracles = oracles

    @classmethod
    def from_settings(cls, caller):
        return cls(
            caller=caller,
            clock=conf.load("CLOCK"),
            fee_transfer=conf.load("FEE_TRANSFER")(),
            oracles=conf.load("ORACLE_DIRECTORY")(),
        )

    def now(self):
        return self.clock()

    def as_caller(self, caller):
        """Same collaborators, different principal."""
        return Environment(caller, self.clock, self.fee_transfer, self.oracles)
