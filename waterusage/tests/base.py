from django.test import TestCase

from waterusage.application import oracle
from waterusage.environment import (
    BlockClock,
    Environment,
    RecordingFeeTransfer,
    StaticOracleDirectory,
)
from waterusage.models import TrackerState

OWNER = "ST1TEST"
ORACLE = "ST2TEST"
STRANGER = "ST3FAKE"

FARM = {
    "quota": 10000,
    "efficiency_rate": 80,
    "period": 30,
    "location": "FarmLocation",
    "unit": "liters",
    "min_usage": 100,
    "max_usage": 5000,
    "usage_type": "irrigation",
    "grace_period": 7,
}

OTHER_FARM = {
    "quota": 20000,
    "efficiency_rate": 90,
    "period": 60,
    "location": "AnotherLocation",
    "unit": "gallons",
    "min_usage": 200,
    "max_usage": 10000,
    "usage_type": "domestic",
    "grace_period": 14,
}


class TrackerTestCase(TestCase):
    """
    Fresh tracker per test, driven by a manual block clock and an in-memory
    fee transfer so tests can advance time and inspect payments.
    """

    def setUp(self):
        self.tracker = TrackerState.objects.create(max_logs=10000, logging_fee=500)
        self.clock = BlockClock(0)
        self.transfers = RecordingFeeTransfer()
        self.env = Environment(
            caller=OWNER,
            clock=self.clock,
            fee_transfer=self.transfers,
            oracles=StaticOracleDirectory([OWNER]),
        )

    def designate_oracle(self, principal=ORACLE):
        self.assertTrue(oracle.set_oracle_contract(self.tracker, principal).ok)
