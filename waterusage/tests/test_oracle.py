from django.test import override_settings

from waterusage.application import oracle, registry
from waterusage.domain.exceptions import ErrorCode
from waterusage.models import TrackerState
from waterusage.tests.base import FARM, ORACLE, OWNER, TrackerTestCase

BURN_PRINCIPAL = "SP000000000000000000002Q6VF78"


class OracleContractTest(TrackerTestCase):
    def test_sets_oracle_contract(self):
        result = oracle.set_oracle_contract(self.tracker, ORACLE)

        self.assertTrue(result.ok)
        self.assertTrue(result.value)
        self.assertEqual(self.tracker.oracle_contract, ORACLE)

    def test_rejects_burn_principal(self):
        result = oracle.set_oracle_contract(self.tracker, BURN_PRINCIPAL)

        self.assertFalse(result.ok)
        self.assertFalse(result.value)
        self.tracker.refresh_from_db()
        self.assertIsNone(self.tracker.oracle_contract)

    @override_settings(WATERUSAGE={"BURN_PRINCIPAL": "ST0BURN"})
    def test_burn_principal_is_configurable(self):
        self.assertFalse(oracle.set_oracle_contract(self.tracker, "ST0BURN").ok)
        self.assertTrue(oracle.set_oracle_contract(self.tracker, BURN_PRINCIPAL).ok)

    def test_oracle_can_only_be_set_once(self):
        oracle.set_oracle_contract(self.tracker, ORACLE)

        result = oracle.set_oracle_contract(self.tracker, "ST9OTHER")

        self.assertFalse(result.ok)
        self.tracker.refresh_from_db()
        self.assertEqual(self.tracker.oracle_contract, ORACLE)

    def test_is_verified_oracle_uses_directory(self):
        self.assertTrue(oracle.is_verified_oracle(self.env, OWNER).value)
        self.assertFalse(oracle.is_verified_oracle(self.env, ORACLE).value)


class LoggingFeeTest(TrackerTestCase):
    def test_sets_fee_and_charges_it(self):
        self.designate_oracle()

        result = oracle.set_logging_fee(self.tracker, 1000)

        self.assertTrue(result.ok)
        self.assertEqual(self.tracker.logging_fee, 1000)
        registry.register_farm(self.tracker, self.env, **FARM)
        self.assertEqual(self.transfers.transfers, [{"amount": 1000, "from": OWNER, "to": ORACLE}])

    def test_rejects_fee_without_oracle(self):
        result = oracle.set_logging_fee(self.tracker, 1000)

        self.assertFalse(result.ok)
        self.assertFalse(result.value)
        self.tracker.refresh_from_db()
        self.assertEqual(self.tracker.logging_fee, 500)

    def test_rejects_negative_fee(self):
        self.designate_oracle()

        self.assertFalse(oracle.set_logging_fee(self.tracker, -1).ok)


class OracleInputTest(TrackerTestCase):
    def test_blank_principal_is_not_an_oracle(self):
        result = oracle.set_oracle_contract(self.tracker, "")

        self.assertFalse(result.ok)
        self.tracker.refresh_from_db()
        self.assertIsNone(self.tracker.oracle_contract)
        registration = registry.register_farm(self.tracker, self.env, **FARM)
        self.assertEqual(registration.value, ErrorCode.ORACLE_NOT_VERIFIED)

    def test_blank_stored_oracle_counts_as_unset(self):
        TrackerState.objects.filter(pk=self.tracker.pk).update(oracle_contract="")

        result = registry.register_farm(self.tracker, self.env, **FARM)

        self.assertEqual(result.value, ErrorCode.ORACLE_NOT_VERIFIED)
        self.assertFalse(oracle.set_logging_fee(self.tracker, 1000).ok)

    def test_oversized_fee_is_rejected(self):
        self.designate_oracle()

        self.assertFalse(oracle.set_logging_fee(self.tracker, 2**64).ok)
        self.tracker.refresh_from_db()
        self.assertEqual(self.tracker.logging_fee, 500)
