from waterusage.application import ledger, registry
from waterusage.domain.rules import MAX_UINT
from waterusage.models import UsageLog
from waterusage.tests.base import FARM, ORACLE, OTHER_FARM, OWNER, STRANGER, TrackerTestCase


class LogUsageTest(TrackerTestCase):
    def setUp(self):
        super().setUp()
        self.designate_oracle()
        registry.register_farm(self.tracker, self.env, **FARM)

    def test_owner_logs_usage(self):
        result = ledger.log_usage(self.tracker, self.env, 0, 500, self.clock() + 1)

        self.assertTrue(result.ok)
        self.assertTrue(result.value)
        farm = registry.get_farm(self.tracker, 0)
        self.assertEqual(farm.total_usage, 500)
        self.assertEqual(farm.last_update, self.clock() + 1)

        entry = ledger.get_usage_log(self.tracker, 0, 0)
        self.assertEqual((entry.amount, entry.timestamp, entry.reporter), (500, 1, OWNER))

    def test_oracle_logs_on_behalf_of_owner(self):
        result = ledger.log_usage(self.tracker, self.env.as_caller(ORACLE), 0, 250, 3)

        self.assertTrue(result.ok)
        self.assertEqual(registry.get_farm(self.tracker, 0).total_usage, 250)
        self.assertEqual(ledger.get_usage_log(self.tracker, 0, 0).reporter, ORACLE)

    def test_rejects_third_party(self):
        result = ledger.log_usage(self.tracker, self.env.as_caller(STRANGER), 0, 500, 1)

        self.assertFalse(result.ok)
        self.assertFalse(result.value)
        self.assertEqual(registry.get_farm(self.tracker, 0).total_usage, 0)
        self.assertEqual(UsageLog.objects.count(), 0)

    def test_rejects_unknown_farm(self):
        result = ledger.log_usage(self.tracker, self.env, 5, 500, 1)

        self.assertFalse(result.ok)

    def test_rejects_non_positive_amount(self):
        result = ledger.log_usage(self.tracker, self.env, 0, 0, 1)

        self.assertFalse(result.ok)
        self.assertEqual(registry.get_farm(self.tracker, 0).total_usage, 0)

    def test_rejects_backdated_timestamp(self):
        self.clock.advance(10)

        result = ledger.log_usage(self.tracker, self.env, 0, 500, 9)

        self.assertFalse(result.ok)
        self.assertEqual(UsageLog.objects.count(), 0)

    def test_timestamp_defaults_to_clock(self):
        self.clock.advance(7)

        ledger.log_usage(self.tracker, self.env, 0, 500)

        self.assertEqual(registry.get_farm(self.tracker, 0).last_update, 7)

    def test_total_usage_is_sum_of_logs(self):
        for amount in (300, 200, 1000):
            self.assertTrue(ledger.log_usage(self.tracker, self.env, 0, amount, 1).ok)

        farm = registry.get_farm(self.tracker, 0)
        self.assertEqual(farm.total_usage, 1500)
        self.assertEqual(sum(farm.usage_logs.values_list("amount", flat=True)), 1500)

    def test_usage_may_exceed_quota(self):
        result = ledger.log_usage(self.tracker, self.env, 0, 12000, 1)

        self.assertTrue(result.ok)
        self.assertEqual(registry.calculate_remaining_quota(self.tracker, 0), -2000)

    def test_sequence_spans_all_farms(self):
        registry.register_farm(self.tracker, self.env.as_caller("ST4TEST"), **OTHER_FARM)

        ledger.log_usage(self.tracker, self.env, 0, 100, 1)
        ledger.log_usage(self.tracker, self.env.as_caller("ST4TEST"), 1, 200, 1)
        ledger.log_usage(self.tracker, self.env, 0, 300, 1)

        self.assertEqual(ledger.get_usage_log(self.tracker, 0, 0).amount, 100)
        self.assertEqual(ledger.get_usage_log(self.tracker, 1, 1).amount, 200)
        self.assertEqual(ledger.get_usage_log(self.tracker, 0, 2).amount, 300)
        self.assertIsNone(ledger.get_usage_log(self.tracker, 0, 1))


class OversizedUsageTest(TrackerTestCase):
    def setUp(self):
        super().setUp()
        self.designate_oracle()
        registry.register_farm(self.tracker, self.env, **FARM)

    def test_oversized_amount_is_coarse_failure(self):
        result = ledger.log_usage(self.tracker, self.env, 0, 2**64, 1)

        self.assertEqual((result.ok, result.value), (False, False))
        self.assertEqual(UsageLog.objects.count(), 0)

    def test_oversized_timestamp_is_coarse_failure(self):
        result = ledger.log_usage(self.tracker, self.env, 0, 500, 2**64)

        self.assertFalse(result.ok)
        self.assertEqual(registry.get_farm(self.tracker, 0).last_update, 0)

    def test_total_usage_cannot_overflow(self):
        self.assertTrue(ledger.log_usage(self.tracker, self.env, 0, MAX_UINT, 1).ok)

        result = ledger.log_usage(self.tracker, self.env, 0, 1, 1)

        self.assertFalse(result.ok)
        self.assertEqual(registry.get_farm(self.tracker, 0).total_usage, MAX_UINT)

    def test_out_of_range_ids_are_unknown(self):
        self.assertFalse(ledger.log_usage(self.tracker, self.env, 2**64, 500, 1).ok)
        self.assertIsNone(ledger.get_usage_log(self.tracker, 0, 2**64))
