"""
Persistence Models — Water Usage Tracker (Django ORM)

TrackerState is the aggregate every operation receives explicitly. It holds
the registry counters and configuration; farms, their latest parameter
update, usage logs and fee transfers hang off it through foreign keys.

Key decisions:

- farm_id is allocated from TrackerState.next_id, so identifiers are
  sequential per tracker and independent of the database primary key.
- A UNIQUE constraint on (tracker, owner) is the owner -> farm reverse index
  and enforces one farm per owner at the persistence layer.
- FarmUpdate is one-to-one with Farm: each update replaces the previous record.
- UsageLog is unique on (farm, sequence); rows are never modified.
- Timestamps are block heights supplied by the environment clock, stored as
  integers rather than datetimes.
"""

from django.db import models

from waterusage import conf
from waterusage.domain.rules import ALLOWED_UNITS, ALLOWED_USAGE_TYPES

PRINCIPAL_MAX_LENGTH = 128


class TrackerStateManager(models.Manager):
    def primary(self):
        """The tracker served over HTTP; created on first use."""
        tracker = self.order_by("id").first()
        if tracker is None:
            tracker = self.create()
        return tracker

    def lock(self, tracker):
        """Re-read ``tracker`` holding a row lock until the transaction ends."""
        return self.select_for_update().get(pk=tracker.pk)


class TrackerState(models.Model):
    next_id = models.PositiveBigIntegerField(default=0)
    # Ceiling on the number of farms ever registered.
    max_logs = models.PositiveBigIntegerField(default=conf.default_max_logs)
    logging_fee = models.PositiveBigIntegerField(default=conf.default_logging_fee)
    oracle_contract = models.CharField(
        max_length=PRINCIPAL_MAX_LENGTH, null=True, blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TrackerStateManager()

    def __str__(self):
        return f"Tracker {self.id} - Farms: {self.next_id}/{self.max_logs}"


class Farm(models.Model):
    tracker = models.ForeignKey(
        TrackerState,
        on_delete=models.CASCADE,
        related_name="farms"
    )
    farm_id = models.PositiveBigIntegerField()
    owner = models.CharField(max_length=PRINCIPAL_MAX_LENGTH)
    quota = models.PositiveBigIntegerField()
    total_usage = models.PositiveBigIntegerField(default=0)
    last_update = models.PositiveBigIntegerField()
    efficiency_rate = models.PositiveSmallIntegerField()
    period = models.PositiveBigIntegerField()
    location = models.CharField(max_length=100)
    unit = models.CharField(
        max_length=16,
        choices=[(unit, unit) for unit in ALLOWED_UNITS]
    )
    # Always true; nothing deactivates a farm.
    status = models.BooleanField(default=True)
    min_usage = models.PositiveBigIntegerField()
    max_usage = models.PositiveBigIntegerField()
    usage_type = models.CharField(
        max_length=16,
        choices=[(usage_type, usage_type) for usage_type in ALLOWED_USAGE_TYPES]
    )
    grace_period = models.PositiveSmallIntegerField()

    class Meta:
        ordering = ("tracker", "farm_id")
        constraints = [
            models.UniqueConstraint(
                fields=("tracker", "farm_id"), name="uq_farm_id_per_tracker"
            ),
            models.UniqueConstraint(
                fields=("tracker", "owner"), name="uq_farm_owner_per_tracker"
            ),
        ]

    @property
    def remaining_quota(self):
        # May be negative: usage is never blocked at the quota.
        return self.quota - self.total_usage

    def __str__(self):
        return f"Farm {self.farm_id} - Usage: {self.total_usage}/{self.quota} {self.unit}"


class FarmUpdate(models.Model):
    farm = models.OneToOneField(
        Farm,
        on_delete=models.CASCADE,
        related_name="latest_update"
    )
    update_quota = models.PositiveBigIntegerField()
    update_efficiency_rate = models.PositiveSmallIntegerField()
    update_timestamp = models.PositiveBigIntegerField()
    updater = models.CharField(max_length=PRINCIPAL_MAX_LENGTH)

    def __str__(self):
        return f"Update of farm {self.farm_id} by {self.updater}"


class UsageLog(models.Model):
    tracker = models.ForeignKey(
        TrackerState,
        on_delete=models.CASCADE,
        related_name="usage_logs"
    )
    farm = models.ForeignKey(
        Farm,
        on_delete=models.CASCADE,
        related_name="usage_logs"
    )
    # Number of logs the tracker held when this one was written.
    sequence = models.PositiveBigIntegerField()
    amount = models.PositiveBigIntegerField()
    timestamp = models.PositiveBigIntegerField()
    reporter = models.CharField(max_length=PRINCIPAL_MAX_LENGTH)

    class Meta:
        ordering = ("tracker", "sequence")
        constraints = [
            models.UniqueConstraint(
                fields=("farm", "sequence"), name="uq_usage_log_key"
            ),
        ]

    def __str__(self):
        return f"Usage {self.sequence} - {self.amount}"


class FeeTransfer(models.Model):
    tracker = models.ForeignKey(
        TrackerState,
        on_delete=models.CASCADE,
        related_name="fee_transfers"
    )
    amount = models.PositiveBigIntegerField()
    payer = models.CharField(max_length=PRINCIPAL_MAX_LENGTH)
    payee = models.CharField(max_length=PRINCIPAL_MAX_LENGTH)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Fee {self.amount} {self.payer} -> {self.payee}"
