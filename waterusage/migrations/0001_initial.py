from django.db import migrations, models
import django.db.models.deletion
import waterusage.conf


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="TrackerState",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("next_id", models.PositiveBigIntegerField(default=0)),
                ("max_logs", models.PositiveBigIntegerField(default=waterusage.conf.default_max_logs)),
                ("logging_fee", models.PositiveBigIntegerField(default=waterusage.conf.default_logging_fee)),
                ("oracle_contract", models.CharField(blank=True, max_length=128, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
        ),
        migrations.CreateModel(
            name="Farm",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("farm_id", models.PositiveBigIntegerField()),
                ("owner", models.CharField(max_length=128)),
                ("quota", models.PositiveBigIntegerField()),
                ("total_usage", models.PositiveBigIntegerField(default=0)),
                ("last_update", models.PositiveBigIntegerField()),
                ("efficiency_rate", models.PositiveSmallIntegerField()),
                ("period", models.PositiveBigIntegerField()),
                ("location", models.CharField(max_length=100)),
                ("unit", models.CharField(choices=[("liters", "liters"), ("gallons", "gallons"), ("cubic-meters", "cubic-meters")], max_length=16)),
                ("status", models.BooleanField(default=True)),
                ("min_usage", models.PositiveBigIntegerField()),
                ("max_usage", models.PositiveBigIntegerField()),
                ("usage_type", models.CharField(choices=[("irrigation", "irrigation"), ("domestic", "domestic"), ("industrial", "industrial")], max_length=16)),
                ("grace_period", models.PositiveSmallIntegerField()),
                ("tracker", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="farms", to="waterusage.trackerstate")),
            ],
            options={
                "ordering": ("tracker", "farm_id"),
            },
        ),
        migrations.CreateModel(
            name="FarmUpdate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("update_quota", models.PositiveBigIntegerField()),
                ("update_efficiency_rate", models.PositiveSmallIntegerField()),
                ("update_timestamp", models.PositiveBigIntegerField()),
                ("updater", models.CharField(max_length=128)),
                ("farm", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="latest_update", to="waterusage.farm")),
            ],
        ),
        migrations.CreateModel(
            name="UsageLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("sequence", models.PositiveBigIntegerField()),
                ("amount", models.PositiveBigIntegerField()),
                ("timestamp", models.PositiveBigIntegerField()),
                ("reporter", models.CharField(max_length=128)),
                ("farm", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="usage_logs", to="waterusage.farm")),
                ("tracker", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="usage_logs", to="waterusage.trackerstate")),
            ],
            options={
                "ordering": ("tracker", "sequence"),
            },
        ),
        migrations.CreateModel(
            name="FeeTransfer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("amount", models.PositiveBigIntegerField()),
                ("payer", models.CharField(max_length=128)),
                ("payee", models.CharField(max_length=128)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("tracker", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="fee_transfers", to="waterusage.trackerstate")),
            ],
        ),
        migrations.AddConstraint(
            model_name="farm",
            constraint=models.UniqueConstraint(fields=("tracker", "farm_id"), name="uq_farm_id_per_tracker"),
        ),
        migrations.AddConstraint(
            model_name="farm",
            constraint=models.UniqueConstraint(fields=("tracker", "owner"), name="uq_farm_owner_per_tracker"),
        ),
        migrations.AddConstraint(
            model_name="usagelog",
            constraint=models.UniqueConstraint(fields=("farm", "sequence"), name="uq_usage_log_key"),
        ),
    ]
