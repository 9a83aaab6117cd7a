from rest_framework import serializers

from waterusage.domain.rules import MAX_UINT
from waterusage.models import Farm, FarmUpdate

# Input serializers only coerce types and keep integers within column range.
# Range and membership checks belong to the domain rules so that callers
# receive the tracker's own error codes.


class OracleContractSerializer(serializers.Serializer):
    principal = serializers.CharField(max_length=128)


class LoggingFeeSerializer(serializers.Serializer):
    amount = serializers.IntegerField(max_value=MAX_UINT)


class FarmRegistrationSerializer(serializers.Serializer):
    quota = serializers.IntegerField(max_value=MAX_UINT)
    efficiency_rate = serializers.IntegerField(max_value=MAX_UINT)
    period = serializers.IntegerField(max_value=MAX_UINT)
    location = serializers.CharField(allow_blank=True, trim_whitespace=False)
    unit = serializers.CharField()
    min_usage = serializers.IntegerField(max_value=MAX_UINT)
    max_usage = serializers.IntegerField(max_value=MAX_UINT)
    usage_type = serializers.CharField()
    grace_period = serializers.IntegerField(max_value=MAX_UINT)


class UsageLogSerializer(serializers.Serializer):
    amount = serializers.IntegerField(max_value=MAX_UINT)
    timestamp = serializers.IntegerField(max_value=MAX_UINT, required=False)


class FarmParametersSerializer(serializers.Serializer):
    quota = serializers.IntegerField(max_value=MAX_UINT)
    efficiency_rate = serializers.IntegerField(max_value=MAX_UINT)


class FarmUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = FarmUpdate
        fields = ["update_quota", "update_efficiency_rate", "update_timestamp", "updater"]


class FarmSerializer(serializers.ModelSerializer):
    remaining_quota = serializers.IntegerField(read_only=True)
    latest_update = serializers.SerializerMethodField()

    class Meta:
        model = Farm
        fields = [
            "farm_id", "owner", "quota", "total_usage", "remaining_quota",
            "last_update", "efficiency_rate", "period", "location", "unit",
            "status", "min_usage", "max_usage", "usage_type", "grace_period",
            "latest_update",
        ]

    def get_latest_update(self, farm):
        try:
            return FarmUpdateSerializer(farm.latest_update).data
        except FarmUpdate.DoesNotExist:
            return None
