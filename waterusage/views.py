"""
API Layer — Water Usage Tracker Endpoints (Django REST Framework)

Thin controllers over the application use cases. Their responsibilities are
limited to:

- Type coercion of the request body through serializers
- Resolving the tracker and building the caller's Environment
- Translating Result values into HTTP responses

No business rules are implemented here. The calling principal is taken from
the X-Principal header; identity verification is the job of whatever sits in
front of this service.

Status mapping:

- registration failures return 422 with the error name and numeric code
- usage, update, oracle and fee failures return 422 with {"ok": false}, the
  same coarse signal the use cases give
- unknown farms on read endpoints return 404
"""

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from waterusage.application import ledger, oracle, registry
from waterusage.domain.exceptions import ErrorCode
from waterusage.environment import Environment
from waterusage.models import TrackerState
from waterusage.serializers import (
    FarmParametersSerializer,
    FarmRegistrationSerializer,
    FarmSerializer,
    LoggingFeeSerializer,
    OracleContractSerializer,
    UsageLogSerializer,
)

PRINCIPAL_HEADER = "X-Principal"


def error_name(code):
    try:
        return ErrorCode(code).name
    except ValueError:
        return "TRANSFER_FAILED"


class TrackerView(APIView):
    """Base view: resolves the tracker and the caller's environment."""

    def get_tracker(self):
        return TrackerState.objects.primary()

    def get_environment(self, request):
        caller = request.headers.get(PRINCIPAL_HEADER)
        if not caller:
            raise ValidationError({"error": f"{PRINCIPAL_HEADER} header is required."})
        return Environment.from_settings(caller)

    def coarse_response(self, result):
        if result.ok:
            return Response({"ok": True}, status=status.HTTP_200_OK)
        return Response({"ok": False}, status=status.HTTP_422_UNPROCESSABLE_ENTITY)


class OracleContractView(TrackerView):
    """
    POST /api/tracker/oracle/
    GET  /api/tracker/oracle/<principal>/
    """

    def post(self, request):
        serializer = OracleContractSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = oracle.set_oracle_contract(
            self.get_tracker(), serializer.validated_data["principal"]
        )
        return self.coarse_response(result)

    def get(self, request, principal):
        env = Environment.from_settings(request.headers.get(PRINCIPAL_HEADER))
        result = oracle.is_verified_oracle(env, principal)
        return Response({"principal": principal, "verified": result.value})


class LoggingFeeView(TrackerView):
    """POST /api/tracker/fee/"""

    def post(self, request):
        serializer = LoggingFeeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = oracle.set_logging_fee(
            self.get_tracker(), serializer.validated_data["amount"]
        )
        return self.coarse_response(result)


class FarmRegistrationView(TrackerView):
    """POST /api/tracker/farms/"""

    def post(self, request):
        env = self.get_environment(request)
        serializer = FarmRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = registry.register_farm(
            self.get_tracker(), env, **serializer.validated_data
        )
        if not result.ok:
            return Response(
                {"error": error_name(result.value), "code": int(result.value)},
                status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )
        return Response({"farm_id": result.value}, status=status.HTTP_201_CREATED)


class FarmDetailView(TrackerView):
    """GET /api/tracker/farms/<farm_id>/"""

    def get(self, request, farm_id):
        farm = registry.get_farm(self.get_tracker(), farm_id)
        if farm is None:
            return Response(
                {"error": "Farm not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(FarmSerializer(farm).data)


class FarmCountView(TrackerView):
    """GET /api/tracker/farms/count/"""

    def get(self, request):
        return Response({"count": registry.get_farm_count(self.get_tracker())})


class FarmUsageView(TrackerView):
    """POST /api/tracker/farms/<farm_id>/usage/"""

    def post(self, request, farm_id):
        env = self.get_environment(request)
        serializer = UsageLogSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ledger.log_usage(
            self.get_tracker(),
            env,
            farm_id,
            serializer.validated_data["amount"],
            serializer.validated_data.get("timestamp"),
        )
        return self.coarse_response(result)


class FarmParametersView(TrackerView):
    """POST /api/tracker/farms/<farm_id>/update/"""

    def post(self, request, farm_id):
        env = self.get_environment(request)
        serializer = FarmParametersSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = registry.update_farm(
            self.get_tracker(),
            env,
            farm_id,
            serializer.validated_data["quota"],
            serializer.validated_data["efficiency_rate"],
        )
        return self.coarse_response(result)


class RemainingQuotaView(TrackerView):
    """GET /api/tracker/farms/<farm_id>/remaining/"""

    def get(self, request, farm_id):
        remaining = registry.calculate_remaining_quota(self.get_tracker(), farm_id)
        return Response({"farm_id": farm_id, "remaining_quota": remaining})


class OwnerExistenceView(TrackerView):
    """GET /api/tracker/owners/<owner>/"""

    def get(self, request, owner):
        registered = registry.check_farm_existence(self.get_tracker(), owner)
        return Response({"owner": owner, "registered": registered})
