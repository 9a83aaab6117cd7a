from django.urls import path
from .views import (
    FarmCountView,
    FarmDetailView,
    FarmParametersView,
    FarmRegistrationView,
    FarmUsageView,
    LoggingFeeView,
    OracleContractView,
    OwnerExistenceView,
    RemainingQuotaView,
)

urlpatterns = [
    path("oracle/", OracleContractView.as_view(), name="oracle-contract"),
    path("oracle/<str:principal>/", OracleContractView.as_view(), name="oracle-verification"),
    path("fee/", LoggingFeeView.as_view(), name="logging-fee"),
    path("farms/", FarmRegistrationView.as_view(), name="register-farm"),
    path("farms/count/", FarmCountView.as_view(), name="farm-count"),
    path("farms/<int:farm_id>/", FarmDetailView.as_view(), name="farm-detail"),
    path("farms/<int:farm_id>/usage/", FarmUsageView.as_view(), name="log-usage"),
    path("farms/<int:farm_id>/update/", FarmParametersView.as_view(), name="update-farm"),
    path("farms/<int:farm_id>/remaining/", RemainingQuotaView.as_view(), name="remaining-quota"),
    path("owners/<str:owner>/", OwnerExistenceView.as_view(), name="owner-existence"),
]
