from django.urls import include, path

urlpatterns = [
    path("api/tracker/", include("waterusage.urls")),
]
