from django.urls import path

from unfreezerequests.views import (
    UnfreezeRequestListCreateView,
    UnfreezeRequestRetrieveView,
    UnfreezeRequestProcessView,
)

app_name = "unfreezerequests"

urlpatterns = [
    path(
        "",
        UnfreezeRequestListCreateView.as_view(),
        name="unfreeze-request-list-create",
    ),
    path(
        "<uuid:id>/",
        UnfreezeRequestRetrieveView.as_view(),
        name="unfreeze-request-detail",
    ),
    path(
        "<uuid:id>/process/",
        UnfreezeRequestProcessView.as_view(),
        name="unfreeze-request-process",
    ),
]
