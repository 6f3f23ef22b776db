from django.urls import path

from savings.views import SavingsListView, SavingsDetailView

app_name = "savings"

urlpatterns = [
    path("", SavingsListView.as_view(), name="savings-list"),
    path("<uuid:id>/", SavingsDetailView.as_view(), name="savings-detail"),
]
