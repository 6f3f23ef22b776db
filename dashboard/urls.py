from django.urls import path

from dashboard import views

app_name = "dashboard"

urlpatterns = [
    path("stats/", views.DashboardStatsView.as_view(), name="dashboard-stats"),
    path(
        "loans-by-status/",
        views.LoansByStatusView.as_view(),
        name="dashboard-loans-by-status",
    ),
    path(
        "monthly-contributions/",
        views.MonthlyContributionsView.as_view(),
        name="dashboard-monthly-contributions",
    ),
    path(
        "savings-vs-loans/",
        views.SavingsVsLoansView.as_view(),
        name="dashboard-savings-vs-loans",
    ),
]
