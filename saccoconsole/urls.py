from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/v1/auth/", include("accounts.auth_urls")),
    path("api/v1/members/", include("accounts.urls")),
    path("api/v1/savings/", include("savings.urls")),
    path("api/v1/transactions/", include("transactions.urls")),
    path("api/v1/loans/", include("loans.urls")),
    path("api/v1/repayments/", include("loanrepayments.urls")),
    path("api/v1/unfreeze-requests/", include("unfreezerequests.urls")),
    path("api/v1/dashboard/", include("dashboard.urls")),
]
