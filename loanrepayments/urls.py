from django.urls import path

from loanrepayments.views import RepaymentListCreateView, RepaymentDetailView

app_name = "loanrepayments"

urlpatterns = [
    path("", RepaymentListCreateView.as_view(), name="repayment-list-create"),
    path("<uuid:id>/", RepaymentDetailView.as_view(), name="repayment-detail"),
]
