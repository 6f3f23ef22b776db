from django.urls import path

from loans.views import (
    LoanListCreateView,
    LoanDetailView,
    LoanStatusUpdateView,
    LoanActionView,
)
from loanrepayments.views import LoanRepaymentListView

app_name = "loans"

urlpatterns = [
    path("", LoanListCreateView.as_view(), name="loan-list-create"),
    path("<uuid:id>/", LoanDetailView.as_view(), name="loan-detail"),
    path("<uuid:id>/status/", LoanStatusUpdateView.as_view(), name="loan-status"),
    path(
        "<uuid:id>/approve/",
        LoanActionView.as_view(loan_action="approve"),
        name="loan-approve",
    ),
    path(
        "<uuid:id>/reject/",
        LoanActionView.as_view(loan_action="reject"),
        name="loan-reject",
    ),
    path(
        "<uuid:id>/disburse/",
        LoanActionView.as_view(loan_action="disburse"),
        name="loan-disburse",
    ),
    path(
        "<uuid:id>/repayments/",
        LoanRepaymentListView.as_view(),
        name="loan-repayments",
    ),
]
