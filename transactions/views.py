import csv
import io
import logging
from datetime import datetime

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import HttpResponse
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsAdminOrManager
from accounts.services import MemberService
from loans.services import LoanService
from transactions.models import Transaction
from transactions.serializers import TransactionSerializer
from transactions.services import TransactionService

logger = logging.getLogger(__name__)


def filter_transactions(queryset, params):
    member = params.get("member")
    if member:
        queryset = queryset.filter(member_id=member)
    loan = params.get("loan")
    if loan:
        queryset = queryset.filter(loan_id=loan)
    type = params.get("type")
    if type:
        queryset = queryset.filter(type=type)
    return queryset


def parse_limit(params):
    limit = params.get("limit")
    if limit in (None, ""):
        return None
    try:
        limit = int(limit)
    except ValueError:
        raise ValidationError({"limit": "Limit must be a whole number."})
    if limit < 1:
        raise ValidationError({"limit": "Limit must be at least 1."})
    return limit


class TransactionListCreateView(generics.ListCreateAPIView):
    """
    GET  → ledger, newest first; ?member= ?loan= ?type= ?limit=
    POST → admins and managers record a deposit, withdrawal or fee
    """

    queryset = Transaction.objects.all()
    serializer_class = TransactionSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_queryset(self):
        queryset = self.queryset.select_related("member", "loan")
        if not self.request.user.is_staff_member:
            queryset = queryset.filter(member=self.request.user)
        try:
            queryset = filter_transactions(queryset, self.request.query_params)
        except (ValueError, DjangoValidationError):
            raise ValidationError({"detail": "Invalid filter identifier."})
        limit = parse_limit(self.request.query_params)
        if limit:
            queryset = queryset[:limit]
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        member_id = data.pop("member_id", None)
        loan_id = data.pop("loan_id", None)
        entry = TransactionService.record(
            request.user,
            member=MemberService.get_member(member_id) if member_id else None,
            loan=LoanService.get_loan(loan_id) if loan_id else None,
            **data,
        )
        return Response(
            self.get_serializer(entry).data, status=status.HTTP_201_CREATED
        )


class TransactionDetailView(generics.RetrieveAPIView):
    queryset = Transaction.objects.all()
    serializer_class = TransactionSerializer
    permission_classes = [
        IsAuthenticated,
    ]
    lookup_field = "id"

    def get_queryset(self):
        queryset = self.queryset.select_related("member", "loan")
        if not self.request.user.is_staff_member:
            queryset = queryset.filter(member=self.request.user)
        return queryset


class MemberTransactionListView(generics.ListAPIView):
    serializer_class = TransactionSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_queryset(self):
        member = MemberService.get_visible_member(self.request.user, self.kwargs["id"])
        return Transaction.objects.filter(member=member).select_related(
            "member", "loan"
        )


class TransactionListDownloadView(generics.ListAPIView):
    """Download the ledger as CSV; accepts the same filters as the list."""

    serializer_class = TransactionSerializer
    permission_classes = (IsAdminOrManager,)

    def get_queryset(self):
        queryset = Transaction.objects.select_related("member", "loan")
        try:
            return filter_transactions(queryset, self.request.query_params)
        except (ValueError, DjangoValidationError):
            raise ValidationError({"detail": "Invalid filter identifier."})

    def get(self, request, *args, **kwargs):
        headers = [
            "Reference",
            "Date",
            "Type",
            "Amount",
            "Member Number",
            "Member Name",
            "Loan Number",
            "Description",
            "Processed By",
        ]
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=headers, lineterminator="\n")
        writer.writeheader()

        count = 0
        for entry in self.get_queryset():
            writer.writerow(
                {
                    "Reference": entry.reference,
                    "Date": entry.transaction_date.strftime("%Y-%m-%d %H:%M:%S"),
                    "Type": entry.type,
                    "Amount": f"{entry.amount:.2f}",
                    "Member Number": entry.member.member_number if entry.member else "",
                    "Member Name": entry.member.get_full_name() if entry.member else "",
                    "Loan Number": entry.loan.loan_number if entry.loan else "",
                    "Description": entry.description,
                    "Processed By": entry.processed_by,
                }
            )
            count += 1

        file_name = f"transactions_{datetime.now():%Y%m%d}.csv"
        logger.info(
            f"{request.user.member_number} downloaded {count} transactions as {file_name}"
        )

        response = HttpResponse(buffer.getvalue(), content_type="text/csv")
        response["Content-Disposition"] = f'attachment; filename="{file_name}"'
        return response
