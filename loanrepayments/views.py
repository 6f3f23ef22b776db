from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from loanrepayments.models import Repayment
from loanrepayments.serializers import RepaymentSerializer
from loanrepayments.services import RepaymentService
from loans.services import LoanService


class RepaymentListCreateView(generics.ListCreateAPIView):
    """
    GET  → repayments, newest first; ?loan=
    POST → admins and managers apply a repayment to a loan
    """

    queryset = Repayment.objects.all()
    serializer_class = RepaymentSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_queryset(self):
        queryset = self.queryset.select_related(
            "loan", "loan__member", "processed_by"
        )
        if not self.request.user.is_staff_member:
            queryset = queryset.filter(loan__member=self.request.user)

        loan = self.request.query_params.get("loan")
        if loan:
            try:
                queryset = queryset.filter(loan_id=loan)
            except (ValueError, DjangoValidationError):
                raise ValidationError({"loan": "Invalid loan identifier."})
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        repayment = RepaymentService.apply(
            request.user,
            loan_id=data["loan_id"],
            amount=data["amount"],
            payment_method=data.get("payment_method", Repayment.CASH),
            notes=data.get("notes"),
        )
        return Response(
            self.get_serializer(repayment).data, status=status.HTTP_201_CREATED
        )


class RepaymentDetailView(generics.RetrieveAPIView):
    queryset = Repayment.objects.all()
    serializer_class = RepaymentSerializer
    permission_classes = [
        IsAuthenticated,
    ]
    lookup_field = "id"

    def get_queryset(self):
        queryset = self.queryset.select_related("loan", "loan__member", "processed_by")
        if not self.request.user.is_staff_member:
            queryset = queryset.filter(loan__member=self.request.user)
        return queryset


class LoanRepaymentListView(generics.ListAPIView):
    serializer_class = RepaymentSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_queryset(self):
        loan = LoanService.get_visible_loan(self.request.user, self.kwargs["id"])
        return Repayment.objects.filter(loan=loan).select_related(
            "loan", "loan__member", "processed_by"
        )
