from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.services import MemberService
from loans.models import Loan
from loans.serializers import LoanSerializer, LoanStatusUpdateSerializer
from loans.services import LoanService


class LoanListCreateView(generics.ListCreateAPIView):
    """
    GET  → admins and managers see every loan, members their own; ?member= ?status=
    POST → members request a loan for themselves, staff originate for anyone
    """

    queryset = Loan.objects.all()
    serializer_class = LoanSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_queryset(self):
        queryset = self.queryset.select_related("member", "approved_by").prefetch_related(
            "repayments"
        )
        if not self.request.user.is_staff_member:
            queryset = queryset.filter(member=self.request.user)

        member = self.request.query_params.get("member")
        status_filter = self.request.query_params.get("status")
        try:
            if member:
                queryset = queryset.filter(member_id=member)
        except (ValueError, DjangoValidationError):
            raise ValidationError({"member": "Invalid member identifier."})
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        loan = LoanService.originate(
            request.user,
            member=(
                MemberService.get_member(data["member_id"])
                if data.get("member_id")
                else request.user
            ),
            principal=data["principal"],
            interest_rate=data["interest_rate"],
            term_months=data["term_months"],
            intended_purpose=data.get("intended_purpose"),
            loan_number=data.get("loan_number"),
        )
        return Response(self.get_serializer(loan).data, status=status.HTTP_201_CREATED)


class LoanDetailView(generics.RetrieveAPIView):
    serializer_class = LoanSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_object(self):
        return LoanService.get_visible_loan(self.request.user, self.kwargs["id"])


class MemberLoanListView(generics.ListAPIView):
    serializer_class = LoanSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_queryset(self):
        member = MemberService.get_visible_member(self.request.user, self.kwargs["id"])
        return (
            Loan.objects.filter(member=member)
            .select_related("member", "approved_by")
            .prefetch_related("repayments")
        )


class LoanStatusUpdateView(generics.GenericAPIView):
    """
    PATCH /loans/<id>/status/
    Admins and managers move a loan forward, e.g. to overdue or defaulted.
    """

    serializer_class = LoanStatusUpdateSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def patch(self, request, id):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        loan = LoanService.transition(
            request.user, id, serializer.validated_data["status"]
        )
        return loan_status_response(loan)


class LoanActionView(generics.GenericAPIView):
    """POST /loans/<id>/approve|reject|disburse/"""

    permission_classes = [
        IsAuthenticated,
    ]
    loan_action = None

    def post(self, request, id):
        loan = getattr(LoanService, self.loan_action)(request.user, id)
        return loan_status_response(loan)


def loan_status_response(loan):
    return Response(
        {
            "detail": f"Loan {loan.loan_number} is now {loan.status}.",
            "loan": LoanSerializer(loan).data,
        },
        status=status.HTTP_200_OK,
    )
