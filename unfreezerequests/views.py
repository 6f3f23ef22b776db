from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsAdmin
from accounts.services import MemberService
from unfreezerequests.models import UnfreezeRequest
from unfreezerequests.serializers import (
    UnfreezeRequestSerializer,
    UnfreezeDecisionSerializer,
)
from unfreezerequests.services import UnfreezeRequestService


class UnfreezeRequestListCreateView(generics.ListCreateAPIView):
    """
    POST → frozen member files a request
    GET  → admins and managers see every request (?status=), members their own
    """

    queryset = UnfreezeRequest.objects.all()
    serializer_class = UnfreezeRequestSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        queryset = self.queryset.select_related("member", "processed_by")
        if not self.request.user.is_staff_member:
            queryset = queryset.filter(member=self.request.user)

        status_filter = self.request.query_params.get("status")
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        unfreeze_request = UnfreezeRequestService.file(
            request.user, serializer.validated_data["reason"]
        )
        return Response(
            self.get_serializer(unfreeze_request).data,
            status=status.HTTP_201_CREATED,
        )


class UnfreezeRequestRetrieveView(generics.RetrieveAPIView):
    serializer_class = UnfreezeRequestSerializer
    permission_classes = [IsAuthenticated]
    lookup_field = "id"

    def get_queryset(self):
        queryset = UnfreezeRequest.objects.select_related("member", "processed_by")
        if not self.request.user.is_staff_member:
            queryset = queryset.filter(member=self.request.user)
        return queryset


class UnfreezeRequestProcessView(generics.GenericAPIView):
    """
    PATCH /unfreeze-requests/<id>/process/
    Only admins approve or deny
    """

    serializer_class = UnfreezeDecisionSerializer
    permission_classes = (IsAdmin,)

    def patch(self, request, id):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        unfreeze_request = UnfreezeRequestService.process(
            request.user,
            id,
            serializer.validated_data["status"],
            admin_notes=serializer.validated_data.get("admin_notes"),
        )
        return Response(
            {
                "detail": f"Unfreeze request {unfreeze_request.status}.",
                "request": UnfreezeRequestSerializer(unfreeze_request).data,
            },
            status=status.HTTP_200_OK,
        )


class MemberUnfreezeRequestListView(generics.ListAPIView):
    serializer_class = UnfreezeRequestSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        member = MemberService.get_visible_member(self.request.user, self.kwargs["id"])
        return UnfreezeRequest.objects.filter(member=member).select_related(
            "member", "processed_by"
        )
