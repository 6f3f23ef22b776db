import logging
from rest_framework import generics, status
from rest_framework.views import APIView
from rest_framework.response import Response
from django.contrib.auth import get_user_model, authenticate
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.authtoken.models import Token
from rest_framework.exceptions import AuthenticationFailed

from accounts.serializers import (
    MemberProfileSerializer,
    MemberSerializer,
    MemberStatusSerializer,
    UserLoginSerializer,
)
from accounts.services import MemberService
from savings.serializers import SavingsSerializer

logger = logging.getLogger(__name__)

Member = get_user_model()

"""
Authentication
"""


class TokenView(APIView):
    permission_classes = (AllowAny,)
    serializer_class = UserLoginSerializer

    def post(self, request, format=None):
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)

        member_number = serializer.validated_data["member_number"]
        password = serializer.validated_data["password"]

        member = authenticate(
            request, member_number=member_number, password=password
        )
        if not member:
            logger.warning(f"Failed login attempt for {member_number}")
            raise AuthenticationFailed("Unable to log in with provided credentials.")

        token, created = Token.objects.get_or_create(user=member)
        logger.info(f"Member {member.member_number} logged in")
        return Response(
            {
                **MemberSerializer(member).data,
                "last_login": member.last_login,
                "token": token.key,
            },
            status=status.HTTP_200_OK,
        )


class CurrentMemberView(generics.RetrieveAPIView):
    permission_classes = (IsAuthenticated,)
    serializer_class = MemberSerializer

    def get_object(self):
        return self.request.user


"""
Members
"""


class MemberListCreateView(generics.ListCreateAPIView):
    """
    GET  → admins and managers list every member, members only see themselves
    POST → admins and managers register a member
    """

    permission_classes = (IsAuthenticated,)
    serializer_class = MemberSerializer
    queryset = Member.objects.all()

    def get_queryset(self):
        queryset = super().get_queryset().select_related("savings")
        if not self.request.user.is_staff_member:
            return queryset.filter(pk=self.request.user.pk)

        status_filter = self.request.query_params.get("status")
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        role = self.request.query_params.get("role")
        if role:
            queryset = queryset.filter(role=role)
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        member = MemberService.register(request.user, **serializer.validated_data)
        return Response(
            self.get_serializer(member).data, status=status.HTTP_201_CREATED
        )


class MemberDetailView(generics.RetrieveUpdateAPIView):
    """
    GET   → a member's profile
    PATCH → admins and managers edit name, contact and identity details
    """

    permission_classes = (IsAuthenticated,)
    serializer_class = MemberSerializer
    http_method_names = ["get", "patch", "head", "options"]

    def get_object(self):
        return MemberService.get_visible_member(self.request.user, self.kwargs["id"])

    def update(self, request, *args, **kwargs):
        serializer = MemberProfileSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        member = MemberService.update(
            request.user, self.kwargs["id"], **serializer.validated_data
        )
        return Response(self.get_serializer(member).data, status=status.HTTP_200_OK)


class MemberStatusUpdateView(generics.GenericAPIView):
    """
    PATCH /members/<id>/status/
    Admins and managers freeze, deactivate or reactivate a member.
    """

    permission_classes = (IsAuthenticated,)
    serializer_class = MemberStatusSerializer

    def patch(self, request, id):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        member = MemberService.update_status(
            request.user, id, serializer.validated_data["status"]
        )
        return Response(
            {
                "detail": f"Member status updated to {member.status}.",
                "member": MemberSerializer(member).data,
            },
            status=status.HTTP_200_OK,
        )


class MemberSavingsView(generics.RetrieveAPIView):
    permission_classes = (IsAuthenticated,)
    serializer_class = SavingsSerializer

    def get_object(self):
        member = MemberService.get_visible_member(self.request.user, self.kwargs["id"])
        return member.savings
