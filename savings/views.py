from rest_framework import generics
from rest_framework.permissions import IsAuthenticated

from savings.models import Savings
from savings.serializers import SavingsSerializer


class SavingsListView(generics.ListAPIView):
    queryset = Savings.objects.all()
    serializer_class = SavingsSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_queryset(self):
        queryset = self.queryset.select_related("member")
        if not self.request.user.is_staff_member:
            queryset = queryset.filter(member=self.request.user)
        return queryset


class SavingsDetailView(generics.RetrieveAPIView):
    queryset = Savings.objects.all()
    serializer_class = SavingsSerializer
    permission_classes = [
        IsAuthenticated,
    ]
    lookup_field = "id"

    def get_queryset(self):
        queryset = self.queryset.select_related("member")
        if not self.request.user.is_staff_member:
            queryset = queryset.filter(member=self.request.user)
        return queryset
