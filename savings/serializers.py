from rest_framework import serializers

from savings.models import Savings


class SavingsSerializer(serializers.ModelSerializer):
    member = serializers.UUIDField(source="member.id", read_only=True)
    member_number = serializers.CharField(
        source="member.member_number", read_only=True
    )

    class Meta:
        model = Savings
        fields = [
            "id",
            "member",
            "member_number",
            "balance",
            "last_updated",
            "reference",
            "created_at",
        ]
        read_only_fields = fields
