from rest_framework import serializers

from unfreezerequests.models import UnfreezeRequest


class UnfreezeRequestSerializer(serializers.ModelSerializer):
    member = serializers.UUIDField(source="member.id", read_only=True)
    member_number = serializers.CharField(
        source="member.member_number", read_only=True
    )
    member_name = serializers.CharField(source="member.get_full_name", read_only=True)
    member_status = serializers.CharField(source="member.status", read_only=True)
    processed_by = serializers.UUIDField(source="processed_by_id", read_only=True)

    class Meta:
        model = UnfreezeRequest
        fields = [
            "id",
            "member",
            "member_number",
            "member_name",
            "member_status",
            "reason",
            "requested_at",
            "status",
            "processed_by",
            "admin_notes",
            "processed_at",
            "reference",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "requested_at",
            "status",
            "admin_notes",
            "processed_at",
            "reference",
            "created_at",
            "updated_at",
        ]


class UnfreezeDecisionSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=UnfreezeRequest.DECISIONS)
    admin_notes = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )
