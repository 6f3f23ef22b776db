from django.contrib.auth import get_user_model
from rest_framework import serializers

Member = get_user_model()


class MemberSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(required=False, allow_null=True, allow_blank=True)
    national_id = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=50
    )
    password = serializers.CharField(
        max_length=128, min_length=5, write_only=True, required=False
    )
    savings_balance = serializers.DecimalField(
        source="savings.balance", max_digits=15, decimal_places=2, read_only=True
    )

    class Meta:
        model = Member
        fields = (
            "id",
            "member_number",
            "first_name",
            "last_name",
            "email",
            "phone",
            "national_id",
            "address",
            "role",
            "status",
            "date_joined",
            "is_active",
            "password",
            "savings_balance",
            "reference",
            "created_at",
            "updated_at",
        )
        read_only_fields = (
            "id",
            "date_joined",
            "reference",
            "created_at",
            "updated_at",
        )
        # Uniqueness is checked by MemberService so duplicates surface as conflicts.
        extra_kwargs = {
            "member_number": {"required": False, "validators": []},
        }

    def validate_email(self, value):
        return value or None

    def validate_national_id(self, value):
        return value or None


class MemberProfileSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(required=False, allow_null=True, allow_blank=True)
    national_id = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=50
    )

    class Meta:
        model = Member
        fields = (
            "first_name",
            "last_name",
            "email",
            "phone",
            "national_id",
            "address",
        )

    def validate_email(self, value):
        return value or None

    def validate_national_id(self, value):
        return value or None


class MemberStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Member.STATUS_CHOICES)


class UserLoginSerializer(serializers.Serializer):
    member_number = serializers.CharField(required=True)
    password = serializers.CharField(required=True, write_only=True)
