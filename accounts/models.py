from django.contrib.auth.models import (
    AbstractBaseUser,
    BaseUserManager,
    PermissionsMixin,
)
from django.db import models
from django.utils import timezone

from accounts.abstracts import (
    UniversalIdModel,
    TimeStampedModel,
    ReferenceModel,
)
from accounts.utils import generate_member_number


class MemberManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, member_number, password, **extra_fields):
        if not member_number:
            member_number = generate_member_number()
        email = extra_fields.get("email")
        extra_fields["email"] = self.normalize_email(email) if email else None
        user = self.model(member_number=member_number, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, member_number=None, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("is_active", True)

        return self._create_user(member_number, password, **extra_fields)

    def create_superuser(self, member_number, password, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", Member.ROLE_ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(member_number, password, **extra_fields)


class Member(
    AbstractBaseUser,
    PermissionsMixin,
    UniversalIdModel,
    TimeStampedModel,
    ReferenceModel,
):
    ROLE_MEMBER = "member"
    ROLE_MANAGER = "manager"
    ROLE_ADMIN = "admin"
    ROLE_CHOICES = [
        (ROLE_MEMBER, "Member"),
        (ROLE_MANAGER, "Manager"),
        (ROLE_ADMIN, "Admin"),
    ]

    STATUS_ACTIVE = "active"
    STATUS_INACTIVE = "inactive"
    STATUS_FROZEN = "frozen"
    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_INACTIVE, "Inactive"),
        (STATUS_FROZEN, "Frozen"),
    ]

    member_number = models.CharField(
        max_length=50, unique=True, default=generate_member_number
    )

    # Personal Details
    first_name = models.CharField(max_length=255)
    last_name = models.CharField(max_length=255)
    email = models.EmailField(unique=True, blank=True, null=True)
    phone = models.CharField(max_length=25)
    national_id = models.CharField(max_length=50, unique=True, blank=True, null=True)
    address = models.TextField(blank=True, null=True)

    # Membership
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_MEMBER)
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE
    )
    date_joined = models.DateTimeField(default=timezone.now)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    USERNAME_FIELD = "member_number"
    REQUIRED_FIELDS = ["first_name", "last_name", "phone"]

    objects = MemberManager()

    class Meta:
        verbose_name = "Member"
        verbose_name_plural = "Members"
        ordering = ["-date_joined"]

    def __str__(self):
        return f"{self.member_number} - {self.first_name} {self.last_name}"

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def get_short_name(self):
        return self.first_name

    @property
    def effective_role(self):
        if self.is_superuser:
            return self.ROLE_ADMIN
        return self.role

    @property
    def is_staff_member(self):
        """Admins and managers run the console; members only see their own data."""
        return self.effective_role in (self.ROLE_ADMIN, self.ROLE_MANAGER)
