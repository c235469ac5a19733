from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.core.exceptions import ValidationError
from django.db import models

from ..managers import TenantManager, UserManager


# ---------- Tenant / Company ----------
class Company(models.Model):

    """Tenant: owns every client, supplier, product and document"""
    name = models.CharField(max_length=200)

    slug = models.SlugField(  # A URL-friendly identifier
        max_length=80, unique=True
    )

    # Creator / admin account of the company
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        # if user is deleted, company record stays, owner is set to NULL
        on_delete=models.SET_NULL,
        related_name="owned_companies",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "companies"

    def __str__(self):
        return self.name


# ---------- Custom User ----------
class User(AbstractUser):
    """
    Before you run your very first migrate,
    add: 'AUTH_USER_MODEL = "warehouse_core.User"' to settings.py
    """
    # Tenant used when the session has not selected one
    default_company = models.ForeignKey(
        "Company",
        null=True,
        blank=True,
        # don't delete the user, just clear their default company
        on_delete=models.SET_NULL,
        related_name="default_users",
    )

    phone = models.CharField(max_length=32, blank=True)

    objects = UserManager()

    class Meta:
        indexes = [models.Index(fields=["default_company"], name="user_default_company_idx")]

    def __str__(self):
        return self.get_full_name() or self.username


# ---------- EntityMembership ----------
class EntityMembership(models.Model):  # join model between User and Company

    ROLE_CHOICES = [
        # may run repair operations (counter resync, balance reconcile)
        ("super_admin", "Super admin"),
        ("admin", "Admin"),
        # day-to-day document entry
        ("staff", "Staff"),
    ]
    ADMIN_ROLES = ("super_admin", "admin")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="memberships",
    )

    company = models.ForeignKey(
        "Company", on_delete=models.CASCADE, related_name="memberships"
    )

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="staff")

    # Suspend someone's access without deleting the record
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    objects = TenantManager()

    class Meta:
        # one user can only have one membership per company
        constraints = [
            models.UniqueConstraint(
                fields=["user", "company"], name="uq_user_company_membership"
            ),
        ]
        indexes = [
            models.Index(fields=["company", "user"], name="membership_company_user_idx"),
        ]

    def __str__(self):
        return f"{self.user} @ {self.company} ({self.role})"

    @property
    def is_admin(self):
        return self.role in self.ADMIN_ROLES

    def clean(self):
        """
        A user's default_company must be one of their memberships.
        The membership being validated may satisfy that itself.
        """
        if self.user_id and self.user.default_company_id:
            default_company_pk = self.user.default_company_id

            memberships = self.user.memberships.all()
            if self.pk:
                memberships = memberships.exclude(pk=self.pk)
            existing_company_ids = list(memberships.values_list("company_id", flat=True))

            if (
                default_company_pk not in existing_company_ids
                and default_company_pk != self.company_id
            ):
                raise ValidationError(
                    f"Default company {self.user.default_company} must be a user's membership."
                )

    def save(self, *args, **kwargs):
        self.full_clean()  # run validations before saving
        return super().save(*args, **kwargs)
