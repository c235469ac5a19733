from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.utils.translation import gettext_lazy as _

from warehouse_core.models import Company, EntityMembership, User

from .actions import check_company_balances, resync_company_counters
from .forms import UserAdminChangeForm, UserAdminCreationForm
from .mixins import TenantAdminMixin


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    """a clean admin table for browsing companies"""

    list_display = ("id", "name", "slug", "owner", "created_at")
    search_fields = ("name", "slug")
    ordering = ("name",)
    actions = [check_company_balances, resync_company_counters]

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        if not request.user.is_superuser:
            qs = qs.filter(memberships__user=request.user).distinct()
        return qs.prefetch_related("memberships__user")


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    add_form = UserAdminCreationForm
    form = UserAdminChangeForm
    model = User

    list_display = (
        "username", "email", "get_full_name", "is_staff", "default_company")
    list_filter = ("is_staff", "is_superuser", "is_active")
    search_fields = ("username", "email", "first_name", "last_name")
    ordering = ("username",)

    fieldsets = (
        (None, {"fields": ("username", "password")}),
        (_("Personal info"), {"fields":
                              ("first_name", "last_name", "email", "phone")}),
        (_("Company / Defaults"), {"fields": ("default_company",)}),
        (
            _("Permissions"),
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                ),
            },
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": (
                    "username",
                    "email",
                    "default_company",
                    "password1",
                    "password2",
                ),
            },
        ),
    )

    # limit visible users to members of the request.user's companies
    def get_queryset(self, request):
        qs = super().get_queryset(request)
        if request.user.is_superuser:
            return qs
        allowed_company_ids = request.user.memberships.values_list(
            "company_id", flat=True
        )
        return qs.filter(
            memberships__company_id__in=allowed_company_ids).distinct()


@admin.register(EntityMembership)
class EntityMembershipAdmin(TenantAdminMixin, admin.ModelAdmin):
    list_display = ("user", "company", "role", "is_active", "created_at")
    list_filter = ("role", "is_active")
    search_fields = ("user__username", "user__email", "company__name")
    readonly_fields = ("created_at",)
    ordering = ("company__name", "user__username")

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("company", "user")

    def _admin_company_ids(self, request):
        return set(
            request.user.memberships.filter(
                role__in=EntityMembership.ADMIN_ROLES, is_active=True
            ).values_list("company_id", flat=True)
        )

    # only super admins / admins of a company manage its memberships
    def has_change_permission(self, request, obj=None):
        if request.user.is_superuser:
            return True
        company_ids = self._admin_company_ids(request)
        if obj is None:
            return bool(company_ids)
        return obj.company_id in company_ids

    def has_delete_permission(self, request, obj=None):
        return self.has_change_permission(request, obj)

    def has_add_permission(self, request):
        if request.user.is_superuser:
            return True
        return bool(self._admin_company_ids(request))
