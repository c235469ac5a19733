class TenantAdminMixin:
    """
    Enforce tenant isolation in Django admin.
    Uses request.company (set by CurrentCompanyMiddleware)
    or falls back to request.user.default_company.
    """

    def _get_request_company(self, request):
        company = getattr(request, "company", None)
        if company is None:
            user = getattr(request, "user", None)
            company = getattr(user, "default_company", None)
        return company

    def get_queryset(self, request):
        qs = super().get_queryset(request)

        # If superuser, show everything;
        # otherwise restrict to company if available
        if request.user.is_superuser:
            return qs
        company = self._get_request_company(request)
        if company is None:
            return qs.none()
        return qs.filter(company=company)

    def formfield_for_foreignkey(self, db_field, request, **kwargs):
        """
        Restrict foreignkey dropdowns to the current company:
        the company field itself, and clients, suppliers, products.
        """
        company = self._get_request_company(request)

        if not request.user.is_superuser:
            rel_model = db_field.related_model
            if db_field.name == "company":
                kwargs["queryset"] = (
                    rel_model.objects.filter(pk=company.pk)
                    if company is not None else rel_model.objects.none()
                )
            elif any(f.name == "company" for f in rel_model._meta.fields):
                kwargs["queryset"] = (
                    rel_model.objects.filter(company=company)
                    if company is not None else rel_model.objects.none()
                )

        return super().formfield_for_foreignkey(db_field, request, **kwargs)

    def save_model(self, request, obj, form, change):
        # Ensure object is always owned by company on save (unless superuser)
        if not request.user.is_superuser:
            company = self._get_request_company(request)
            if company is not None:
                obj.company = company
        super().save_model(request, obj, form, change)
