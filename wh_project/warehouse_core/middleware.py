from django.utils.deprecation import MiddlewareMixin

from .models import EntityMembership


class CurrentCompanyMiddleware(MiddlewareMixin):
    # Run on every request and
    # attach .company and .role to the request, based on the logged-in user
    def process_request(self, request):
        request.company = None
        request.role = None

        if not request.user.is_authenticated:  # Unauthenticated users
            return

        # Default company fallback: if user didn't choose a company
        company_id = getattr(request.user, "default_company_id", None)

        # If user switched companies,
        # choice is stored in the session as "active_company_id"
        if request.session.get("active_company_id"):
            company_id = request.session["active_company_id"]

        if company_id is None:
            return

        # ensure security: user must hold an active membership for that company,
        # tampering with the session cannot "jump" into another company
        membership = (
            EntityMembership.objects.select_related("company")
            .filter(user=request.user, company_id=company_id, is_active=True)
            .first()
        )
        if membership is not None:
            request.company = membership.company
            request.role = membership.role
