import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task  # register this function as a Celery task
def reconcile_company_balances(company_id, fix=False):
    # import models lazily to avoid circular imports at module import time
    from .models import Company
    from .services.ledger import reconcile

    company = Company.objects.get(pk=company_id)
    drifts = reconcile(company, fix=fix)
    if drifts:
        logger.warning(
            "Company %s: %d balance drift(s)%s", company_id, len(drifts), " fixed" if fix else ""
        )
    # JSON serializable for the result backend
    return [drift.as_dict() for drift in drifts]


@shared_task
def reconcile_all_balances(fix=False):
    """Fan out one reconcile task per company."""
    from .models import Company

    company_ids = list(Company.objects.values_list("pk", flat=True))
    for company_id in company_ids:
        reconcile_company_balances.delay(company_id, fix=fix)
    return len(company_ids)
