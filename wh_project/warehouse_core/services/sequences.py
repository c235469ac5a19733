import logging
import re

from django.db import transaction
from django.db.models import F

from ..conf import get_setting
from ..exceptions import DuplicateNumber, ValidationFailed
from ..models import CreditNote, Order, Payment, Purchase, SequenceCounter

logger = logging.getLogger(__name__)

# series -> (document model, number field)
SERIES_DOCUMENTS = {
    "order": (Order, "order_no"),
    "credit_note": (CreditNote, "credit_note_no"),
    "payment": (Payment, "payment_no"),
    "purchase_order": (Purchase, "purchase_order_no"),
}


# ----------------------------
# Counter workflows
# ----------------------------
def next_value(company, series: str) -> int:
    """
    Increment-and-fetch the tenant's counter for `series`.
    Runs inside the caller's transaction, so a rolled back
    document gives its number back.
    """
    with transaction.atomic():
        # get_or_create retries the lookup when a concurrent insert wins
        counter, _ = SequenceCounter.objects.select_for_update().get_or_create(
            company=company, name=series
        )
        SequenceCounter.objects.filter(pk=counter.pk).update(value=F("value") + 1)
        counter.refresh_from_db(fields=["value"])
    return counter.value


def format_number(series: str, value: int) -> str:
    formats = get_setting("NUMBER_FORMATS")
    if series not in formats:
        raise ValidationFailed(f"Unknown number series {series!r}")
    prefix, padding = formats[series]
    return f"{prefix}{value:0{padding}d}"


def parse_number(series: str, code: str):
    """Inverse of format_number(); None when `code` is not of this series."""
    prefix, _ = get_setting("NUMBER_FORMATS")[series]
    match = re.fullmatch(re.escape(prefix) + r"(\d+)", code or "")
    return int(match.group(1)) if match else None


def _document(series):
    try:
        return SERIES_DOCUMENTS[series]
    except KeyError:
        raise ValidationFailed(f"Unknown number series {series!r}")


def mint_number(company, series: str) -> str:
    """
    Next free document code for the tenant. Codes already taken
    (counter reset behind our back) are skipped a bounded number of times.
    """
    model, field = _document(series)
    limit = get_setting("NUMBER_RETRY_LIMIT")

    for _ in range(limit):
        code = format_number(series, next_value(company, series))
        if not model.objects.filter(company=company, **{field: code}).exists():
            return code
        logger.warning(
            "Number %s already issued for company %s, drawing again", code, company.pk
        )

    raise DuplicateNumber(
        f"Could not allocate a unique {series} number after {limit} attempts"
    )


def resync_counter(company, series: str) -> int:
    """
    Raise the counter to the highest number already issued for the series.
    The counter never moves backwards.
    """
    model, field = _document(series)
    with transaction.atomic():
        counter, _ = SequenceCounter.objects.select_for_update().get_or_create(
            company=company, name=series
        )
        codes = model.objects.filter(company=company).values_list(field, flat=True)
        highest = max(
            (n for n in (parse_number(series, c) for c in codes) if n is not None),
            default=0,
        )
        if highest > counter.value:
            logger.warning(
                "Counter %s for company %s was behind (%s < %s), resynced",
                series, company.pk, counter.value, highest,
            )
            counter.value = highest
            counter.save(update_fields=["value", "updated_at"])
    return counter.value
