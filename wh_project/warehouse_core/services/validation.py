from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.core.exceptions import ObjectDoesNotExist
from django.utils.dateparse import parse_date

from ..exceptions import NotFound, ValidationFailed

TWO_PLACES = Decimal("0.01")


# ------------------------------------
# Money / input parsing helpers
# ------------------------------------
def money(value) -> Decimal:
    """Round to cents, half-up (2.345 -> 2.35)."""
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def parse_decimal(value, field, *, default=None, positive=False, non_negative=False):
    if value is None or value == "":
        if default is None:
            raise ValidationFailed(f"{field} is required")
        value = default
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationFailed(f"{field} must be a number")
    if not number.is_finite():
        raise ValidationFailed(f"{field} must be a number")
    if positive and number <= 0:
        raise ValidationFailed(f"{field} must be greater than 0")
    if non_negative and number < 0:
        raise ValidationFailed(f"{field} must be >= 0")
    return number


def parse_quantity(value, field="quantity") -> int:
    # bools are ints in Python, "true" is not a quantity
    if isinstance(value, bool):
        raise ValidationFailed(f"{field} must be a whole number")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationFailed(f"{field} must be a whole number")
    # 2, "2" and 2.0 are all fine, 2.5 is not
    if not number.is_finite() or number != number.to_integral_value():
        raise ValidationFailed(f"{field} must be a whole number")
    qty = int(number)
    if qty < 1:
        raise ValidationFailed(f"{field} must be at least 1")
    return qty


def parse_id(value, field="id") -> int:
    """Primary key from a query string or JSON body."""
    if isinstance(value, bool):
        raise ValidationFailed(f"{field} must be a positive integer")
    try:
        pk = int(str(value).strip())
    except (ValueError, TypeError):
        raise ValidationFailed(f"{field} must be a positive integer")
    if pk < 1:
        raise ValidationFailed(f"{field} must be a positive integer")
    return pk


def parse_choice(value, field, choices) -> str:
    codes = [code for code, _ in choices]
    if value not in codes:
        raise ValidationFailed(f"{field} must be one of: {', '.join(codes)}")
    return value


def parse_day(value, field="date"):
    """Accept a date object or an ISO "YYYY-MM-DD" string; None passes through."""
    if value in (None, ""):
        return None
    if hasattr(value, "isoformat"):
        return value
    try:
        day = parse_date(str(value)[:10])
    except ValueError:
        day = None
    if day is None:
        raise ValidationFailed(f"{field} must be a date (YYYY-MM-DD)")
    return day


def parse_bool(value, default=True):
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() not in ("false", "0", "no", "off", "")
    return bool(value)


def require(data, *fields):
    missing = [f for f in fields if data.get(f) in (None, "", [])]
    if missing:
        raise ValidationFailed(f"Missing required fields: {', '.join(missing)}")


def get_owned(model, company, pk, label=None, *, queryset=None, for_update=False):
    """
    Fetch a tenant-owned row. A row of another company is reported
    exactly like a missing one.
    """
    label = label or model._meta.verbose_name.capitalize()
    qs = queryset if queryset is not None else model.objects.all()
    if for_update:
        qs = qs.select_for_update()
    try:
        return qs.get(pk=pk, company=company)
    except (ObjectDoesNotExist, ValueError, TypeError):
        raise NotFound(f"{label} not found")
