from decimal import Decimal

from django.conf import settings

# Fallbacks for keys missing from settings.WAREHOUSE
DEFAULTS = {
    # VAT applied to order lines whose product carries no rate
    "DEFAULT_VAT_RATE": Decimal("20"),
    # series name -> (prefix, zero padding)
    "NUMBER_FORMATS": {
        "order": ("INV-", 5),
        "credit_note": ("CN-", 5),
        "payment": ("PAY", 4),
        "purchase_order": ("PO-ID-", 4),
    },
    # how many counter values mint_number() may burn on collisions
    "NUMBER_RETRY_LIMIT": 5,
    # reverse | retain | forbid
    "ORDER_DELETE_POLICY": "reverse",
    "LOW_STOCK_DEFAULT": 50,
}

ORDER_DELETE_POLICIES = ("reverse", "retain", "forbid")


def get_setting(name):
    """Look up a warehouse setting, falling back to DEFAULTS."""
    configured = getattr(settings, "WAREHOUSE", {}) or {}
    value = configured.get(name, DEFAULTS[name])
    if name == "DEFAULT_VAT_RATE":
        return Decimal(str(value))
    if name == "NUMBER_FORMATS":
        # allow overriding a single series without restating the others
        return {**DEFAULTS["NUMBER_FORMATS"], **value}
    if name == "ORDER_DELETE_POLICY" and value not in ORDER_DELETE_POLICIES:
        raise ValueError(f"Unknown ORDER_DELETE_POLICY {value!r}")
    return value
