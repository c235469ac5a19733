from decimal import Decimal

from django.db.models import Case, DecimalField, F, Sum, When

from ..models import BalanceEntry, Client, Supplier
from .validation import get_owned, money

# effect of one entry on the headline balance of the statement:
# client dues, or supplier payable (debit - credit)
_SIGNS = {"total_dues": 1, "total_debit": 1, "total_credit": -1}


def _signed_amount():
    return Case(
        When(field="total_credit", then=-F("amount")),
        default=F("amount"),
        output_field=DecimalField(max_digits=18, decimal_places=2),
    )


def _statement(entries, start, end):
    opening = Decimal("0.00")
    if start:
        opening = money(
            entries.filter(created_at__date__lt=start)
            .aggregate(total=Sum(_signed_amount()))["total"]
        )
        entries = entries.filter(created_at__date__gte=start)
    if end:
        entries = entries.filter(created_at__date__lte=end)

    balance = opening
    rows = []
    for entry in entries.order_by("created_at", "id"):
        effect = entry.amount * _SIGNS[entry.field]
        balance += effect
        rows.append({
            "date": entry.created_at,
            "event": entry.event,
            "event_label": entry.get_event_display(),
            "reference": entry.reference,
            "source_type": entry.source_type,
            "source_id": entry.source_id,
            "field": entry.field,
            "amount": entry.amount,
            "effect": effect,
            "balance": balance,
            "note": entry.note,
        })

    return {
        "start": start,
        "end": end,
        "opening_balance": opening,
        "closing_balance": balance,
        "transactions": rows,
    }


# ----------------------------
# Statement projections
# ----------------------------
def client_statement(company, client_id, start=None, end=None) -> dict:
    """Dues history of one client, folded from its balance entries."""
    client = get_owned(Client, company, client_id, "Client")
    statement = _statement(BalanceEntry.objects.filter(client=client), start, end)
    statement.update({
        "client": client,
        "current_balance": client.total_dues,
    })
    return statement


def supplier_statement(company, supplier_id, start=None, end=None) -> dict:
    """Payable history of one supplier (purchases minus payments)."""
    supplier = get_owned(Supplier, company, supplier_id, "Supplier")
    statement = _statement(BalanceEntry.objects.filter(supplier=supplier), start, end)
    statement.update({
        "supplier": supplier,
        "current_balance": supplier.payable,
    })
    return statement
