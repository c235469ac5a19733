import logging

from django.db import transaction
from django.utils import timezone

from ..exceptions import ValidationFailed
from ..models import Client, Payment, Supplier
from .ledger import apply_delta
from .sequences import mint_number
from .validation import get_owned, money, parse_day, parse_decimal, require

logger = logging.getLogger(__name__)


def _book(payment, sign, event):
    """
    Client payments lower dues, supplier payments raise total_credit.
    sign=-1 undoes a payment.
    """
    if payment.client_id:
        apply_delta(payment.client, "total_dues", -sign * payment.amount, event, source=payment)
    else:
        apply_delta(payment.supplier, "total_credit", sign * payment.amount, event, source=payment)


# ----------------------------
# Payment workflows
# ----------------------------
def create_payment(company, data) -> Payment:
    client_id = data.get("client_id")
    supplier_id = data.get("supplier_id")
    if bool(client_id) == bool(supplier_id):
        raise ValidationFailed("Provide exactly one of client_id or supplier_id")
    require(data, "amount", "payment_method")
    amount = money(parse_decimal(data["amount"], "amount", positive=True))

    with transaction.atomic():
        client = get_owned(Client, company, client_id, "Client") if client_id else None
        supplier = get_owned(Supplier, company, supplier_id, "Supplier") if supplier_id else None

        payment = Payment.objects.create(
            company=company,
            client=client,
            supplier=supplier,
            amount=amount,
            payment_method=data["payment_method"],
            payment_no=mint_number(company, "payment"),
            date=parse_day(data.get("date")) or timezone.localdate(),
        )
        _book(payment, 1, "payment_created")

    logger.info(
        "Payment %s of %s recorded against %s (company %s)",
        payment.payment_no, payment.amount, payment.counterparty, company.pk,
    )
    return payment


def update_payment(company, payment_id, data) -> Payment:
    """Amount, method and date are editable; a new amount books the difference."""
    with transaction.atomic():
        payment = get_owned(Payment, company, payment_id, "Payment", for_update=True)
        old_amount = payment.amount

        if data.get("amount") not in (None, ""):
            payment.amount = money(parse_decimal(data["amount"], "amount", positive=True))
        if data.get("payment_method"):
            payment.payment_method = data["payment_method"]
        if data.get("date"):
            payment.date = parse_day(data["date"])
        payment.save(update_fields=["amount", "payment_method", "date", "updated_at"])

        diff = payment.amount - old_amount
        if diff:
            if payment.client_id:
                apply_delta(payment.client, "total_dues", -diff, "payment_updated", source=payment)
            else:
                apply_delta(payment.supplier, "total_credit", diff, "payment_updated", source=payment)

    return payment


def delete_payment(company, payment_id):
    with transaction.atomic():
        payment = get_owned(Payment, company, payment_id, "Payment", for_update=True)
        _book(payment, -1, "payment_deleted")
        payment_no = payment.payment_no
        payment.delete()

    logger.info("Payment %s deleted for company %s", payment_no, company.pk)
    return payment_no
