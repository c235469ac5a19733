import logging

from django.db import transaction
from django.utils import timezone

from ..exceptions import ValidationFailed
from ..models import Client, CreditNote, CreditNoteLine, Order, Product
from ..models.creditnote import CREDIT_NOTE_STATUS_CHOICES
from .ledger import apply_delta
from .sequences import mint_number
from .stock import return_stock, take_stock
from .validation import (get_owned, money, parse_day, parse_decimal,
                         parse_quantity, require)

logger = logging.getLogger(__name__)

CREDIT_NOTE_STATUSES = {code for code, _ in CREDIT_NOTE_STATUS_CHOICES}


def _check_status(status):
    if status not in CREDIT_NOTE_STATUSES:
        raise ValidationFailed(
            f"Invalid status {status!r}. Use one of: {', '.join(sorted(CREDIT_NOTE_STATUSES))}"
        )
    return status


def _parse_items(company, items):
    """Validate request items into CreditNoteLine kwargs."""
    if not items:
        raise ValidationFailed("At least one item is required")

    lines = []
    for item in items:
        product = None
        product_id = item.get("product_id")
        if product_id:
            product = get_owned(Product, company, product_id, "Product")
        name = item.get("product_name") or (product.name if product else "")
        if not name:
            raise ValidationFailed("Each item needs a product or a product_name")
        lines.append({
            "product": product,
            "product_name": name,
            "quantity": parse_quantity(item.get("quantity")),
            "price": money(parse_decimal(item.get("price"), "price", default=0, non_negative=True)),
            "reason": item.get("reason") or "",
        })
    return lines


def _items_total(lines):
    return money(sum((line["quantity"] * line["price"] for line in lines), money(0)))


def _write_lines(note, lines):
    CreditNoteLine.objects.bulk_create([
        CreditNoteLine(company=note.company, credit_note=note, **line) for line in lines
    ])


# returned goods come back on the shelf, withdrawing the note takes them out again
def _restock(note, lines=None):
    for line in (note.lines.all() if lines is None else lines):
        return_stock(note.company, line.product_id, line.quantity)


def _unstock(note, lines=None):
    for line in (note.lines.all() if lines is None else lines):
        if line.product_id:
            take_stock(note.company, line.product_id, line.quantity)


# ----------------------------
# Credit note workflows
# ----------------------------
def create_credit_note(company, data) -> CreditNote:
    """Manual return note: restocks its items and credits the client."""
    require(data, "client_id", "items")

    with transaction.atomic():
        client = get_owned(Client, company, data["client_id"], "Client")
        order = None
        if data.get("order_id"):
            order = get_owned(Order, company, data["order_id"], "Order")
            if order.client_id != client.pk:
                raise ValidationFailed("Order belongs to a different client")

        lines = _parse_items(company, data["items"])
        total = _items_total(lines)
        if data.get("total_amount") not in (None, ""):
            total = money(parse_decimal(data["total_amount"], "total_amount", non_negative=True))

        note = CreditNote.objects.create(
            company=company,
            client=client,
            client_name=client.name,
            credit_note_no=mint_number(company, "credit_note"),
            kind="return",
            order=order,
            order_no=order.order_no if order else "",
            total_amount=total,
            status=_check_status(data.get("status") or "pending"),
            date=parse_day(data.get("date")) or timezone.localdate(),
            applied_to_dues=True,
        )
        _write_lines(note, lines)
        _restock(note)
        apply_delta(client, "total_dues", -total, "credit_note_created", source=note)

    logger.info("Credit note %s created for company %s", note.credit_note_no, company.pk)
    return note


def emit_cancellation_note(order) -> CreditNote:
    """
    One live cancellation note per cancelled order. For on-account orders the
    note carries the dues reversal; otherwise it is informational only.
    """
    existing = (
        CreditNote.objects.live(order.company_id)
        .filter(order=order, kind="cancellation")
        .first()
    )
    if existing:
        return existing

    note = CreditNote.objects.create(
        company_id=order.company_id,
        client_id=order.client_id,
        client_name=order.client_name or order.client.name,
        credit_note_no=mint_number(order.company, "credit_note"),
        kind="cancellation",
        order=order,
        order_no=order.order_no,
        total_amount=order.total,
        status="pending",
        applied_to_dues=order.is_on_account,
    )
    _write_lines(note, [
        {
            "product_id": line.product_id,
            "product_name": line.product_name,
            "quantity": line.quantity,
            "price": line.price,
            "reason": "Order Cancelled",
        }
        for line in order.lines.all()
    ])
    if note.applied_to_dues:
        apply_delta(order.client, "total_dues", -note.total_amount, "order_cancelled", source=note)
    return note


def _withdraw(note, event):
    if note.is_return:
        _unstock(note)
    if note.applied_to_dues:
        apply_delta(note.client, "total_dues", note.total_amount, event, source=note)
    note.is_deleted = True
    note.save(update_fields=["is_deleted", "updated_at"])


def withdraw_cancellation_note(order, event="order_uncancelled"):
    """Soft-delete the live cancellation note of `order`, if any."""
    note = (
        CreditNote.objects.live(order.company_id)
        .select_for_update()
        .filter(order=order, kind="cancellation")
        .first()
    )
    if note is None:
        return None
    _withdraw(note, event)
    return note


def update_credit_note(company, note_id, data) -> CreditNote:
    with transaction.atomic():
        note = get_owned(CreditNote, company, note_id, "Credit note", for_update=True)
        if note.is_deleted:
            raise ValidationFailed("Deleted credit notes cannot be edited")

        old_total = note.total_amount
        new_total = old_total
        fields = []

        if data.get("items") is not None:
            lines = _parse_items(company, data["items"])
            old_lines = list(note.lines.all())
            note.lines.all().delete()
            _write_lines(note, lines)
            if note.is_return:
                # new goods arrive before the old ones leave, so the guard sees both
                _restock(note)
                _unstock(note, old_lines)
            new_total = _items_total(lines)

        if data.get("total_amount") not in (None, ""):
            new_total = money(parse_decimal(data["total_amount"], "total_amount", non_negative=True))

        if new_total != old_total:
            note.total_amount = new_total
            fields.append("total_amount")
        if data.get("status"):
            note.status = _check_status(data["status"])
            fields.append("status")
        if data.get("date"):
            note.date = parse_day(data["date"])
            fields.append("date")

        if fields:
            note.save(update_fields=fields + ["updated_at"])
        if note.applied_to_dues and new_total != old_total:
            # +old -new in one delta
            apply_delta(note.client, "total_dues", old_total - new_total, "credit_note_updated", source=note)

    return note


def set_credit_note_status(company, note_id, status) -> CreditNote:
    """Status is bookkeeping only, no ledger effect."""
    with transaction.atomic():
        note = get_owned(CreditNote, company, note_id, "Credit note", for_update=True)
        if note.is_deleted:
            raise ValidationFailed("Deleted credit notes cannot be edited")
        note.status = _check_status(status)
        note.save(update_fields=["status", "updated_at"])
    return note


def delete_credit_note(company, note_id) -> CreditNote:
    """Soft delete: stock and dues effects are reversed, the row stays."""
    with transaction.atomic():
        note = get_owned(
            CreditNote, company, note_id, "Credit note",
            queryset=CreditNote.objects.filter(is_deleted=False),
            for_update=True,
        )
        _withdraw(note, "credit_note_deleted")

    logger.info("Credit note %s deleted for company %s", note.credit_note_no, company.pk)
    return note
