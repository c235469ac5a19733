import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from ..conf import get_setting
from ..exceptions import ValidationFailed
from ..models import Client, Order, OrderLine, Product
from ..models.order import INVOICE_TYPE_CHOICES, ORDER_STATUS_CHOICES
from .credit_notes import emit_cancellation_note, withdraw_cancellation_note
from .ledger import apply_delta
from .sequences import mint_number
from .stock import return_stock, take_stock
from .validation import (get_owned, money, parse_bool, parse_decimal,
                         parse_quantity, require)

logger = logging.getLogger(__name__)

# forward chain; "cancelled" sits outside it
ORDER_FLOW = ["pending", "in_progress", "dispatched", "delivered"]
ORDER_STATUSES = {code for code, _ in ORDER_STATUS_CHOICES}

INVOICE_TYPES = {code for code, _ in INVOICE_TYPE_CHOICES}
# UI labels -> stored codes
INVOICE_TYPE_LABELS = {label.lower(): code for code, label in INVOICE_TYPE_CHOICES}
INVOICE_TYPE_LABELS["by invoice"] = "invoice"


def normalize_invoice_type(value) -> str:
    """Accept "on_account" as well as "On Account"; blank means "invoice"."""
    if value in (None, ""):
        return "invoice"
    text = str(value).strip()
    if text in INVOICE_TYPES:
        return text
    code = INVOICE_TYPE_LABELS.get(text.lower())
    if code is None:
        raise ValidationFailed(f"Invalid invoice type {value!r}")
    return code


def _prepare_lines(company, raw_lines):
    if not raw_lines:
        raise ValidationFailed("Client and order lines are required")

    default_vat = get_setting("DEFAULT_VAT_RATE")
    lines = []
    for raw in raw_lines:
        if not raw.get("product_id"):
            raise ValidationFailed("Each order line needs a product_id")
        product = get_owned(Product, company, raw["product_id"], "Product")
        price = parse_decimal(
            raw.get("price"), "price", default=product.selling_price, non_negative=True
        )
        lines.append({
            "product": product,
            "product_name": product.name,
            "quantity": parse_quantity(raw.get("quantity")),
            "price": money(price),
            # snapshot the rate so later catalog edits leave the order alone
            "vat_rate": product.vat if product.vat is not None else default_vat,
        })
    return lines


def compute_total(lines, delivery_cost, include_vat) -> Decimal:
    """Σ qty × price (× (1 + vat/100) when VAT applies) + delivery, to cents."""
    total = Decimal("0")
    for line in lines:
        amount = Decimal(line["quantity"]) * line["price"]
        if include_vat:
            amount *= 1 + Decimal(line["vat_rate"]) / 100
        total += amount
    return money(total + delivery_cost)


def _write_lines(order, lines):
    OrderLine.objects.bulk_create([
        OrderLine(company=order.company, order=order, **line) for line in lines
    ])


# ----------------------------
# Order workflows
# ----------------------------
def create_order(company, data) -> Order:
    """
    Take stock for every line, mint the INV number and, for on-account
    orders, add the total to the client's dues. A repeated idempotency_key
    returns the order created the first time.
    """
    require(data, "client_id", "lines")
    key = data.get("idempotency_key") or None

    if key:
        existing = Order.objects.filter(company=company, idempotency_key=key).first()
        if existing:
            return existing

    try:
        with transaction.atomic():
            order = _create_order(company, data, key)
    except (IntegrityError, ValidationError):
        # a concurrent request with the same key won the insert; full_clean()
        # reports that as ValidationError, the database as IntegrityError
        existing = key and Order.objects.filter(company=company, idempotency_key=key).first()
        if existing:
            logger.info("Order %s reused for idempotency key %r", existing.order_no, key)
            return existing
        raise

    logger.info(
        "Order %s created for company %s (%s, total %s)",
        order.order_no, company.pk, order.invoice_type, order.total,
    )
    return order


def _create_order(company, data, key):
    client = get_owned(Client, company, data["client_id"], "Client")
    lines = _prepare_lines(company, data["lines"])
    invoice_type = normalize_invoice_type(data.get("invoice_type"))
    status = data.get("status") or "pending"
    if status not in ORDER_FLOW:
        raise ValidationFailed(f"Invalid status {status!r}")

    delivery_cost = money(
        parse_decimal(data.get("delivery_cost"), "delivery_cost", default=0, non_negative=True)
    )
    include_vat = parse_bool(data.get("include_vat"), default=True)

    for line in lines:
        take_stock(company, line["product"].pk, line["quantity"])

    order = Order.objects.create(
        company=company,
        client=client,
        client_name=client.name,
        order_no=mint_number(company, "order"),
        status=status,
        invoice_type=invoice_type,
        payment_method=data.get("payment_method") or "Bank Transfer",
        delivery_cost=delivery_cost,
        include_vat=include_vat,
        total=compute_total(lines, delivery_cost, include_vat),
        idempotency_key=key,
    )
    _write_lines(order, lines)

    if order.is_on_account:
        apply_delta(client, "total_dues", order.total, "order_created", source=order)
    return order


def update_order(company, order_id, data) -> Order:
    with transaction.atomic():
        order = get_owned(Order, company, order_id, "Order", for_update=True)
        if order.is_cancelled:
            raise ValidationFailed("Cancelled orders cannot be edited")

        old_client = order.client
        old_total = order.total
        was_on_account = order.is_on_account

        if data.get("client_id"):
            order.client = get_owned(Client, company, data["client_id"], "Client")
            order.client_name = order.client.name
        if data.get("invoice_type"):
            order.invoice_type = normalize_invoice_type(data["invoice_type"])
        if data.get("payment_method"):
            order.payment_method = data["payment_method"]
        if data.get("delivery_cost") not in (None, ""):
            order.delivery_cost = money(
                parse_decimal(data["delivery_cost"], "delivery_cost", non_negative=True)
            )
        if "include_vat" in data:
            order.include_vat = parse_bool(data["include_vat"])

        if data.get("lines") is not None:
            lines = _prepare_lines(company, data["lines"])
            # old quantities go back first, so the guard checks stock + old qty
            for old in order.lines.all():
                return_stock(company, old.product_id, old.quantity)
            for line in lines:
                take_stock(company, line["product"].pk, line["quantity"])
            order.lines.all().delete()
            _write_lines(order, lines)
        else:
            lines = list(order.lines.values("quantity", "price", "vat_rate"))

        order.total = compute_total(lines, order.delivery_cost, order.include_vat)
        order.save(update_fields=[
            "client", "client_name", "invoice_type", "payment_method",
            "delivery_cost", "include_vat", "total", "updated_at",
        ])

        if was_on_account and order.is_on_account and old_client.pk == order.client_id:
            apply_delta(order.client, "total_dues", order.total - old_total, "order_updated", source=order)
        else:
            if was_on_account:
                apply_delta(old_client, "total_dues", -old_total, "order_updated", source=order)
            if order.is_on_account:
                apply_delta(order.client, "total_dues", order.total, "order_updated", source=order)

        if data.get("status") and data["status"] != order.status:
            order = set_order_status(company, order.pk, data["status"])

    logger.info("Order %s updated for company %s (total %s)", order.order_no, company.pk, order.total)
    return order


def set_order_status(company, order_id, status) -> Order:
    """
    Forward moves along ORDER_FLOW, "cancelled" from anywhere, and back
    out of "cancelled" to any active status. Same status is a no-op.
    """
    if status not in ORDER_STATUSES:
        raise ValidationFailed(f"Invalid status {status!r}")

    with transaction.atomic():
        order = get_owned(Order, company, order_id, "Order", for_update=True)
        current = order.status
        if status == current:
            return order

        if status == "cancelled":
            emit_cancellation_note(order)
        elif current == "cancelled":
            withdraw_cancellation_note(order)
        elif ORDER_FLOW.index(status) < ORDER_FLOW.index(current):
            raise ValidationFailed(f"Cannot move order from {current} back to {status}")

        order.status = status
        order.save(update_fields=["status", "updated_at"])

    logger.info("Order %s: %s -> %s", order.order_no, current, status)
    return order


def delete_order(company, order_id):
    """
    Stock always comes back. What happens to dues depends on
    WAREHOUSE["ORDER_DELETE_POLICY"]: reverse, retain or forbid.
    """
    policy = get_setting("ORDER_DELETE_POLICY")

    with transaction.atomic():
        order = get_owned(Order, company, order_id, "Order", for_update=True)
        if policy == "forbid" and order.is_on_account:
            raise ValidationFailed("On-account orders cannot be deleted, cancel them instead")

        for line in order.lines.all():
            return_stock(company, line.product_id, line.quantity)

        if policy == "reverse":
            withdraw_cancellation_note(order, event="order_deleted")
            if order.is_on_account:
                apply_delta(order.client, "total_dues", -order.total, "order_deleted", source=order)

        order_no = order.order_no
        order.delete()

    logger.info("Order %s deleted for company %s (policy %s)", order_no, company.pk, policy)
    return order_no
