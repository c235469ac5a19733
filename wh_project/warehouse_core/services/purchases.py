import logging
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from ..exceptions import ValidationFailed
from ..models import Product, Purchase, PurchaseLine, Supplier
from .ledger import apply_delta
from .sequences import mint_number
from .stock import return_stock, take_stock
from .validation import (get_owned, money, parse_day, parse_decimal,
                         parse_quantity)

logger = logging.getLogger(__name__)


def _parse_items(company, items):
    if not items:
        raise ValidationFailed("At least one item is required")

    lines = []
    for item in items:
        product = None
        if item.get("product_id"):
            product = get_owned(Product, company, item["product_id"], "Product")
        name = item.get("product_name") or (product.name if product else "")
        if not name:
            raise ValidationFailed("Each item needs a product or a product_name")
        lines.append({
            "product": product,
            "product_name": name,
            "quantity": parse_quantity(item.get("quantity")),
            "unit_price": money(parse_decimal(item.get("unit_price"), "unit_price", non_negative=True)),
        })
    return lines


def _receipt_totals(lines, vat_rate):
    """subtotal, vat amount and total of a goods receipt"""
    subtotal = money(sum((Decimal(line["quantity"]) * line["unit_price"] for line in lines), Decimal("0")))
    vat_amount = money(subtotal * vat_rate / 100)
    return subtotal, vat_amount, subtotal + vat_amount


def _write_lines(purchase, lines):
    # PurchaseLine.save() fills line_total, bulk_create would skip it
    for line in lines:
        PurchaseLine.objects.create(company=purchase.company, purchase=purchase, **line)


def _receive(purchase):
    for line in purchase.lines.all():
        return_stock(purchase.company, line.product_id, line.quantity)


def _unreceive(purchase, lines=None):
    # goods already sold cannot be sent back, the guard raises InsufficientStock
    for line in (purchase.lines.all() if lines is None else lines):
        if line.product_id:
            take_stock(purchase.company, line.product_id, line.quantity)


def _parse_invoice_amounts(data):
    net = money(parse_decimal(data.get("net_amount"), "net_amount", positive=True))
    vat = money(parse_decimal(data.get("vat_amount"), "vat_amount", default=0, non_negative=True))
    return net, vat


# ----------------------------
# Purchase workflows
# ----------------------------
def record_goods_receipt(company, supplier_id, data) -> Purchase:
    """Goods arrive: stock goes up and the supplier's debit grows by the total."""
    vat_rate = money(parse_decimal(data.get("vat_rate"), "vat_rate", default=0, non_negative=True))

    with transaction.atomic():
        supplier = get_owned(Supplier, company, supplier_id, "Supplier")
        lines = _parse_items(company, data.get("items"))
        subtotal, vat_amount, total = _receipt_totals(lines, vat_rate)

        purchase = Purchase.objects.create(
            company=company,
            supplier=supplier,
            kind="goods_receipt",
            purchase_order_no=mint_number(company, "purchase_order"),
            invoice_no=data.get("invoice_no") or "",
            date_received=parse_day(data.get("date_received")) or timezone.localdate(),
            payment_method=data.get("payment_method") or "",
            notes=data.get("notes") or "",
            subtotal=subtotal,
            vat_rate=vat_rate,
            vat_amount=vat_amount,
            total_amount=total,
        )
        _write_lines(purchase, lines)
        _receive(purchase)
        apply_delta(supplier, "total_debit", total, "purchase_created", source=purchase)

    logger.info(
        "Goods receipt %s from %s recorded (company %s, total %s)",
        purchase.purchase_order_no, supplier, company.pk, total,
    )
    return purchase


def record_supplier_invoice(company, supplier_id, data) -> Purchase:
    """Supplier bill with no goods movement, stored as one synthetic line."""
    net, vat = _parse_invoice_amounts(data)

    with transaction.atomic():
        supplier = get_owned(Supplier, company, supplier_id, "Supplier")
        number = mint_number(company, "purchase_order")
        invoice_no = data.get("invoice_no") or ""

        purchase = Purchase.objects.create(
            company=company,
            supplier=supplier,
            kind="invoice",
            purchase_order_no=number,
            invoice_no=invoice_no,
            date_received=parse_day(data.get("date_received")) or timezone.localdate(),
            payment_method=data.get("payment_method") or "",
            notes=data.get("notes") or "",
            subtotal=net,
            vat_rate=money(vat / net * 100),
            vat_amount=vat,
            total_amount=net + vat,
        )
        _write_lines(purchase, [{
            "product": None,
            "product_name": data.get("notes") or f"Invoice {invoice_no or number}",
            "quantity": 1,
            "unit_price": net,
        }])
        apply_delta(supplier, "total_debit", purchase.total_amount, "purchase_created", source=purchase)

    logger.info("Supplier invoice %s recorded (company %s)", purchase.purchase_order_no, company.pk)
    return purchase


def update_purchase(company, purchase_id, data) -> Purchase:
    with transaction.atomic():
        purchase = get_owned(Purchase, company, purchase_id, "Purchase", for_update=True)
        old_total = purchase.total_amount

        if purchase.is_goods_receipt:
            if data.get("vat_rate") not in (None, ""):
                purchase.vat_rate = money(parse_decimal(data["vat_rate"], "vat_rate", non_negative=True))
            if data.get("items") is not None:
                lines = _parse_items(company, data["items"])
                old_lines = list(purchase.lines.all())
                purchase.lines.all().delete()
                _write_lines(purchase, lines)
                # new goods in first, then the old receipt is taken back
                _receive(purchase)
                _unreceive(purchase, old_lines)
            else:
                lines = list(purchase.lines.values("quantity", "unit_price"))
            purchase.subtotal, purchase.vat_amount, purchase.total_amount = _receipt_totals(
                lines, purchase.vat_rate
            )
        elif data.get("net_amount") not in (None, ""):
            net, vat = _parse_invoice_amounts(data)
            purchase.subtotal = net
            purchase.vat_amount = vat
            purchase.vat_rate = money(vat / net * 100)
            purchase.total_amount = net + vat
            purchase.lines.update(unit_price=net, line_total=net)

        for field in ("invoice_no", "payment_method", "notes"):
            if data.get(field) is not None:
                setattr(purchase, field, data[field])
        if data.get("date_received"):
            purchase.date_received = parse_day(data["date_received"])

        purchase.save(update_fields=[
            "invoice_no", "payment_method", "notes", "date_received",
            "subtotal", "vat_rate", "vat_amount", "total_amount", "updated_at",
        ])
        apply_delta(
            purchase.supplier, "total_debit", purchase.total_amount - old_total,
            "purchase_updated", source=purchase,
        )

    return purchase


def delete_purchase(company, purchase_id):
    with transaction.atomic():
        purchase = get_owned(Purchase, company, purchase_id, "Purchase", for_update=True)
        if purchase.is_goods_receipt:
            _unreceive(purchase)
        apply_delta(
            purchase.supplier, "total_debit", -purchase.total_amount,
            "purchase_deleted", source=purchase,
        )
        number = purchase.purchase_order_no
        purchase.delete()

    logger.info("Purchase %s deleted for company %s", number, company.pk)
    return number
