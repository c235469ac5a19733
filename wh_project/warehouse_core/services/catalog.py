import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from ..conf import get_setting
from ..exceptions import NotFound, ValidationFailed
from ..models import Client, Expense, Product, Supplier
from ..models.expense import EXPENSE_VAT_CHOICES
from .stock import return_stock, take_stock
from .validation import (get_owned, money, parse_bool, parse_day,
                         parse_decimal, require)

logger = logging.getLogger(__name__)

# balances are never written through these
CLIENT_FIELDS = ("name", "email", "phone", "street", "city", "postal_code")
SUPPLIER_FIELDS = (
    "name", "email", "phone", "address", "city", "state", "zip_code",
    "bank_account_name", "bank_account_number", "bank_name", "bank_sort_code",
)
PRODUCT_TEXT_FIELDS = ("serial_no", "name", "description", "category", "unit")
PRODUCT_PRICE_FIELDS = ("cost_price", "selling_price")
EXPENSE_TEXT_FIELDS = ("category", "description", "payment_method", "reference", "notes")
EXPENSE_VAT_RATES = {rate for rate, _ in EXPENSE_VAT_CHOICES}


def _assign(instance, data, fields):
    """Copy the keys present in `data`; returns the names that were set."""
    changed = []
    for field in fields:
        if field in data and data[field] is not None:
            setattr(instance, field, data[field])
            changed.append(field)
    return changed


def _parse_int(value, field, minimum=0):
    try:
        number = int(str(value))
    except (TypeError, ValueError):
        raise ValidationFailed(f"{field} must be a whole number")
    if number < minimum:
        raise ValidationFailed(f"{field} must be >= {minimum}")
    return number


# ----------------------------
# Clients
# ----------------------------
def create_client(company, data) -> Client:
    require(data, "name", "email")
    client = Client(company=company)
    _assign(client, data, CLIENT_FIELDS)
    client.is_active = parse_bool(data.get("is_active"), default=True)
    client.save()
    logger.info("Client %s created for company %s", client.pk, company.pk)
    return client


def update_client(company, client_id, data) -> Client:
    with transaction.atomic():
        client = get_owned(Client, company, client_id, "Client", for_update=True)
        fields = _assign(client, data, CLIENT_FIELDS)
        if "is_active" in data:
            client.is_active = parse_bool(data["is_active"])
            fields.append("is_active")
        if fields:
            client.save(update_fields=fields + ["updated_at"])
    return client


def delete_client(company, client_id):
    with transaction.atomic():
        client = get_owned(Client, company, client_id, "Client", for_update=True)
        if client.total_dues != 0:
            raise ValidationFailed(
                f"Client has outstanding dues of {client.total_dues}, settle them first"
            )
        if (
            client.orders.exists()
            or client.payments.exists()
            or client.credit_notes.exists()
        ):
            raise ValidationFailed("Client has documents and cannot be deleted, deactivate it instead")
        client.delete()


# ----------------------------
# Suppliers
# ----------------------------
def create_supplier(company, data) -> Supplier:
    require(data, "name", "phone", "address", "city")
    supplier = Supplier(company=company)
    _assign(supplier, data, SUPPLIER_FIELDS)
    supplier.is_active = parse_bool(data.get("is_active"), default=True)
    supplier.save()
    logger.info("Supplier %s created for company %s", supplier.pk, company.pk)
    return supplier


def update_supplier(company, supplier_id, data) -> Supplier:
    with transaction.atomic():
        supplier = get_owned(Supplier, company, supplier_id, "Supplier", for_update=True)
        fields = _assign(supplier, data, SUPPLIER_FIELDS)
        if "is_active" in data:
            supplier.is_active = parse_bool(data["is_active"])
            fields.append("is_active")
        if fields:
            supplier.save(update_fields=fields + ["updated_at"])
    return supplier


def delete_supplier(company, supplier_id):
    with transaction.atomic():
        supplier = get_owned(Supplier, company, supplier_id, "Supplier", for_update=True)
        if supplier.total_debit != 0 or supplier.total_credit != 0:
            raise ValidationFailed("Supplier has a balance and cannot be deleted")
        if supplier.purchases.exists() or supplier.payments.exists():
            raise ValidationFailed("Supplier has documents and cannot be deleted, deactivate it instead")
        supplier.delete()


# ----------------------------
# Products
# ----------------------------
def _apply_product_data(company, product, data):
    fields = _assign(product, data, PRODUCT_TEXT_FIELDS)
    for field in PRODUCT_PRICE_FIELDS:
        if data.get(field) not in (None, ""):
            setattr(product, field, money(parse_decimal(data[field], field, non_negative=True)))
            fields.append(field)
    if "vat" in data:
        # blank vat falls back to DEFAULT_VAT_RATE on order lines
        product.vat = None if data["vat"] in (None, "") else money(parse_decimal(data["vat"], "vat"))
        fields.append("vat")
    if data.get("min_stock_level") not in (None, ""):
        product.min_stock_level = _parse_int(data["min_stock_level"], "min_stock_level")
        fields.append("min_stock_level")
    if "supplier_id" in data:
        product.supplier = (
            get_owned(Supplier, company, data["supplier_id"], "Supplier")
            if data["supplier_id"] else None
        )
        fields.append("supplier")
    if "is_active" in data:
        product.is_active = parse_bool(data["is_active"])
        fields.append("is_active")
    return fields


def create_product(company, data) -> Product:
    require(data, "serial_no", "name", "category", "unit")
    product = Product(company=company, min_stock_level=get_setting("LOW_STOCK_DEFAULT"))
    _apply_product_data(company, product, data)
    if data.get("stock") not in (None, ""):
        product.stock = _parse_int(data["stock"], "stock")
    product.save()
    logger.info("Product %s (%s) created for company %s", product.serial_no, product.pk, company.pk)
    return product


def update_product(company, product_id, data) -> Product:
    with transaction.atomic():
        product = get_owned(Product, company, product_id, "Product", for_update=True)
        fields = _apply_product_data(company, product, data)
        if fields:
            product.save(update_fields=fields + ["updated_at"])
        if data.get("stock") not in (None, ""):
            product = adjust_stock(company, product.pk, data["stock"], "set")
    return product


def delete_product(company, product_id):
    # order, purchase and credit note lines keep their name snapshot
    product = get_owned(Product, company, product_id, "Product")
    product.delete()


def adjust_stock(company, product_id, quantity, operation="set") -> Product:
    """Manual stock correction: add, subtract (guarded) or set."""
    qty = _parse_int(quantity, "quantity")
    with transaction.atomic():
        product = get_owned(Product, company, product_id, "Product")
        if operation == "add":
            return_stock(company, product.pk, qty)
        elif operation == "subtract":
            take_stock(company, product.pk, qty)
        elif operation == "set":
            Product.objects.filter(pk=product.pk, company=company).update(stock=qty)
        else:
            raise ValidationFailed("operation must be one of: add, subtract, set")
        product.refresh_from_db()

    logger.info("Stock of %s %s %s -> %s", product.serial_no, operation, qty, product.stock)
    return product


def low_stock_products(company):
    return (
        Product.objects.active(company)
        .filter(stock__lte=F("min_stock_level"))
        .order_by("stock", "name")
    )


# ----------------------------
# Expenses
# ----------------------------
def _apply_expense_data(expense, data):
    fields = _assign(expense, data, EXPENSE_TEXT_FIELDS)
    if data.get("amount") not in (None, ""):
        expense.amount = money(parse_decimal(data["amount"], "amount", positive=True))
        fields.append("amount")
    if data.get("vat") not in (None, ""):
        vat = parse_decimal(data["vat"], "vat")
        if vat not in EXPENSE_VAT_RATES:
            raise ValidationFailed("vat must be one of 0, 5 or 20")
        expense.vat = vat
        fields.append("vat")
    if data.get("date"):
        expense.date = parse_day(data["date"])
        fields.append("date")
    return fields


def create_expense(company, data) -> Expense:
    require(data, "category", "description", "amount", "payment_method")
    expense = Expense(company=company, date=timezone.localdate(), vat=Decimal("0"))
    _apply_expense_data(expense, data)
    expense.save()
    return expense


def update_expense(company, expense_id, data) -> Expense:
    with transaction.atomic():
        expense = get_owned(
            Expense, company, expense_id, "Expense",
            queryset=Expense.objects.filter(is_active=True), for_update=True,
        )
        fields = _apply_expense_data(expense, data)
        if fields:
            expense.save(update_fields=fields + ["updated_at"])
    return expense


def delete_expense(company, expense_id):
    """Soft delete; a second delete reports NotFound."""
    updated = Expense.objects.filter(
        pk=expense_id, company=company, is_active=True
    ).update(is_active=False, updated_at=timezone.now())
    if not updated:
        raise NotFound("Expense not found")
