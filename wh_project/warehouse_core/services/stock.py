import logging

from django.db.models import F

from ..exceptions import InsufficientStock
from ..models import Product
from .validation import get_owned

logger = logging.getLogger(__name__)


# ----------------------------
# Stock movements
# ----------------------------
def take_stock(company, product_id, qty: int) -> Product:
    """
    Guarded decrement: the row only changes while stock >= qty,
    so two concurrent sales can never drive it below zero.
    """
    product = get_owned(Product, company, product_id, "Product")
    if qty <= 0:
        return product

    updated = Product.objects.filter(
        pk=product.pk, company=company, stock__gte=qty
    ).update(stock=F("stock") - qty)

    if not updated:
        product.refresh_from_db(fields=["stock"])
        raise InsufficientStock(product.name, product.stock, qty)

    logger.debug("Took %s x %s (company %s)", qty, product.name, company.pk)
    return product


def return_stock(company, product_id, qty: int):
    """Put units back. Products removed from the catalog are skipped."""
    if product_id is None or qty <= 0:
        return 0
    return Product.objects.filter(pk=product_id, company=company).update(
        stock=F("stock") + qty
    )
