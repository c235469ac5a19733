from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from ..managers import TenantManager
from .entitymembership import Company
from .product import Product
from .supplier import Supplier

PURCHASE_KIND_CHOICES = [
    # items received into stock
    ("goods_receipt", "Goods receipt"),
    # supplier invoice with a net/VAT amount and no stock movement
    ("invoice", "Supplier invoice"),
]


# ---------- Purchases / PurchaseLines ----------
# Header represents a supplier document (payable side)
class Purchase(models.Model):
    company = models.ForeignKey(Company, on_delete=models.CASCADE)
    # prevent deleting a supplier who has purchases
    supplier = models.ForeignKey(
        Supplier, on_delete=models.PROTECT, related_name="purchases"
    )

    kind = models.CharField(
        max_length=20, choices=PURCHASE_KIND_CHOICES, default="goods_receipt"
    )

    # Our number, e.g. "PO-ID-0007"
    purchase_order_no = models.CharField(max_length=64)
    # Supplier's own invoice number, optional
    invoice_no = models.CharField(max_length=64, blank=True, default="")

    date_received = models.DateField(default=timezone.localdate)
    payment_method = models.CharField(max_length=50, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    subtotal = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00")
    )
    vat_rate = models.DecimalField(
        max_digits=7, decimal_places=2, default=Decimal("0.00")
    )
    vat_amount = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00")
    )
    # subtotal + vat_amount, added to supplier.total_debit
    total_amount = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00")
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    class Meta:
        ordering = ["-date_received", "-id"]
        indexes = [
            models.Index(fields=["company", "supplier"], name="purchase_company_supplier_idx"),
            models.Index(fields=["company", "date_received"], name="purchase_company_date_idx"),
        ]
        constraints = [
            # Within one company, each purchase number must be unique
            models.UniqueConstraint(
                fields=["company", "purchase_order_no"],
                name="uq_purchase_company_number",
            ),
        ]

    def __str__(self):
        return f"Purchase {self.purchase_order_no or self.pk}"

    @property
    def is_goods_receipt(self):
        return self.kind == "goods_receipt"

    def clean(self):
        if self.supplier_id and self.supplier.company_id != self.company_id:
            raise ValidationError("Supplier must belong to the same company.")
        if self.total_amount is not None and self.total_amount < 0:
            raise ValidationError("Total amount must be >= 0")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)


class PurchaseLine(models.Model):  # Detail line of a purchase

    company = models.ForeignKey(Company, on_delete=models.CASCADE)
    purchase = models.ForeignKey(
        Purchase, on_delete=models.CASCADE, related_name="lines"
    )

    product = models.ForeignKey(
        Product, null=True, blank=True, on_delete=models.SET_NULL
    )
    product_name = models.CharField(max_length=200)

    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=18, decimal_places=2)
    line_total = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00")
    )

    objects = TenantManager()

    class Meta:
        ordering = ["id"]
        indexes = [models.Index(fields=["company", "purchase"], name="purchaseline_company_purch_idx")]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(unit_price__gte=0),
                name="purchaseline_non_negative_price",
            ),
        ]

    def __str__(self):
        return f"{self.purchase.purchase_order_no}: {self.quantity} x {self.product_name}"

    def save(self, *args, **kwargs):
        # line_total always follows quantity * unit_price
        self.line_total = Decimal(self.quantity or 0) * (self.unit_price or Decimal("0"))
        return super().save(*args, **kwargs)
