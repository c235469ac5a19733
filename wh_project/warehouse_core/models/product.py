from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from ..managers import TenantManager
from .entitymembership import Company
from .supplier import Supplier


# ---------- Product ----------
class Product(models.Model):  # Catalog item the company buys and sells

    company = models.ForeignKey(Company, on_delete=models.CASCADE)

    # Warehouse code, unique per company
    serial_no = models.CharField(max_length=80)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=100)
    unit = models.CharField(max_length=40)

    cost_price = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00")
    )
    selling_price = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00")
    )

    # Units on hand. Never negative: decrements go through
    # services.stock.take_stock() which guards on stock >= qty
    stock = models.IntegerField(default=0)
    min_stock_level = models.IntegerField(default=50)

    # VAT percentage, NULL means "use WAREHOUSE['DEFAULT_VAT_RATE']"
    vat = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True
    )

    supplier = models.ForeignKey(
        Supplier,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="products",
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    class Meta:
        indexes = [
            models.Index(fields=["company", "is_active"], name="product_company_active_idx"),
            models.Index(fields=["company", "stock"], name="product_company_stock_idx"),
            models.Index(fields=["company", "category"], name="product_company_category_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "serial_no"], name="uq_company_product_serial"
            ),
            models.CheckConstraint(
                condition=models.Q(stock__gte=0), name="product_stock_non_negative"
            ),
        ]

    def __str__(self):
        return self.name

    @property
    def is_low_stock(self):
        return self.stock <= self.min_stock_level

    def clean(self):
        if self.cost_price is not None and self.cost_price < 0:
            raise ValidationError("Cost price must be >= 0")
        if self.selling_price is not None and self.selling_price < 0:
            raise ValidationError("Selling price must be >= 0")
        if self.vat is not None and not (Decimal("0") <= self.vat <= Decimal("100")):
            raise ValidationError("VAT must be between 0 and 100")
        # Supplier of another company cannot be linked
        if self.supplier_id and self.supplier.company_id != self.company_id:
            raise ValidationError(
                "Supplier must belong to the same company as the product."
            )

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
