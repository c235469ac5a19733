from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from ..managers import TenantManager
from .client import Client
from .entitymembership import Company
from .product import Product

ORDER_STATUS_CHOICES = [
    ("pending", "Pending"),
    ("in_progress", "In progress"),
    ("dispatched", "Dispatched"),
    ("delivered", "Delivered"),
    ("cancelled", "Cancelled"),
]

INVOICE_TYPE_CHOICES = [
    # receivable: the only type that moves client dues
    ("on_account", "On Account"),
    ("cash", "Cash"),
    ("picking_list", "Picking List"),
    ("proforma", "Proforma"),
    ("invoice", "Invoice"),
]


class Order(models.Model):  # Sale document

    company = models.ForeignKey(Company, on_delete=models.CASCADE)

    # prevent deleting a client who has orders
    client = models.ForeignKey(Client, on_delete=models.PROTECT, related_name="orders")
    # Client name at order time, survives renames
    client_name = models.CharField(max_length=200, blank=True, default="")

    # Human-readable number, e.g. "INV-00042"
    order_no = models.CharField(max_length=64)

    status = models.CharField(
        max_length=20, choices=ORDER_STATUS_CHOICES, default="pending"
    )
    invoice_type = models.CharField(
        max_length=20, choices=INVOICE_TYPE_CHOICES, default="invoice"
    )
    payment_method = models.CharField(max_length=50, default="Bank Transfer")

    delivery_cost = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00")
    )
    include_vat = models.BooleanField(default=True)

    # Σ lines (+VAT) + delivery_cost, computed by services.orders
    total = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00")
    )

    # Optional client-supplied key; a resubmission returns the first order
    idempotency_key = models.CharField(max_length=100, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["company", "created_at"], name="order_company_created_idx"),
            models.Index(fields=["company", "status"], name="order_company_status_idx"),
            models.Index(fields=["company", "invoice_type"], name="order_company_type_idx"),
            models.Index(fields=["client", "status"], name="order_client_status_idx"),
        ]
        constraints = [
            # Within one company, each order number must be unique
            models.UniqueConstraint(
                fields=["company", "order_no"], name="uq_order_company_number"
            ),
            models.UniqueConstraint(
                fields=["company", "idempotency_key"],
                name="uq_order_company_idempotency_key",
            ),
            models.CheckConstraint(
                condition=models.Q(total__gte=0), name="order_total_non_negative"
            ),
        ]

    def __str__(self):
        return f"Order {self.order_no or self.pk}"

    @property
    def is_on_account(self):
        return self.invoice_type == "on_account"

    @property
    def is_cancelled(self):
        return self.status == "cancelled"

    def clean(self):
        if self.client_id and self.client.company_id != self.company_id:
            raise ValidationError("Client must belong to the same company.")
        if self.delivery_cost is not None and self.delivery_cost < 0:
            raise ValidationError("Delivery cost must be >= 0")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)


class OrderLine(models.Model):  # One product sold on an order

    company = models.ForeignKey(Company, on_delete=models.CASCADE)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="lines")

    # Weak reference: the snapshot fields below keep history readable
    # after the product is removed from the catalog
    product = models.ForeignKey(
        Product, null=True, blank=True, on_delete=models.SET_NULL
    )
    product_name = models.CharField(max_length=200, blank=True, default="")

    quantity = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=18, decimal_places=2)
    # VAT % in force when the line was written
    vat_rate = models.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal("0.00")
    )

    objects = TenantManager()

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(fields=["company", "order"], name="orderline_company_order_idx"),
            models.Index(fields=["company", "product"], name="orderline_company_product_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1) & models.Q(price__gte=0),
                name="orderline_positive_amounts",
            ),
        ]

    def __str__(self):
        return f"{self.order.order_no}: {self.quantity} x {self.product_name}"

    @property
    def net_amount(self):
        return Decimal(self.quantity) * self.price
