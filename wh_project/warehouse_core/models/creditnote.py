from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from ..managers import CreditNoteManager, TenantManager
from .client import Client
from .entitymembership import Company
from .order import Order
from .product import Product

CREDIT_NOTE_KIND_CHOICES = [
    # emitted when an order is cancelled, no stock movement
    ("cancellation", "Cancellation"),
    # goods came back, item quantities are restocked
    ("return", "Return"),
]

CREDIT_NOTE_STATUS_CHOICES = [
    ("pending", "Pending"),
    ("approved", "Approved"),
    ("refunded", "Refunded"),
    ("adjusted", "Adjusted"),
]


class CreditNote(models.Model):
    company = models.ForeignKey(Company, on_delete=models.CASCADE)
    client = models.ForeignKey(
        Client, on_delete=models.PROTECT, related_name="credit_notes"
    )
    client_name = models.CharField(max_length=200, blank=True, default="")

    # e.g. "CN-00012"
    credit_note_no = models.CharField(max_length=64)
    kind = models.CharField(max_length=20, choices=CREDIT_NOTE_KIND_CHOICES)

    # Optional link, snapshot number kept if the order is deleted
    order = models.ForeignKey(
        Order,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="credit_notes",
    )
    order_no = models.CharField(max_length=64, blank=True, default="")

    total_amount = models.DecimalField(max_digits=18, decimal_places=2)
    status = models.CharField(
        max_length=20, choices=CREDIT_NOTE_STATUS_CHOICES, default="pending"
    )
    date = models.DateField(default=timezone.localdate)

    # False for cancellation notes of orders that never reached client dues
    # (cash, proforma...); such notes carry no balance delta
    applied_to_dues = models.BooleanField(default=True)

    # Soft delete: a deleted note has had its dues/stock effect reversed
    is_deleted = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CreditNoteManager()

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["company", "client"], name="creditnote_company_client_idx"),
            models.Index(fields=["company", "order"], name="creditnote_company_order_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "credit_note_no"],
                name="uq_creditnote_company_number",
            ),
            models.CheckConstraint(
                condition=models.Q(total_amount__gte=0),
                name="creditnote_total_non_negative",
            ),
        ]

    def __str__(self):
        return f"Credit note {self.credit_note_no or self.pk}"

    @property
    def is_return(self):
        return self.kind == "return"

    def clean(self):
        if self.client_id and self.client.company_id != self.company_id:
            raise ValidationError("Client must belong to the same company.")
        if self.order_id and self.order.company_id != self.company_id:
            raise ValidationError("Order must belong to the same company.")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)


class CreditNoteLine(models.Model):
    company = models.ForeignKey(Company, on_delete=models.CASCADE)
    credit_note = models.ForeignKey(
        CreditNote, on_delete=models.CASCADE, related_name="lines"
    )

    product = models.ForeignKey(
        Product, null=True, blank=True, on_delete=models.SET_NULL
    )
    product_name = models.CharField(max_length=200, blank=True, default="")
    quantity = models.PositiveIntegerField()
    price = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00")
    )
    # e.g. "Damaged", "Wrong Item", "Order Cancelled"
    reason = models.CharField(max_length=200, blank=True, default="")

    objects = TenantManager()

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1) & models.Q(price__gte=0),
                name="creditnoteline_positive_amounts",
            ),
        ]

    def __str__(self):
        return f"{self.credit_note.credit_note_no}: {self.quantity} x {self.product_name}"
