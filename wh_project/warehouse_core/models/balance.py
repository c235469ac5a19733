from django.core.exceptions import ValidationError
from django.db import models

from ..managers import TenantManager
from .client import Client
from .entitymembership import Company
from .supplier import Supplier

BALANCE_FIELD_CHOICES = [
    ("total_dues", "Client dues"),
    ("total_debit", "Supplier debit"),
    ("total_credit", "Supplier credit"),
]

BALANCE_EVENT_CHOICES = [
    ("order_created", "Order created"),
    ("order_updated", "Order updated"),
    ("order_cancelled", "Order cancelled"),
    ("order_uncancelled", "Order un-cancelled"),
    ("order_deleted", "Order deleted"),
    ("payment_created", "Payment created"),
    ("payment_updated", "Payment updated"),
    ("payment_deleted", "Payment deleted"),
    ("purchase_created", "Purchase created"),
    ("purchase_updated", "Purchase updated"),
    ("purchase_deleted", "Purchase deleted"),
    ("credit_note_created", "Credit note created"),
    ("credit_note_updated", "Credit note updated"),
    ("credit_note_deleted", "Credit note deleted"),
    # written by services.ledger.reconcile(fix=True)
    ("adjustment", "Adjustment"),
]


# ---------- Balance entries ----------
class BalanceEntry(models.Model):
    """
    Append-only record of one signed delta applied to a stored balance.
    Folding the entries of an entity gives back its stored balance.
    """

    company = models.ForeignKey(Company, on_delete=models.CASCADE)

    client = models.ForeignKey(
        Client,
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="balance_entries",
    )
    supplier = models.ForeignKey(
        Supplier,
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="balance_entries",
    )

    field = models.CharField(max_length=20, choices=BALANCE_FIELD_CHOICES)
    amount = models.DecimalField(max_digits=18, decimal_places=2)
    event = models.CharField(max_length=30, choices=BALANCE_EVENT_CHOICES)

    # Document that caused the delta: model name + pk + number snapshot
    source_type = models.CharField(max_length=50, blank=True, default="")
    source_id = models.PositiveBigIntegerField(null=True, blank=True)
    reference = models.CharField(max_length=64, blank=True, default="")

    note = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TenantManager()

    class Meta:
        ordering = ["created_at", "id"]
        verbose_name_plural = "balance entries"
        indexes = [
            models.Index(fields=["company", "client", "created_at"], name="balance_company_client_idx"),
            models.Index(fields=["company", "supplier", "created_at"], name="balance_company_supplier_idx"),
            models.Index(fields=["source_type", "source_id"], name="balance_source_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(client__isnull=False, supplier__isnull=True)
                    | models.Q(client__isnull=True, supplier__isnull=False)
                ),
                name="balanceentry_single_entity",
            ),
        ]

    def __str__(self):
        return f"{self.event} {self.field} {self.amount:+}"

    def save(self, *args, **kwargs):
        # entries are written once and never edited
        if self.pk:
            raise ValidationError("Balance entries are append-only.")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Balance entries are append-only.")
