from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from ..managers import TenantManager
from .client import Client
from .entitymembership import Company
from .supplier import Supplier


class Payment(models.Model):
    """
    Cash movement against exactly one counterparty:
    a client paying us, or us paying a supplier.
    """

    company = models.ForeignKey(Company, on_delete=models.CASCADE)

    client = models.ForeignKey(
        Client, null=True, blank=True, on_delete=models.PROTECT, related_name="payments"
    )
    supplier = models.ForeignKey(
        Supplier, null=True, blank=True, on_delete=models.PROTECT, related_name="payments"
    )

    amount = models.DecimalField(max_digits=18, decimal_places=2)
    payment_method = models.CharField(max_length=50)
    # e.g. "PAY0007"
    payment_no = models.CharField(max_length=64)
    date = models.DateField(default=timezone.localdate)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    class Meta:
        ordering = ["-date", "-id"]
        indexes = [
            models.Index(fields=["company", "client"], name="payment_company_client_idx"),
            models.Index(fields=["company", "supplier"], name="payment_company_supplier_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "payment_no"], name="uq_payment_company_number"
            ),
            # exactly one of client / supplier
            models.CheckConstraint(
                condition=(
                    models.Q(client__isnull=False, supplier__isnull=True)
                    | models.Q(client__isnull=True, supplier__isnull=False)
                ),
                name="payment_single_counterparty",
            ),
            models.CheckConstraint(
                condition=models.Q(amount__gt=0), name="payment_amount_positive"
            ),
        ]

    def __str__(self):
        return f"{self.payment_no}: {self.amount}"

    @property
    def counterparty(self):
        return self.client if self.client_id else self.supplier

    def clean(self):
        if bool(self.client_id) == bool(self.supplier_id):
            raise ValidationError("Payment needs exactly one of client or supplier.")
        if self.amount is not None and self.amount <= Decimal("0"):
            raise ValidationError("Amount must be greater than 0")
        party = self.counterparty
        if party is not None and party.company_id != self.company_id:
            raise ValidationError("Counterparty must belong to the same company.")

    def save(self, *args, **kwargs):
        # clean() covers the check constraints, the database enforces them again
        self.full_clean(validate_constraints=False)
        return super().save(*args, **kwargs)
