from decimal import Decimal

from django.db import models

from ..managers import TenantManager
from .entitymembership import Company


# ---------- Client ----------
# Represents a customer who receives orders (receivable side)
class Client(models.Model):
    company = models.ForeignKey(Company, on_delete=models.CASCADE)

    name = models.CharField(max_length=200)
    email = models.EmailField()
    phone = models.CharField(max_length=40, blank=True, default="")

    # Address snapshot printed on receipts
    street = models.CharField(max_length=200, blank=True, default="")
    city = models.CharField(max_length=100, blank=True, default="")
    postal_code = models.CharField(max_length=20, blank=True, default="")

    is_active = models.BooleanField(default=True)

    # Amount owed to the business.
    # Only ever changed through services.ledger.apply_delta()
    total_dues = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00")
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    class Meta:
        indexes = [
            models.Index(fields=["company", "is_active"], name="client_company_active_idx"),
            models.Index(fields=["company", "total_dues"], name="client_company_dues_idx"),
        ]
        constraints = [
            # e-mail identifies a client within one tenant
            models.UniqueConstraint(
                fields=["company", "email"], name="uq_company_client_email"
            ),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        self.email = (self.email or "").strip().lower()
        self.full_clean()
        return super().save(*args, **kwargs)
