from decimal import Decimal

from django.db import models

from ..managers import TenantManager
from .entitymembership import Company


# ---------- Supplier ----------
# Mirrors Client but for the payable side
class Supplier(models.Model):
    company = models.ForeignKey(Company, on_delete=models.CASCADE)

    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=40)
    address = models.CharField(max_length=200)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100, blank=True, default="")
    zip_code = models.CharField(max_length=20, blank=True, default="")

    # Bank details used when paying the supplier
    bank_account_name = models.CharField(max_length=200, blank=True, default="")
    bank_account_number = models.CharField(max_length=64, blank=True, default="")
    bank_name = models.CharField(max_length=200, blank=True, default="")
    bank_sort_code = models.CharField(max_length=32, blank=True, default="")

    is_active = models.BooleanField(default=True)

    # total_debit: purchases owed by the business
    # total_credit: payments made to the supplier
    total_debit = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00")
    )
    total_credit = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00")
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    class Meta:
        indexes = [
            models.Index(fields=["company", "name"], name="supplier_company_name_idx"),
            models.Index(fields=["company", "is_active"], name="supplier_company_active_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def payable(self):
        """Net amount the business still owes this supplier."""
        return (self.total_debit or Decimal("0.00")) - (self.total_credit or Decimal("0.00"))

    def save(self, *args, **kwargs):
        self.email = (self.email or "").strip().lower()
        self.full_clean()
        return super().save(*args, **kwargs)
