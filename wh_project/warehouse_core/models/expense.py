from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from ..managers import TenantManager
from .entitymembership import Company

EXPENSE_VAT_CHOICES = [
    (Decimal("0"), "0%"),
    (Decimal("5"), "5%"),
    (Decimal("20"), "20%"),
]


class Expense(models.Model):  # Running cost of the business (rent, fuel...)
    company = models.ForeignKey(Company, on_delete=models.CASCADE)

    date = models.DateField(default=timezone.localdate)
    category = models.CharField(max_length=100)
    description = models.CharField(max_length=255)
    amount = models.DecimalField(max_digits=18, decimal_places=2)
    payment_method = models.CharField(max_length=50)
    reference = models.CharField(max_length=100, blank=True, default="")
    notes = models.TextField(blank=True, default="")
    vat = models.DecimalField(
        max_digits=5, decimal_places=2, choices=EXPENSE_VAT_CHOICES, default=Decimal("0")
    )

    # Soft delete
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    class Meta:
        ordering = ["-date", "-created_at"]
        indexes = [models.Index(fields=["company", "category", "date"], name="expense_company_cat_date_idx")]

    def __str__(self):
        return f"{self.date} {self.category}: {self.amount}"

    def clean(self):
        if self.amount is not None and self.amount <= 0:
            raise ValidationError("Amount must be greater than 0")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
