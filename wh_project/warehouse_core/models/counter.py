from django.db import models

from ..managers import TenantManager
from .entitymembership import Company


class SequenceCounter(models.Model):
    """
    Per-tenant, per-series integer source for document numbers.
    Created lazily with value 0; services.sequences.next_value()
    is the only writer apart from resync_counter().
    """

    company = models.ForeignKey(Company, on_delete=models.CASCADE)
    # Series name, e.g. "order", "payment", "purchase_order"
    name = models.CharField(max_length=50)
    # Last value handed out
    value = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["company", "name"], name="uq_company_counter_name"
            ),
        ]

    def __str__(self):
        return f"{self.company} {self.name}={self.value}"
