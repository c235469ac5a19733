from django.core.exceptions import ValidationError
from django.db.models.signals import pre_delete
from django.dispatch import receiver

from .models import BalanceEntry, Client, SequenceCounter, Supplier

"""Block client deletion while the client still owes or is owed money."""


# pre_delete signal auto-fires just before Django deletes a model instance,
# admin and queryset deletes included
@receiver(pre_delete, sender=Client)
def prevent_delete_client_with_dues(sender, instance, **kwargs):
    if instance.total_dues != 0:
        raise ValidationError("Cannot delete a client with outstanding dues.")


"""Block supplier deletion while a debit or credit is on file."""


@receiver(pre_delete, sender=Supplier)
def prevent_delete_supplier_with_balance(sender, instance, **kwargs):
    if instance.total_debit != 0 or instance.total_credit != 0:
        raise ValidationError("Cannot delete a supplier with a balance.")


"""
    Balance entries and counters only disappear together with
    their client, supplier or company (cascade), never on their own.
"""


def _direct_delete(model, origin):
    # origin is the instance or queryset the delete() call started from
    return isinstance(origin, model) or getattr(origin, "model", None) is model


@receiver(pre_delete, sender=BalanceEntry)
def prevent_delete_balance_entry(sender, instance, origin=None, **kwargs):
    if _direct_delete(BalanceEntry, origin):
        raise ValidationError("Balance entries are append-only.")


@receiver(pre_delete, sender=SequenceCounter)
def prevent_delete_sequence_counter(sender, instance, origin=None, **kwargs):
    if _direct_delete(SequenceCounter, origin):
        raise ValidationError("Sequence counters cannot be deleted, resync them instead.")
