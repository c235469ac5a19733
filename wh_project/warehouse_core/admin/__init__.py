from .actions import (cancel_orders, check_balances, check_company_balances,
                      mark_orders_delivered, repair_balances,
                      resync_company_counters)
from .catalog import ExpenseAdmin, ProductAdmin
from .documents import CreditNoteAdmin, OrderAdmin, PaymentAdmin, PurchaseAdmin
from .forms import UserAdminChangeForm, UserAdminCreationForm
from .inlines import CreditNoteLineInline, OrderLineInline, PurchaseLineInline
from .ledger import BalanceEntryAdmin, SequenceCounterAdmin
from .membership import CompanyAdmin, EntityMembershipAdmin, UserAdmin
from .mixins import TenantAdminMixin
from .parties import ClientAdmin, SupplierAdmin
from .readonly import ReadOnlyAdmin
