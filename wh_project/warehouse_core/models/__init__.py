from .balance import BalanceEntry
from .client import Client
from .counter import SequenceCounter
from .creditnote import CreditNote, CreditNoteLine
from .entitymembership import Company, EntityMembership, User
from .expense import Expense
from .order import Order, OrderLine
from .payment import Payment
from .product import Product
from .purchase import Purchase, PurchaseLine
from .supplier import Supplier
