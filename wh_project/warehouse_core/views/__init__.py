from .clients import (client_detail, client_list, client_reconcile,
                      client_statement)
from .counters import counter_resync
from .credit_notes import (credit_note_detail, credit_note_list,
                           credit_note_status)
from .expenses import expense_detail, expense_list
from .orders import order_detail, order_list, order_status
from .payments import payment_detail, payment_list
from .products import (product_detail, product_list, product_low_stock,
                       product_stock)
from .purchases import purchase_detail, purchase_list
from .suppliers import (supplier_detail, supplier_goods, supplier_invoices,
                        supplier_list, supplier_reconcile, supplier_statement)
