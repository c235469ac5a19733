from .catalog import (adjust_stock, create_client, create_expense,
                      create_product, create_supplier, delete_client,
                      delete_expense, delete_product, delete_supplier,
                      low_stock_products, update_client, update_expense,
                      update_product, update_supplier)
from .credit_notes import (create_credit_note, delete_credit_note,
                           emit_cancellation_note, set_credit_note_status,
                           update_credit_note, withdraw_cancellation_note)
from .ledger import (BalanceDrift, apply_delta, fold_entries, reconcile,
                     reconcile_entity, recompute_from_documents)
from .orders import (compute_total, create_order, delete_order,
                     normalize_invoice_type, set_order_status, update_order)
from .payments import create_payment, delete_payment, update_payment
from .purchases import (delete_purchase, record_goods_receipt,
                        record_supplier_invoice, update_purchase)
from .sequences import format_number, mint_number, next_value, resync_counter
from .statements import client_statement, supplier_statement
from .stock import return_stock, take_stock
