"""Plain dict renderings of the models for JsonResponse."""


def client_dict(client):
    return {
        "id": client.pk,
        "name": client.name,
        "email": client.email,
        "phone": client.phone,
        "street": client.street,
        "city": client.city,
        "postal_code": client.postal_code,
        "is_active": client.is_active,
        "total_dues": client.total_dues,
        "created_at": client.created_at,
    }


def supplier_dict(supplier):
    return {
        "id": supplier.pk,
        "name": supplier.name,
        "email": supplier.email,
        "phone": supplier.phone,
        "address": supplier.address,
        "city": supplier.city,
        "state": supplier.state,
        "zip_code": supplier.zip_code,
        "bank_account_name": supplier.bank_account_name,
        "bank_account_number": supplier.bank_account_number,
        "bank_name": supplier.bank_name,
        "bank_sort_code": supplier.bank_sort_code,
        "is_active": supplier.is_active,
        "total_debit": supplier.total_debit,
        "total_credit": supplier.total_credit,
        "payable": supplier.payable,
        "created_at": supplier.created_at,
    }


def product_dict(product):
    return {
        "id": product.pk,
        "serial_no": product.serial_no,
        "name": product.name,
        "description": product.description,
        "category": product.category,
        "unit": product.unit,
        "cost_price": product.cost_price,
        "selling_price": product.selling_price,
        "stock": product.stock,
        "min_stock_level": product.min_stock_level,
        "is_low_stock": product.is_low_stock,
        "vat": product.vat,
        "supplier_id": product.supplier_id,
        "is_active": product.is_active,
    }


def order_dict(order):
    return {
        "id": order.pk,
        "order_no": order.order_no,
        "client_id": order.client_id,
        "client_name": order.client_name,
        "status": order.status,
        "invoice_type": order.invoice_type,
        "payment_method": order.payment_method,
        "delivery_cost": order.delivery_cost,
        "include_vat": order.include_vat,
        "total": order.total,
        "idempotency_key": order.idempotency_key,
        "created_at": order.created_at,
        "lines": [
            {
                "id": line.pk,
                "product_id": line.product_id,
                "product_name": line.product_name,
                "quantity": line.quantity,
                "price": line.price,
                "vat_rate": line.vat_rate,
            }
            for line in order.lines.all()
        ],
    }


def payment_dict(payment):
    return {
        "id": payment.pk,
        "payment_no": payment.payment_no,
        "client_id": payment.client_id,
        "supplier_id": payment.supplier_id,
        "amount": payment.amount,
        "payment_method": payment.payment_method,
        "date": payment.date,
    }


def purchase_dict(purchase):
    return {
        "id": purchase.pk,
        "purchase_order_no": purchase.purchase_order_no,
        "kind": purchase.kind,
        "supplier_id": purchase.supplier_id,
        "invoice_no": purchase.invoice_no,
        "date_received": purchase.date_received,
        "payment_method": purchase.payment_method,
        "notes": purchase.notes,
        "subtotal": purchase.subtotal,
        "vat_rate": purchase.vat_rate,
        "vat_amount": purchase.vat_amount,
        "total_amount": purchase.total_amount,
        "items": [
            {
                "id": line.pk,
                "product_id": line.product_id,
                "product_name": line.product_name,
                "quantity": line.quantity,
                "unit_price": line.unit_price,
                "line_total": line.line_total,
            }
            for line in purchase.lines.all()
        ],
    }


def credit_note_dict(note):
    return {
        "id": note.pk,
        "credit_note_no": note.credit_note_no,
        "kind": note.kind,
        "client_id": note.client_id,
        "client_name": note.client_name,
        "order_id": note.order_id,
        "order_no": note.order_no,
        "total_amount": note.total_amount,
        "status": note.status,
        "date": note.date,
        "applied_to_dues": note.applied_to_dues,
        "is_deleted": note.is_deleted,
        "items": [
            {
                "product_id": line.product_id,
                "product_name": line.product_name,
                "quantity": line.quantity,
                "price": line.price,
                "reason": line.reason,
            }
            for line in note.lines.all()
        ],
    }


def expense_dict(expense):
    return {
        "id": expense.pk,
        "date": expense.date,
        "category": expense.category,
        "description": expense.description,
        "amount": expense.amount,
        "payment_method": expense.payment_method,
        "reference": expense.reference,
        "notes": expense.notes,
        "vat": expense.vat,
    }


def statement_dict(statement, entity_key, entity_dict):
    data = {key: value for key, value in statement.items() if key != entity_key}
    data[entity_key] = entity_dict(statement[entity_key])
    return data
