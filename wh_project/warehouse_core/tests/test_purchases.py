from decimal import Decimal

from django.test import TestCase

from warehouse_core import services
from warehouse_core.exceptions import InsufficientStock, ValidationFailed
from warehouse_core.services.ledger import reconcile_entity

from .helpers import make_client, make_company, make_product, make_supplier


class PurchaseTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.supplier = make_supplier(self.company)
        self.rice = make_product(self.company, "RICE", stock=0, vat=Decimal("0"))
        self.oil = make_product(self.company, "OIL", stock=0, vat=Decimal("0"))

    def receive(self, rice_qty=10, oil_qty=5, vat_rate="0"):
        return services.record_goods_receipt(self.company, self.supplier.pk, {
            "items": [
                {"product_id": self.rice.pk, "quantity": rice_qty, "unit_price": "10.00"},
                {"product_id": self.oil.pk, "quantity": oil_qty, "unit_price": "20.00"},
            ],
            "vat_rate": vat_rate,
            "invoice_no": "FF-991",
        })

    def debit(self):
        self.supplier.refresh_from_db()
        return self.supplier.total_debit

    def stock(self, product):
        product.refresh_from_db()
        return product.stock

    def test_goods_receipt_raises_stock_and_debit(self):
        purchase = self.receive(vat_rate="20")

        self.assertEqual(purchase.purchase_order_no, "PO-ID-0001")
        self.assertEqual(purchase.subtotal, Decimal("200.00"))
        self.assertEqual(purchase.vat_amount, Decimal("40.00"))
        self.assertEqual(purchase.total_amount, Decimal("240.00"))
        self.assertEqual(
            [line.line_total for line in purchase.lines.all()],
            [Decimal("100.00"), Decimal("100.00")],
        )
        self.assertEqual(self.stock(self.rice), 10)
        self.assertEqual(self.stock(self.oil), 5)
        self.assertEqual(self.debit(), Decimal("240.00"))

    def test_supplier_invoice_has_no_goods_movement(self):
        purchase = services.record_supplier_invoice(self.company, self.supplier.pk, {
            "net_amount": "100", "vat_amount": "20", "invoice_no": "BILL-7",
        })

        self.assertEqual(purchase.kind, "invoice")
        self.assertEqual(purchase.vat_rate, Decimal("20.00"))
        self.assertEqual(purchase.total_amount, Decimal("120.00"))
        self.assertEqual(purchase.lines.get().product_name, "Invoice BILL-7")
        self.assertEqual(self.stock(self.rice), 0)
        self.assertEqual(self.debit(), Decimal("120.00"))

    def test_supplier_invoice_requires_net_amount(self):
        with self.assertRaises(ValidationFailed):
            services.record_supplier_invoice(self.company, self.supplier.pk, {"vat_amount": "5"})

    def test_update_receipt_moves_stock_and_debit_by_difference(self):
        purchase = self.receive()
        services.update_purchase(self.company, purchase.pk, {
            "items": [{"product_id": self.rice.pk, "quantity": 4, "unit_price": "10.00"}],
        })

        self.assertEqual(self.stock(self.rice), 4)
        self.assertEqual(self.stock(self.oil), 0)
        self.assertEqual(self.debit(), Decimal("40.00"))
        self.assertEqual(reconcile_entity(self.supplier), [])

    def test_update_supplier_invoice_amounts(self):
        purchase = services.record_supplier_invoice(self.company, self.supplier.pk, {"net_amount": "100"})
        purchase = services.update_purchase(self.company, purchase.pk, {"net_amount": "150", "vat_amount": "30"})

        self.assertEqual(purchase.total_amount, Decimal("180.00"))
        self.assertEqual(purchase.lines.get().line_total, Decimal("150.00"))
        self.assertEqual(self.debit(), Decimal("180.00"))

    def test_delete_receipt_takes_goods_back(self):
        purchase = self.receive()
        services.delete_purchase(self.company, purchase.pk)

        self.assertEqual(self.stock(self.rice), 0)
        self.assertEqual(self.debit(), Decimal("0.00"))
        self.assertEqual(reconcile_entity(self.supplier), [])

    def test_sold_goods_block_receipt_deletion(self):
        purchase = self.receive()
        client = make_client(self.company)
        services.create_order(self.company, {
            "client_id": client.pk,
            "lines": [{"product_id": self.rice.pk, "quantity": 8}],
        })

        with self.assertRaises(InsufficientStock):
            services.delete_purchase(self.company, purchase.pk)
        self.assertEqual(self.stock(self.rice), 2)
        self.assertEqual(self.stock(self.oil), 5)
        self.assertEqual(self.debit(), Decimal("200.00"))
