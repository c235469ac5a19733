import datetime
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from warehouse_core import services
from warehouse_core.exceptions import NotFound

from .helpers import make_client, make_company, make_product, make_supplier


class StatementTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.shop = make_client(self.company)
        self.supplier = make_supplier(self.company)
        self.product = make_product(self.company, stock=20, price="10.00", vat=Decimal("0"))
        self.today = timezone.localdate()

        services.create_order(self.company, {
            "client_id": self.shop.pk,
            "invoice_type": "on_account",
            "lines": [{"product_id": self.product.pk, "quantity": 3}],
        })
        services.create_payment(self.company, {
            "client_id": self.shop.pk, "amount": "10", "payment_method": "Cash",
        })

    def test_client_statement_runs_the_balance(self):
        statement = services.client_statement(self.company, self.shop.pk)

        self.assertEqual(statement["opening_balance"], Decimal("0.00"))
        self.assertEqual(
            [(row["event"], row["effect"], row["balance"]) for row in statement["transactions"]],
            [
                ("order_created", Decimal("30.00"), Decimal("30.00")),
                ("payment_created", Decimal("-10.00"), Decimal("20.00")),
            ],
        )
        self.assertEqual(statement["transactions"][0]["reference"], "INV-00001")
        self.assertEqual(statement["closing_balance"], Decimal("20.00"))
        self.assertEqual(statement["current_balance"], Decimal("20.00"))

    def test_period_filters_move_history_into_opening_balance(self):
        tomorrow = self.today + datetime.timedelta(days=1)
        statement = services.client_statement(self.company, self.shop.pk, start=tomorrow)
        self.assertEqual(statement["opening_balance"], Decimal("20.00"))
        self.assertEqual(statement["transactions"], [])
        self.assertEqual(statement["closing_balance"], Decimal("20.00"))

        yesterday = self.today - datetime.timedelta(days=1)
        statement = services.client_statement(self.company, self.shop.pk, end=yesterday)
        self.assertEqual(statement["transactions"], [])
        self.assertEqual(statement["closing_balance"], Decimal("0.00"))

    def test_supplier_statement_nets_debit_against_credit(self):
        services.record_goods_receipt(self.company, self.supplier.pk, {
            "items": [{"product_id": self.product.pk, "quantity": 20, "unit_price": "10.00"}],
        })
        services.create_payment(self.company, {
            "supplier_id": self.supplier.pk, "amount": "50", "payment_method": "Bank Transfer",
        })

        statement = services.supplier_statement(self.company, self.supplier.pk)
        self.assertEqual(
            [row["effect"] for row in statement["transactions"]],
            [Decimal("200.00"), Decimal("-50.00")],
        )
        self.assertEqual(statement["closing_balance"], Decimal("150.00"))
        self.assertEqual(statement["current_balance"], Decimal("150.00"))

    def test_statement_of_another_tenant_is_not_found(self):
        other = make_company("Other Co", "other-co")
        with self.assertRaises(NotFound):
            services.client_statement(other, self.shop.pk)
