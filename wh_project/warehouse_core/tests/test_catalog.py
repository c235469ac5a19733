from decimal import Decimal

from django.test import TestCase

from warehouse_core import services
from warehouse_core.exceptions import (InsufficientStock, NotFound,
                                       ValidationFailed)
from warehouse_core.models import Client, Expense

from .helpers import make_client, make_company, make_product, make_supplier


class ClientSupplierTests(TestCase):
    def setUp(self):
        self.company = make_company()

    def test_client_crud_keeps_dues_out_of_reach(self):
        client = services.create_client(self.company, {
            "name": "Corner Shop", "email": "Owner@Corner.example.com", "total_dues": "500",
        })
        self.assertEqual(client.email, "owner@corner.example.com")
        self.assertEqual(client.total_dues, Decimal("0.00"))

        client = services.update_client(self.company, client.pk, {"city": "York", "total_dues": "9"})
        client.refresh_from_db()
        self.assertEqual(client.city, "York")
        self.assertEqual(client.total_dues, Decimal("0.00"))

        services.delete_client(self.company, client.pk)
        self.assertFalse(Client.objects.filter(pk=client.pk).exists())

    def test_client_requires_name_and_email(self):
        with self.assertRaises(ValidationFailed):
            services.create_client(self.company, {"name": "No Mail"})

    def test_client_with_documents_cannot_be_deleted(self):
        client = make_client(self.company)
        services.create_payment(self.company, {
            "client_id": client.pk, "amount": "5", "payment_method": "Cash",
        })
        with self.assertRaises(ValidationFailed):
            services.delete_client(self.company, client.pk)

    def test_supplier_with_balance_cannot_be_deleted(self):
        supplier = make_supplier(self.company)
        services.record_supplier_invoice(self.company, supplier.pk, {"net_amount": "10"})
        with self.assertRaises(ValidationFailed):
            services.delete_supplier(self.company, supplier.pk)

    def test_supplier_update(self):
        supplier = services.create_supplier(self.company, {
            "name": "Fresh Farms", "phone": "1", "address": "1 Road", "city": "Leeds",
        })
        supplier = services.update_supplier(self.company, supplier.pk, {"bank_name": "First Bank"})
        self.assertEqual(supplier.bank_name, "First Bank")


class ProductTests(TestCase):
    def setUp(self):
        self.company = make_company()

    def test_create_product_with_defaults(self):
        product = services.create_product(self.company, {
            "serial_no": "SKU-9", "name": "Flour", "category": "Dry", "unit": "bag",
            "selling_price": "3.5", "stock": "12",
        })
        self.assertEqual(product.selling_price, Decimal("3.50"))
        self.assertEqual(product.stock, 12)
        self.assertEqual(product.min_stock_level, 50)
        self.assertIsNone(product.vat)

    def test_adjust_stock_operations(self):
        product = make_product(self.company, stock=10)
        self.assertEqual(services.adjust_stock(self.company, product.pk, 5, "add").stock, 15)
        self.assertEqual(services.adjust_stock(self.company, product.pk, 3, "subtract").stock, 12)
        self.assertEqual(services.adjust_stock(self.company, product.pk, 7, "set").stock, 7)

        with self.assertRaises(InsufficientStock):
            services.adjust_stock(self.company, product.pk, 8, "subtract")
        with self.assertRaises(ValidationFailed):
            services.adjust_stock(self.company, product.pk, 1, "double")
        with self.assertRaises(ValidationFailed):
            services.adjust_stock(self.company, product.pk, -1, "set")

    def test_update_product_routes_stock_through_set(self):
        product = make_product(self.company, stock=10)
        product = services.update_product(self.company, product.pk, {"name": "Renamed", "stock": 4})
        self.assertEqual(product.name, "Renamed")
        self.assertEqual(product.stock, 4)

    def test_low_stock_listing(self):
        low = make_product(self.company, "LOW", stock=2)
        make_product(self.company, "HIGH", stock=500)
        services.update_product(self.company, low.pk, {"min_stock_level": 5})

        self.assertEqual([p.serial_no for p in services.low_stock_products(self.company)], ["LOW"])

    def test_invalid_vat_is_rejected(self):
        with self.assertRaises(ValidationFailed):
            services.create_product(self.company, {
                "serial_no": "S", "name": "N", "category": "C", "unit": "u", "vat": "lots",
            })


class ExpenseTests(TestCase):
    def setUp(self):
        self.company = make_company()

    def create_expense(self, **extra):
        data = {
            "category": "Fuel", "description": "Van diesel", "amount": "45.10",
            "payment_method": "Card", "vat": "20",
        }
        data.update(extra)
        return services.create_expense(self.company, data)

    def test_create_update_delete(self):
        expense = self.create_expense()
        self.assertEqual(expense.vat, Decimal("20"))

        expense = services.update_expense(self.company, expense.pk, {"amount": "50", "date": "2026-01-31"})
        self.assertEqual(expense.amount, Decimal("50.00"))
        self.assertEqual(str(expense.date), "2026-01-31")

        services.delete_expense(self.company, expense.pk)
        self.assertFalse(Expense.objects.get(pk=expense.pk).is_active)
        with self.assertRaises(NotFound):
            services.delete_expense(self.company, expense.pk)
        with self.assertRaises(NotFound):
            services.update_expense(self.company, expense.pk, {"amount": "1"})

    def test_vat_and_amount_are_validated(self):
        with self.assertRaises(ValidationFailed):
            self.create_expense(vat="7")
        with self.assertRaises(ValidationFailed):
            self.create_expense(amount="0")
