from decimal import Decimal
from unittest import mock

from django.test import TestCase
from django.urls import reverse

from .helpers import (make_client, make_company, make_member, make_product,
                      make_supplier)


class ApiTestBase(TestCase):
    role = "staff"

    def setUp(self):
        self.company = make_company()
        self.user = make_member(self.company, "alice", role=self.role)
        self.client.force_login(self.user)
        self.shop = make_client(self.company)
        self.product = make_product(self.company, stock=5, price="10.00")

    def post(self, name, data, **kwargs):
        return self.client.post(
            reverse(f"warehouse_core:{name}", kwargs=kwargs), data, content_type="application/json"
        )


class ResponseContractTests(ApiTestBase):
    def test_anonymous_request_is_unauthorized(self):
        self.client.logout()
        response = self.client.get(reverse("warehouse_core:client-list"))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"success": False, "message": "Unauthorized"})

    def test_create_order_returns_document(self):
        response = self.post("order-list", {
            "client_id": self.shop.pk,
            "invoice_type": "On Account",
            "delivery_cost": "5",
            "lines": [{"product_id": self.product.pk, "quantity": 2, "price": "10.00"}],
        })
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["order"]["order_no"], "INV-00001")
        self.assertEqual(body["order"]["total"], "29.00")
        self.assertEqual(body["order"]["lines"][0]["quantity"], 2)

        detail = self.client.get(reverse("warehouse_core:client-detail", kwargs={"pk": self.shop.pk}))
        self.assertEqual(detail.json()["client"]["total_dues"], "29.00")

    def test_insufficient_stock_reports_quantities(self):
        response = self.post("order-list", {
            "client_id": self.shop.pk,
            "lines": [{"product_id": self.product.pk, "quantity": 6}],
        })
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["available"], 5)
        self.assertEqual(body["requested"], 6)
        self.assertIn("Insufficient stock", body["message"])

    def test_other_tenant_document_is_not_found(self):
        other = make_company("Other Co", "other-co")
        foreign = make_client(other, "Foreign")
        response = self.client.get(reverse("warehouse_core:client-detail", kwargs={"pk": foreign.pk}))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Client not found")

    def test_validation_errors_are_400(self):
        response = self.post("payment-list", {"client_id": self.shop.pk, "payment_method": "Cash"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("amount", response.json()["message"])

        response = self.client.post(
            reverse("warehouse_core:payment-list"), "{not json", content_type="application/json"
        )
        self.assertEqual(response.status_code, 400)

    def test_model_validation_error_is_400(self):
        # duplicate e-mail within the tenant trips the model constraint
        response = self.post("client-list", {"name": "Twin", "email": self.shop.email})
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])

    def test_wrong_method_is_405(self):
        response = self.client.delete(reverse("warehouse_core:order-list"))
        self.assertEqual(response.status_code, 405)

    def test_unexpected_error_is_generic_500(self):
        with mock.patch(
            "warehouse_core.services.create_client", side_effect=RuntimeError("db password leaked")
        ), self.assertLogs("warehouse_core.views.common", level="ERROR"):
            response = self.post("client-list", {"name": "X", "email": "x@example.com"})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"success": False, "message": "Internal server error"})

    def test_order_status_endpoint_cancels_once(self):
        order_id = self.post("order-list", {
            "client_id": self.shop.pk,
            "invoice_type": "on_account",
            "lines": [{"product_id": self.product.pk, "quantity": 1}],
        }).json()["order"]["id"]

        for _ in range(2):
            response = self.post("order-status", {"status": "cancelled"}, pk=order_id)
            self.assertEqual(response.status_code, 200)

        notes = self.client.get(reverse("warehouse_core:credit-note-list")).json()["credit_notes"]
        self.assertEqual(len(notes), 1)
        self.shop.refresh_from_db()
        self.assertEqual(self.shop.total_dues, Decimal("0.00"))

    def test_stock_endpoint(self):
        response = self.post("product-stock", {"quantity": 3, "operation": "add"}, pk=self.product.pk)
        self.assertEqual(response.json()["product"]["stock"], 8)

        response = self.post("product-stock", {"quantity": 9, "operation": "subtract"}, pk=self.product.pk)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["available"], 8)

    def test_supplier_goods_and_statement(self):
        supplier = make_supplier(self.company)
        response = self.post("supplier-goods", {
            "items": [{"product_id": self.product.pk, "quantity": 20, "unit_price": "10"}],
        }, pk=supplier.pk)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["purchase"]["total_amount"], "200.00")

        statement = self.client.get(
            reverse("warehouse_core:supplier-statement", kwargs={"pk": supplier.pk})
        ).json()["statement"]
        self.assertEqual(statement["closing_balance"], "200.00")
        self.assertEqual(statement["supplier"]["payable"], "200.00")

    def test_list_filters_reject_bad_values(self):
        for name, query in [
            ("order-list", {"client_id": "abc"}),
            ("order-list", {"status": "archived"}),
            ("order-list", {"invoice_type": "barter"}),
            ("payment-list", {"supplier_id": "-3"}),
            ("purchase-list", {"kind": "gift"}),
            ("credit-note-list", {"order_id": "1.5"}),
        ]:
            response = self.client.get(reverse(f"warehouse_core:{name}"), query)
            self.assertEqual(response.status_code, 400, (name, query))
            self.assertFalse(response.json()["success"])

        response = self.client.get(reverse("warehouse_core:order-list"), {"client_id": "abc"})
        self.assertEqual(response.json()["message"], "client_id must be a positive integer")

    def test_list_filters_narrow_results(self):
        self.post("order-list", {
            "client_id": self.shop.pk,
            "invoice_type": "on_account",
            # serialized dashboards send whole numbers as 2.0
            "lines": [{"product_id": self.product.pk, "quantity": 2.0}],
        })
        other = make_client(self.company, "Other Shop")

        url = reverse("warehouse_core:order-list")
        orders = self.client.get(url, {"client_id": str(self.shop.pk), "status": "pending"}).json()["orders"]
        self.assertEqual(len(orders), 1)
        self.assertEqual(orders[0]["lines"][0]["quantity"], 2)
        self.assertEqual(self.client.get(url, {"client_id": other.pk}).json()["orders"], [])


class AdminOperationTests(ApiTestBase):
    """Repair operations need an admin role."""

    def test_staff_cannot_resync_counters_or_fix_balances(self):
        response = self.post("counter-resync", {}, series="order")
        self.assertEqual(response.status_code, 403)

        response = self.post("client-reconcile", {"fix": True}, pk=self.shop.pk)
        self.assertEqual(response.status_code, 403)

        # checking without fixing is open to every member
        response = self.post("client-reconcile", {}, pk=self.shop.pk)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["drifts"], [])


class SuperAdminOperationTests(ApiTestBase):
    role = "super_admin"

    def test_resync_reports_next_number(self):
        response = self.post("counter-resync", {}, series="order")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["value"], 0)
        self.assertEqual(response.json()["next_number"], "INV-00001")

        response = self.post("counter-resync", {}, series="quote")
        self.assertEqual(response.status_code, 400)

    def test_fix_repairs_drifted_dues(self):
        type(self.shop).objects.filter(pk=self.shop.pk).update(total_dues=Decimal("12.00"))
        response = self.post("client-reconcile", {"fix": True}, pk=self.shop.pk)

        body = response.json()
        self.assertEqual(body["message"], "Balance fixed")
        self.assertEqual(body["client"]["total_dues"], "0.00")
        self.assertTrue(body["drifts"][0]["fixed"])
