from decimal import Decimal
from unittest import mock

from django.db import IntegrityError
from django.db.models.query import QuerySet
from django.test import TestCase, override_settings

from warehouse_core import services
from warehouse_core.exceptions import (InsufficientStock, NotFound,
                                       ValidationFailed)
from warehouse_core.models import BalanceEntry, CreditNote, Order
from warehouse_core.services.ledger import reconcile_entity

from .helpers import make_client, make_company, make_product


class OrderTestBase(TestCase):
    def setUp(self):
        self.company = make_company()
        self.client_obj = make_client(self.company)
        # vat=None: lines take WAREHOUSE["DEFAULT_VAT_RATE"] (20)
        self.product = make_product(self.company, "SKU-A", stock=10, price="10.00")
        self.other_product = make_product(self.company, "SKU-B", stock=3, price="4.00", vat=Decimal("0"))

    def create_order(self, qty=2, invoice_type="on_account", **extra):
        data = {
            "client_id": self.client_obj.pk,
            "invoice_type": invoice_type,
            "lines": [{"product_id": self.product.pk, "quantity": qty, "price": "10.00"}],
        }
        data.update(extra)
        return services.create_order(self.company, data)

    def dues(self):
        self.client_obj.refresh_from_db()
        return self.client_obj.total_dues

    def stock(self, product=None):
        product = product or self.product
        product.refresh_from_db()
        return product.stock


class CreateOrderTests(OrderTestBase):
    def test_total_with_vat_and_delivery_and_delete_restores_stock(self):
        order = self.create_order(qty=2, invoice_type="invoice", delivery_cost="5")

        self.assertEqual(order.total, Decimal("29.00"))
        self.assertEqual(order.order_no, "INV-00001")
        self.assertEqual(order.lines.get().vat_rate, Decimal("20.00"))
        self.assertEqual(self.stock(), 8)

        services.delete_order(self.company, order.pk)
        self.assertEqual(self.stock(), 10)
        self.assertFalse(Order.objects.filter(pk=order.pk).exists())

    def test_only_on_account_orders_touch_dues(self):
        self.create_order(qty=1, invoice_type="cash")
        self.create_order(qty=1, invoice_type="Proforma")
        self.assertEqual(self.dues(), Decimal("0.00"))

        order = self.create_order(qty=1, invoice_type="On Account")
        self.assertEqual(order.invoice_type, "on_account")
        self.assertEqual(self.dues(), Decimal("12.00"))
        entry = BalanceEntry.objects.get(client=self.client_obj)
        self.assertEqual(entry.event, "order_created")
        self.assertEqual(entry.reference, order.order_no)

    def test_vat_can_be_excluded(self):
        order = self.create_order(qty=3, include_vat=False)
        self.assertEqual(order.total, Decimal("30.00"))

    def test_qty_equal_to_stock_empties_the_shelf(self):
        self.create_order(qty=10)
        self.assertEqual(self.stock(), 0)

    def test_qty_above_stock_fails_and_leaves_stock_unchanged(self):
        with self.assertRaises(InsufficientStock) as ctx:
            self.create_order(qty=11)

        self.assertEqual(ctx.exception.available, 10)
        self.assertEqual(ctx.exception.requested, 11)
        self.assertEqual(self.stock(), 10)
        self.assertEqual(self.dues(), Decimal("0.00"))
        self.assertFalse(Order.objects.exists())

    def test_failed_line_rolls_back_earlier_lines(self):
        with self.assertRaises(InsufficientStock):
            services.create_order(self.company, {
                "client_id": self.client_obj.pk,
                "lines": [
                    {"product_id": self.product.pk, "quantity": 4},
                    {"product_id": self.other_product.pk, "quantity": 5},
                ],
            })
        self.assertEqual(self.stock(), 10)
        self.assertEqual(self.stock(self.other_product), 3)

        # the number of the failed order is handed out again
        self.assertEqual(self.create_order(qty=1).order_no, "INV-00001")

    def test_idempotency_key_returns_the_first_order(self):
        first = self.create_order(qty=2, idempotency_key="req-1")
        second = self.create_order(qty=2, idempotency_key="req-1")

        self.assertEqual(first.pk, second.pk)
        self.assertEqual(Order.objects.count(), 1)
        self.assertEqual(self.stock(), 8)
        self.assertEqual(self.dues(), Decimal("24.00"))

    def test_idempotency_key_race_returns_the_winning_order(self):
        first = self.create_order(qty=2, idempotency_key="req-1")
        real_first = QuerySet.first
        lookups = []

        def miss_once(queryset):
            # the other request commits between our lookup and our insert
            lookups.append(queryset)
            return None if len(lookups) == 1 else real_first(queryset)

        with mock.patch.object(QuerySet, "first", autospec=True, side_effect=miss_once):
            second = self.create_order(qty=2, idempotency_key="req-1")

        self.assertEqual(second.pk, first.pk)
        self.assertEqual(Order.objects.count(), 1)
        self.assertEqual(self.stock(), 8)
        self.assertEqual(self.dues(), Decimal("24.00"))

    def test_duplicate_key_error_without_a_match_is_raised(self):
        with mock.patch("warehouse_core.services.orders._create_order",
                        side_effect=IntegrityError("boom")):
            with self.assertRaises(IntegrityError):
                self.create_order(qty=1, idempotency_key="req-2")

    def test_invalid_input_is_rejected(self):
        with self.assertRaises(ValidationFailed):
            services.create_order(self.company, {"client_id": self.client_obj.pk, "lines": []})
        with self.assertRaises(ValidationFailed):
            self.create_order(qty=0)
        with self.assertRaises(ValidationFailed):
            self.create_order(invoice_type="barter")
        with self.assertRaises(ValidationFailed):
            self.create_order(status="delivered-and-archived")

    def test_foreign_client_or_product_is_not_found(self):
        other = make_company("Other Co", "other-co")
        foreign_product = make_product(other, "SKU-X")
        with self.assertRaises(NotFound):
            services.create_order(self.company, {
                "client_id": self.client_obj.pk,
                "lines": [{"product_id": foreign_product.pk, "quantity": 1}],
            })
        with self.assertRaises(NotFound):
            services.create_order(other, {
                "client_id": self.client_obj.pk,
                "lines": [{"product_id": foreign_product.pk, "quantity": 1}],
            })


class OrderStatusTests(OrderTestBase):
    def test_forward_moves_only(self):
        order = self.create_order()
        order = services.set_order_status(self.company, order.pk, "dispatched")
        self.assertEqual(order.status, "dispatched")

        with self.assertRaises(ValidationFailed):
            services.set_order_status(self.company, order.pk, "pending")
        with self.assertRaises(ValidationFailed):
            services.set_order_status(self.company, order.pk, "lost")

    def test_cancel_reverts_dues_and_emits_one_credit_note(self):
        order = self.create_order(qty=2)  # 24.00 on account
        services.set_order_status(self.company, order.pk, "cancelled")

        self.assertEqual(self.dues(), Decimal("0.00"))
        note = CreditNote.objects.get(order=order)
        self.assertEqual(note.kind, "cancellation")
        self.assertEqual(note.total_amount, Decimal("24.00"))
        self.assertEqual(note.credit_note_no, "CN-00001")
        self.assertEqual(note.lines.get().reason, "Order Cancelled")
        # cancelling does not put goods back on the shelf
        self.assertEqual(self.stock(), 8)

    def test_cancel_is_idempotent(self):
        order = self.create_order(qty=2)
        services.set_order_status(self.company, order.pk, "cancelled")
        services.set_order_status(self.company, order.pk, "cancelled")
        services.emit_cancellation_note(Order.objects.get(pk=order.pk))

        self.assertEqual(CreditNote.objects.filter(order=order).count(), 1)
        self.assertEqual(self.dues(), Decimal("0.00"))

    def test_cancelling_a_cash_order_leaves_dues_alone(self):
        order = self.create_order(qty=2, invoice_type="cash")
        services.set_order_status(self.company, order.pk, "cancelled")

        note = CreditNote.objects.get(order=order)
        self.assertFalse(note.applied_to_dues)
        self.assertEqual(self.dues(), Decimal("0.00"))
        self.assertEqual(reconcile_entity(self.client_obj), [])

    def test_uncancel_withdraws_the_note_and_restores_dues(self):
        order = self.create_order(qty=2)
        services.set_order_status(self.company, order.pk, "cancelled")
        services.set_order_status(self.company, order.pk, "pending")

        self.assertEqual(self.dues(), Decimal("24.00"))
        self.assertTrue(CreditNote.objects.get(order=order).is_deleted)

        # a second cancellation emits a fresh note
        services.set_order_status(self.company, order.pk, "cancelled")
        self.assertEqual(CreditNote.objects.live(self.company).filter(order=order).count(), 1)
        self.assertEqual(self.dues(), Decimal("0.00"))
        self.assertEqual(reconcile_entity(self.client_obj), [])


class UpdateOrderTests(OrderTestBase):
    def test_new_lines_move_stock_and_dues_by_the_difference(self):
        order = self.create_order(qty=2)  # 24.00
        order = services.update_order(self.company, order.pk, {
            "lines": [{"product_id": self.product.pk, "quantity": 5, "price": "10.00"}],
        })

        self.assertEqual(order.total, Decimal("60.00"))
        self.assertEqual(self.stock(), 5)
        self.assertEqual(self.dues(), Decimal("60.00"))
        self.assertEqual(
            BalanceEntry.objects.filter(client=self.client_obj, event="order_updated").get().amount,
            Decimal("36.00"),
        )

    def test_update_may_use_the_stock_it_already_holds(self):
        order = self.create_order(qty=10)
        order = services.update_order(self.company, order.pk, {
            "lines": [{"product_id": self.product.pk, "quantity": 10}],
        })
        self.assertEqual(self.stock(), 0)

        with self.assertRaises(InsufficientStock):
            services.update_order(self.company, order.pk, {
                "lines": [{"product_id": self.product.pk, "quantity": 11}],
            })
        self.assertEqual(self.stock(), 0)
        self.assertEqual(order.lines.get().quantity, 10)

    def test_leaving_on_account_reverts_dues(self):
        order = self.create_order(qty=2)
        services.update_order(self.company, order.pk, {"invoice_type": "cash"})
        self.assertEqual(self.dues(), Decimal("0.00"))

        services.update_order(self.company, order.pk, {"invoice_type": "on_account", "delivery_cost": "6"})
        self.assertEqual(self.dues(), Decimal("30.00"))
        self.assertEqual(reconcile_entity(self.client_obj), [])

    def test_moving_order_to_another_client_moves_the_dues(self):
        other_client = make_client(self.company, "Second Shop")
        order = self.create_order(qty=2)
        order = services.update_order(self.company, order.pk, {"client_id": other_client.pk})

        self.assertEqual(order.client_name, "Second Shop")
        self.assertEqual(self.dues(), Decimal("0.00"))
        other_client.refresh_from_db()
        self.assertEqual(other_client.total_dues, Decimal("24.00"))

    def test_status_in_update_goes_through_transition_rules(self):
        order = self.create_order(qty=2)
        order = services.update_order(self.company, order.pk, {"status": "cancelled"})
        self.assertEqual(order.status, "cancelled")
        self.assertEqual(self.dues(), Decimal("0.00"))

    def test_cancelled_orders_cannot_be_edited(self):
        order = self.create_order(qty=2)
        services.set_order_status(self.company, order.pk, "cancelled")
        with self.assertRaises(ValidationFailed):
            services.update_order(self.company, order.pk, {"delivery_cost": "1"})


class DeleteOrderTests(OrderTestBase):
    def test_reverse_policy_takes_the_order_out_of_dues(self):
        order = self.create_order(qty=2)
        order_no = services.delete_order(self.company, order.pk)

        self.assertEqual(order_no, "INV-00001")
        self.assertEqual(self.dues(), Decimal("0.00"))
        self.assertEqual(self.stock(), 10)
        self.assertEqual(reconcile_entity(self.client_obj), [])

    def test_deleting_a_cancelled_order_does_not_double_reverse(self):
        order = self.create_order(qty=2)
        services.set_order_status(self.company, order.pk, "cancelled")
        services.delete_order(self.company, order.pk)

        self.assertEqual(self.dues(), Decimal("0.00"))
        self.assertTrue(CreditNote.objects.get(order_no=order.order_no).is_deleted)
        self.assertEqual(reconcile_entity(self.client_obj), [])

    @override_settings(WAREHOUSE={"ORDER_DELETE_POLICY": "forbid"})
    def test_forbid_policy_refuses_on_account_orders(self):
        order = self.create_order(qty=2)
        with self.assertRaises(ValidationFailed):
            services.delete_order(self.company, order.pk)
        self.assertEqual(self.stock(), 8)

        cash = self.create_order(qty=1, invoice_type="cash")
        services.delete_order(self.company, cash.pk)
        self.assertEqual(self.stock(), 8)

    @override_settings(WAREHOUSE={"ORDER_DELETE_POLICY": "retain"})
    def test_retain_policy_keeps_dues(self):
        order = self.create_order(qty=2)
        services.delete_order(self.company, order.pk)

        self.assertEqual(self.dues(), Decimal("24.00"))
        self.assertEqual(self.stock(), 10)
        # the documents no longer explain the dues, reconcile reports it
        self.assertEqual(len(reconcile_entity(self.client_obj)), 1)

    def test_deleting_an_unknown_order_is_not_found(self):
        with self.assertRaises(NotFound):
            services.delete_order(self.company, 999)
