from decimal import Decimal
from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from warehouse_core.models import (Client, Company, Order, Payment,
                                   SequenceCounter)
from warehouse_core.services.ledger import reconcile
from warehouse_core.tasks import (reconcile_all_balances,
                                  reconcile_company_balances)

from .helpers import make_client, make_company


class SeedDemoCommandTests(TestCase):
    def test_seed_demo_builds_a_consistent_tenant(self):
        out = StringIO()
        call_command("seed_demo", company="Demo Warehouse", stdout=out)

        company = Company.objects.get(slug="demo-warehouse")
        self.assertEqual(company.owner.username, "demo")
        self.assertEqual(company.memberships.get().role, "super_admin")
        self.assertEqual(Order.objects.for_company(company).get().order_no, "INV-00001")
        self.assertEqual(Payment.objects.for_company(company).count(), 1)
        self.assertEqual(reconcile(company), [])
        self.assertIn("All balances consistent", out.getvalue())

    def test_running_twice_does_not_duplicate_data(self):
        call_command("create_demo_tenant", stdout=StringIO())
        call_command("create_demo_tenant", stdout=StringIO())
        self.assertEqual(Company.objects.count(), 1)
        self.assertEqual(Client.objects.count(), 1)


class RepairCommandTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.shop = make_client(self.company)

    def test_reconcile_balances_reports_and_fixes(self):
        Client.objects.filter(pk=self.shop.pk).update(total_dues=Decimal("7.00"))

        out = StringIO()
        call_command("reconcile_balances", stdout=out)
        self.assertIn("stored=7.00 expected=0.00", out.getvalue())

        call_command("reconcile_balances", company=self.company.slug, fix=True, stdout=StringIO())
        self.shop.refresh_from_db()
        self.assertEqual(self.shop.total_dues, Decimal("0.00"))

    def test_unknown_company_is_an_error(self):
        with self.assertRaises(CommandError):
            call_command("reconcile_balances", company="nope", stdout=StringIO())
        with self.assertRaises(CommandError):
            call_command("resync_counters", company="nope", stdout=StringIO())

    def test_resync_counters(self):
        Payment.objects.create(
            company=self.company, client=self.shop, amount=Decimal("1"),
            payment_method="Cash", payment_no="PAY0041",
        )
        call_command("resync_counters", series="payment", stdout=StringIO())
        self.assertEqual(
            SequenceCounter.objects.get(company=self.company, name="payment").value, 41
        )


class ReconcileTaskTests(TestCase):
    def test_company_task_returns_serializable_drifts(self):
        company = make_company()
        shop = make_client(company)
        Client.objects.filter(pk=shop.pk).update(total_dues=Decimal("3.00"))

        result = reconcile_company_balances(company.pk)
        self.assertEqual(len(result), 1)
        self.assertEqual(result[0]["entity_id"], shop.pk)
        self.assertFalse(result[0]["fixed"])

        result = reconcile_company_balances(company.pk, fix=True)
        self.assertTrue(result[0]["fixed"])
        self.assertEqual(reconcile_company_balances(company.pk), [])

    def test_fan_out_counts_companies(self):
        first = make_company()
        second = make_company("Other Co", "other-co")
        with mock.patch.object(reconcile_company_balances, "delay") as delay:
            self.assertEqual(reconcile_all_balances(fix=True), 2)
        self.assertEqual(
            sorted(call.args[0] for call in delay.call_args_list), [first.pk, second.pk]
        )
        self.assertTrue(all(call.kwargs == {"fix": True} for call in delay.call_args_list))
