import threading
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import connections, transaction
from django.test import (TestCase, TransactionTestCase, override_settings,
                         skipUnlessDBFeature)

from warehouse_core.exceptions import DuplicateNumber, ValidationFailed
from warehouse_core.models import Payment, SequenceCounter
from warehouse_core.services.sequences import (format_number, mint_number,
                                               next_value, parse_number,
                                               resync_counter)

from .helpers import make_client, make_company


class SequenceTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.other = make_company("Other Co", "other-co")
        self.client_obj = make_client(self.company)

    def issue_payment(self, number):
        """A payment whose number was written without going through the counter."""
        return Payment.objects.create(
            company=self.company,
            client=self.client_obj,
            amount=Decimal("1.00"),
            payment_method="Cash",
            payment_no=number,
        )

    def test_next_value_is_strictly_increasing_per_company_and_series(self):
        values = [next_value(self.company, "order") for _ in range(5)]
        self.assertEqual(values, [1, 2, 3, 4, 5])

        # other series and other tenants keep their own counters
        self.assertEqual(next_value(self.company, "payment"), 1)
        self.assertEqual(next_value(self.other, "order"), 1)

    def test_rolled_back_document_gives_its_number_back(self):
        next_value(self.company, "order")
        with self.assertRaises(RuntimeError):
            with transaction.atomic():
                self.assertEqual(next_value(self.company, "order"), 2)
                raise RuntimeError("document write failed")

        self.assertEqual(next_value(self.company, "order"), 2)

    def test_format_and_parse_number(self):
        self.assertEqual(format_number("order", 7), "INV-00007")
        self.assertEqual(format_number("credit_note", 7), "CN-00007")
        self.assertEqual(format_number("payment", 7), "PAY0007")
        self.assertEqual(format_number("purchase_order", 7), "PO-ID-0007")

        self.assertEqual(parse_number("order", "INV-00042"), 42)
        self.assertIsNone(parse_number("order", "CN-00042"))
        self.assertIsNone(parse_number("payment", ""))

    @override_settings(WAREHOUSE={"NUMBER_FORMATS": {"order": ("SO/", 3)}})
    def test_number_formats_are_configurable_per_series(self):
        self.assertEqual(format_number("order", 12), "SO/012")
        # series not overridden keep their default
        self.assertEqual(format_number("payment", 12), "PAY0012")

    def test_unknown_series_is_rejected(self):
        with self.assertRaises(ValidationFailed):
            format_number("quote", 1)
        with self.assertRaises(ValidationFailed):
            mint_number(self.company, "quote")

    def test_mint_number_skips_numbers_already_issued(self):
        self.issue_payment("PAY0001")
        with self.assertLogs("warehouse_core.services.sequences", level="WARNING"):
            number = mint_number(self.company, "payment")
        self.assertEqual(number, "PAY0002")

    @override_settings(WAREHOUSE={"NUMBER_RETRY_LIMIT": 2})
    def test_mint_number_gives_up_after_retry_limit(self):
        self.issue_payment("PAY0001")
        self.issue_payment("PAY0002")
        with self.assertRaises(DuplicateNumber) as ctx:
            mint_number(self.company, "payment")
        self.assertEqual(ctx.exception.status_code, 500)

    def test_resync_raises_counter_to_highest_issued_number(self):
        self.issue_payment("PAY0007")
        self.issue_payment("legacy-42")  # not of this series, ignored

        self.assertEqual(resync_counter(self.company, "payment"), 7)
        self.assertEqual(mint_number(self.company, "payment"), "PAY0008")

    def test_resync_never_lowers_the_counter(self):
        SequenceCounter.objects.create(company=self.company, name="payment", value=20)
        self.issue_payment("PAY0003")

        self.assertEqual(resync_counter(self.company, "payment"), 20)
        self.assertEqual(
            SequenceCounter.objects.get(company=self.company, name="payment").value, 20
        )

    def test_counter_cannot_be_deleted_directly(self):
        next_value(self.company, "order")
        counter = SequenceCounter.objects.get(company=self.company, name="order")
        # the delete collector runs without a savepoint of its own
        with self.assertRaises(ValidationError), transaction.atomic():
            counter.delete()
        with self.assertRaises(ValidationError), transaction.atomic():
            SequenceCounter.objects.filter(company=self.company).delete()
        self.assertTrue(SequenceCounter.objects.filter(pk=counter.pk).exists())


@skipUnlessDBFeature("has_select_for_update")
class ConcurrentSequenceTests(TransactionTestCase):
    """
    Several workers drawing from one counter at once. SQLite has no row
    locks and allows a single writer, so this runs against PostgreSQL
    (DB_ENGINE=django.db.backends.postgresql).
    """

    workers = 4
    draws = 5

    def test_concurrent_callers_never_share_or_skip_a_value(self):
        company = make_company()
        start = threading.Barrier(self.workers)
        values, errors = [], []

        def draw():
            try:
                start.wait()
                for _ in range(self.draws):
                    values.append(next_value(company, "order"))
            except Exception as exc:
                errors.append(exc)
            finally:
                connections.close_all()

        threads = [threading.Thread(target=draw) for _ in range(self.workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(errors, [])
        self.assertEqual(sorted(values), list(range(1, self.workers * self.draws + 1)))
        self.assertEqual(
            SequenceCounter.objects.get(company=company, name="order").value,
            self.workers * self.draws,
        )
