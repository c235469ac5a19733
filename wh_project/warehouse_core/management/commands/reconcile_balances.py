from django.core.management.base import BaseCommand, CommandError

from warehouse_core.models import Company
from warehouse_core.services.ledger import reconcile


class Command(BaseCommand):
    help = (
        "Compare stored client/supplier balances with their documents and "
        "balance entries. --fix overwrites drifted balances."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--company", help="Slug of one company (default: every company)."
        )
        parser.add_argument(
            "--fix", action="store_true", help="Write the recomputed balances back."
        )

    def handle(self, *args, **options):
        companies = Company.objects.order_by("pk")
        if options["company"]:
            companies = companies.filter(slug=options["company"])
            if not companies.exists():
                raise CommandError(f"Company {options['company']!r} does not exist")

        total = 0
        for company in companies:
            drifts = reconcile(company, fix=options["fix"])
            total += len(drifts)
            for drift in drifts:
                self.stdout.write(self.style.WARNING(
                    f"[{company.slug}] {drift.entity} {drift.field}: "
                    f"stored={drift.stored} expected={drift.expected} folded={drift.folded}"
                    + (" (fixed)" if drift.fixed else "")
                ))

        if total:
            self.stdout.write(self.style.NOTICE(f"{total} drift(s) found"))
        else:
            self.stdout.write(self.style.SUCCESS("All balances consistent"))
