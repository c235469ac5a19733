from django.core.management.base import BaseCommand, CommandError

from warehouse_core.models import Company
from warehouse_core.services.sequences import SERIES_DOCUMENTS, resync_counter


class Command(BaseCommand):
    help = "Raise document counters to the highest number already issued."

    def add_arguments(self, parser):
        parser.add_argument(
            "--company", help="Slug of one company (default: every company)."
        )
        parser.add_argument(
            "--series",
            choices=sorted(SERIES_DOCUMENTS),
            help="One series (default: all of them).",
        )

    def handle(self, *args, **options):
        companies = Company.objects.order_by("pk")
        if options["company"]:
            companies = companies.filter(slug=options["company"])
            if not companies.exists():
                raise CommandError(f"Company {options['company']!r} does not exist")

        series_list = [options["series"]] if options["series"] else sorted(SERIES_DOCUMENTS)
        for company in companies:
            for series in series_list:
                value = resync_counter(company, series)
                self.stdout.write(f"[{company.slug}] {series} = {value}")

        self.stdout.write(self.style.SUCCESS("Counters resynced"))
