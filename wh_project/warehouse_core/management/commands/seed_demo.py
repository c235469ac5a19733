from django.core.management import call_command
from django.core.management.base import BaseCommand

from warehouse_core.models import Company


class Command(BaseCommand):
    help = "Seeds a demo warehouse tenant and checks its balances (wraps create_demo_tenant)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--company",
            type=str,
            default="Demo Warehouse",
            help="Name of the demo company (default: Demo Warehouse)",
        )
        parser.add_argument(
            "--username", type=str, default="demo", help="Login of the demo user"
        )

    def handle(self, *args, **options):
        com_name = options["company"]

        self.stdout.write(self.style.NOTICE(
            f"Seeding demo data for {com_name}..."))
        call_command(
            "create_demo_tenant",
            company_name=com_name,
            username=options["username"],
            stdout=self.stdout,
        )

        # the seeded documents went through the ledger, nothing should drift
        company = Company.objects.filter(name=com_name).order_by("pk").first()
        call_command("reconcile_balances", company=company.slug, stdout=self.stdout)
        self.stdout.write(self.style.SUCCESS("Demo data seeded successfully!"))
