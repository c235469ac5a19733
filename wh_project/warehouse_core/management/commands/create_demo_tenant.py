from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils.text import slugify

from warehouse_core import services
from warehouse_core.models import Client, Company, EntityMembership, Supplier

User = get_user_model()


class Command(BaseCommand):
    help = (
        "Create a demo tenant (company), user, and sample warehouse data for testing."
    )

    # Define command-line arguments
    def add_arguments(self, parser):
        parser.add_argument(
            "--company-name",  # Define flag
            default="Demo Company",
            help="Name of the demo company to create.",
        )
        parser.add_argument(
            "--username", default="demo", help="Username for the demo user."
        )
        parser.add_argument(
            "--password", default="demo123", help="Password for the demo user."
        )

    @transaction.atomic
    def handle(self, *args, **options):
        # Read arguments from add_arguments()
        company_name = options["company_name"]
        username = options["username"]
        password = options["password"]

        # Generate unique slug for company
        def unique_slug_for_company(name, max_tries=100):
            # Convert company name into a slug (e.g., "Test Ltd" → "test-ltd")
            base = slugify(name) or "company"
            slug = base
            i = 1
            # If plain slug is taken, append -1, -2, etc.
            while Company.objects.filter(slug=slug).exists():
                slug = f"{base}-{i}"
                i += 1
                if i > max_tries:
                    raise RuntimeError("Couldn't generate unique slug")
            return slug

        # 1. Create company
        company = Company.objects.filter(name=company_name).order_by("pk").first()
        if company is None:
            company = Company.objects.create(
                name=company_name, slug=unique_slug_for_company(company_name)
            )
        self.stdout.write(self.style.SUCCESS(f"Created company: {company}"))

        # 2. Create user and make them the company's super admin
        user, created = User.objects.get_or_create(
            username=username,
            defaults={"email": f"{username}@example.com"},
        )
        if created:  # if user newly created
            user.set_password(password)
            user.save()
        EntityMembership.objects.get_or_create(
            user=user, company=company, defaults={"role": "super_admin"}
        )
        user.default_company = company
        user.save(update_fields=["default_company"])
        if company.owner_id is None:
            company.owner = user
            company.save(update_fields=["owner"])
        self.stdout.write(
            self.style.SUCCESS(f"Created user: {user.username} (pw={password})")
        )

        # Re-running the command on an existing tenant only refreshes the user
        if Client.objects.for_company(company).exists():
            self.stdout.write(self.style.WARNING("Demo data already present, skipping"))
            return

        # 3. Counterparties
        supplier = services.create_supplier(company, {
            "name": "Fresh Farms Ltd",
            "email": "orders@freshfarms.example.com",
            "phone": "0161 555 0100",
            "address": "1 Market Street",
            "city": "Manchester",
        })
        client = services.create_client(company, {
            "name": "Corner Shop",
            "email": "owner@cornershop.example.com",
            "city": "Leeds",
        })
        self.stdout.write(self.style.SUCCESS(f"Created supplier {supplier} and client {client}"))

        # 4. Catalog
        rice = services.create_product(company, {
            "serial_no": "RICE-5KG", "name": "Basmati rice 5kg", "category": "Dry goods",
            "unit": "bag", "cost_price": "6.50", "selling_price": "10.00",
            "supplier_id": supplier.pk,
        })
        oil = services.create_product(company, {
            "serial_no": "OIL-1L", "name": "Sunflower oil 1L", "category": "Oils",
            "unit": "bottle", "cost_price": "1.20", "selling_price": "2.50",
            "vat": "5", "supplier_id": supplier.pk,
        })

        # 5. Stock arrives, a sale on account, a part payment
        receipt = services.record_goods_receipt(company, supplier.pk, {
            "items": [
                {"product_id": rice.pk, "quantity": 100, "unit_price": "6.50"},
                {"product_id": oil.pk, "quantity": 200, "unit_price": "1.20"},
            ],
            "vat_rate": "20",
        })
        order = services.create_order(company, {
            "client_id": client.pk,
            "invoice_type": "On Account",
            "delivery_cost": "5.00",
            "lines": [
                {"product_id": rice.pk, "quantity": 10, "price": "10.00"},
                {"product_id": oil.pk, "quantity": 24, "price": "2.50"},
            ],
        })
        payment = services.create_payment(company, {
            "client_id": client.pk, "amount": Decimal("50.00"), "payment_method": "Cash",
        })
        self.stdout.write(self.style.SUCCESS(
            f"Created {receipt.purchase_order_no}, {order.order_no} and {payment.payment_no}"
        ))
        self.stdout.write(self.style.SUCCESS("Demo tenant setup complete!"))
