from decimal import Decimal

from warehouse_core.models import (Client, Company, EntityMembership, Product,
                                   Supplier, User)


def make_company(name="Test Co", slug="test-co"):
    return Company.objects.create(name=name, slug=slug)


def make_client(company, name="Corner Shop", email=None):
    return Client.objects.create(
        company=company, name=name, email=email or f"{name.lower().replace(' ', '.')}@example.com"
    )


def make_supplier(company, name="Fresh Farms"):
    return Supplier.objects.create(
        company=company, name=name, phone="0161 555 0100", address="1 Market St", city="Leeds"
    )


def make_product(company, serial_no="SKU-1", stock=10, price="10.00", vat=None, name=None):
    return Product.objects.create(
        company=company,
        serial_no=serial_no,
        name=name or f"Product {serial_no}",
        category="General",
        unit="pcs",
        cost_price=Decimal("5.00"),
        selling_price=Decimal(price),
        stock=stock,
        vat=vat,
    )


def make_member(company, username="alice", role="staff"):
    """User whose default company is `company`, with a membership in it."""
    user = User.objects.create_user(username=username, password="pw")
    EntityMembership.objects.create(user=user, company=company, role=role)
    user.default_company = company
    user.save(update_fields=["default_company"])
    return user
