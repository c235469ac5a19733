import decimal

import django.contrib.auth.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import warehouse_core.managers


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="Company",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("slug", models.SlugField(max_length=80, unique=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name_plural": "companies",
            },
        ),
        migrations.CreateModel(
            name="User",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("is_superuser", models.BooleanField(default=False, help_text="Designates that this user has all permissions without explicitly assigning them.", verbose_name="superuser status")),
                ("username", models.CharField(error_messages={"unique": "A user with that username already exists."}, help_text="Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.", max_length=150, unique=True, validators=[django.contrib.auth.validators.UnicodeUsernameValidator()], verbose_name="username")),
                ("first_name", models.CharField(blank=True, max_length=150, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=150, verbose_name="last name")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="email address")),
                ("is_staff", models.BooleanField(default=False, help_text="Designates whether the user can log into this admin site.", verbose_name="staff status")),
                ("is_active", models.BooleanField(default=True, help_text="Designates whether this user should be treated as active. Unselect this instead of deleting accounts.", verbose_name="active")),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                ("phone", models.CharField(blank=True, max_length=32)),
                ("default_company", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="default_users", to="warehouse_core.company")),
                ("groups", models.ManyToManyField(blank=True, help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.", related_name="user_set", related_query_name="user", to="auth.group", verbose_name="groups")),
                ("user_permissions", models.ManyToManyField(blank=True, help_text="Specific permissions for this user.", related_name="user_set", related_query_name="user", to="auth.permission", verbose_name="user permissions")),
            ],
            options={
                "verbose_name": "user",
                "verbose_name_plural": "users",
                "abstract": False,
                "indexes": [models.Index(fields=["default_company"], name="user_default_company_idx")],
            },
            managers=[
                ("objects", warehouse_core.managers.UserManager()),
            ],
        ),
        migrations.AddField(
            model_name="company",
            name="owner",
            field=models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="owned_companies", to=settings.AUTH_USER_MODEL),
        ),
        migrations.CreateModel(
            name="EntityMembership",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("role", models.CharField(choices=[("super_admin", "Super admin"), ("admin", "Admin"), ("staff", "Staff")], default="staff", max_length=20)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="memberships", to="warehouse_core.company")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="memberships", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "indexes": [models.Index(fields=["company", "user"], name="membership_company_user_idx")],
                "constraints": [models.UniqueConstraint(fields=("user", "company"), name="uq_user_company_membership")],
            },
        ),
        migrations.CreateModel(
            name="Client",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("email", models.EmailField(max_length=254)),
                ("phone", models.CharField(blank=True, default="", max_length=40)),
                ("street", models.CharField(blank=True, default="", max_length=200)),
                ("city", models.CharField(blank=True, default="", max_length=100)),
                ("postal_code", models.CharField(blank=True, default="", max_length=20)),
                ("is_active", models.BooleanField(default=True)),
                ("total_dues", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=18)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="warehouse_core.company")),
            ],
            options={
                "indexes": [
                    models.Index(fields=["company", "is_active"], name="client_company_active_idx"),
                    models.Index(fields=["company", "total_dues"], name="client_company_dues_idx"),
                ],
                "constraints": [models.UniqueConstraint(fields=("company", "email"), name="uq_company_client_email")],
            },
        ),
        migrations.CreateModel(
            name="Supplier",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("phone", models.CharField(max_length=40)),
                ("address", models.CharField(max_length=200)),
                ("city", models.CharField(max_length=100)),
                ("state", models.CharField(blank=True, default="", max_length=100)),
                ("zip_code", models.CharField(blank=True, default="", max_length=20)),
                ("bank_account_name", models.CharField(blank=True, default="", max_length=200)),
                ("bank_account_number", models.CharField(blank=True, default="", max_length=64)),
                ("bank_name", models.CharField(blank=True, default="", max_length=200)),
                ("bank_sort_code", models.CharField(blank=True, default="", max_length=32)),
                ("is_active", models.BooleanField(default=True)),
                ("total_debit", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=18)),
                ("total_credit", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=18)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="warehouse_core.company")),
            ],
            options={
                "indexes": [
                    models.Index(fields=["company", "name"], name="supplier_company_name_idx"),
                    models.Index(fields=["company", "is_active"], name="supplier_company_active_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("serial_no", models.CharField(max_length=80)),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, default="")),
                ("category", models.CharField(max_length=100)),
                ("unit", models.CharField(max_length=40)),
                ("cost_price", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=18)),
                ("selling_price", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=18)),
                ("stock", models.IntegerField(default=0)),
                ("min_stock_level", models.IntegerField(default=50)),
                ("vat", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="warehouse_core.company")),
                ("supplier", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="products", to="warehouse_core.supplier")),
            ],
            options={
                "indexes": [
                    models.Index(fields=["company", "is_active"], name="product_company_active_idx"),
                    models.Index(fields=["company", "stock"], name="product_company_stock_idx"),
                    models.Index(fields=["company", "category"], name="product_company_category_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("company", "serial_no"), name="uq_company_product_serial"),
                    models.CheckConstraint(condition=models.Q(("stock__gte", 0)), name="product_stock_non_negative"),
                ],
            },
        ),
        migrations.CreateModel(
            name="SequenceCounter",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=50)),
                ("value", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="warehouse_core.company")),
            ],
            options={
                "constraints": [models.UniqueConstraint(fields=("company", "name"), name="uq_company_counter_name")],
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("client_name", models.CharField(blank=True, default="", max_length=200)),
                ("order_no", models.CharField(max_length=64)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("in_progress", "In progress"), ("dispatched", "Dispatched"), ("delivered", "Delivered"), ("cancelled", "Cancelled")], default="pending", max_length=20)),
                ("invoice_type", models.CharField(choices=[("on_account", "On Account"), ("cash", "Cash"), ("picking_list", "Picking List"), ("proforma", "Proforma"), ("invoice", "Invoice")], default="invoice", max_length=20)),
                ("payment_method", models.CharField(default="Bank Transfer", max_length=50)),
                ("delivery_cost", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=18)),
                ("include_vat", models.BooleanField(default=True)),
                ("total", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=18)),
                ("idempotency_key", models.CharField(blank=True, max_length=100, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("client", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="orders", to="warehouse_core.client")),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="warehouse_core.company")),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["company", "created_at"], name="order_company_created_idx"),
                    models.Index(fields=["company", "status"], name="order_company_status_idx"),
                    models.Index(fields=["company", "invoice_type"], name="order_company_type_idx"),
                    models.Index(fields=["client", "status"], name="order_client_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("company", "order_no"), name="uq_order_company_number"),
                    models.UniqueConstraint(fields=("company", "idempotency_key"), name="uq_order_company_idempotency_key"),
                    models.CheckConstraint(condition=models.Q(("total__gte", 0)), name="order_total_non_negative"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("product_name", models.CharField(blank=True, default="", max_length=200)),
                ("quantity", models.PositiveIntegerField()),
                ("price", models.DecimalField(decimal_places=2, max_digits=18)),
                ("vat_rate", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=5)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="warehouse_core.company")),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="lines", to="warehouse_core.order")),
                ("product", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to="warehouse_core.product")),
            ],
            options={
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["company", "order"], name="orderline_company_order_idx"),
                    models.Index(fields=["company", "product"], name="orderline_company_product_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("quantity__gte", 1), ("price__gte", 0)), name="orderline_positive_amounts"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Purchase",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("kind", models.CharField(choices=[("goods_receipt", "Goods receipt"), ("invoice", "Supplier invoice")], default="goods_receipt", max_length=20)),
                ("purchase_order_no", models.CharField(max_length=64)),
                ("invoice_no", models.CharField(blank=True, default="", max_length=64)),
                ("date_received", models.DateField(default=django.utils.timezone.localdate)),
                ("payment_method", models.CharField(blank=True, default="", max_length=50)),
                ("notes", models.TextField(blank=True, default="")),
                ("subtotal", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=18)),
                ("vat_rate", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=7)),
                ("vat_amount", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=18)),
                ("total_amount", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=18)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="warehouse_core.company")),
                ("supplier", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="purchases", to="warehouse_core.supplier")),
            ],
            options={
                "ordering": ["-date_received", "-id"],
                "indexes": [
                    models.Index(fields=["company", "supplier"], name="purchase_company_supplier_idx"),
                    models.Index(fields=["company", "date_received"], name="purchase_company_date_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("company", "purchase_order_no"), name="uq_purchase_company_number"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PurchaseLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("product_name", models.CharField(max_length=200)),
                ("quantity", models.PositiveIntegerField(default=1)),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=18)),
                ("line_total", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=18)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="warehouse_core.company")),
                ("product", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to="warehouse_core.product")),
                ("purchase", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="lines", to="warehouse_core.purchase")),
            ],
            options={
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["company", "purchase"], name="purchaseline_company_purch_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("unit_price__gte", 0)), name="purchaseline_non_negative_price"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("amount", models.DecimalField(decimal_places=2, max_digits=18)),
                ("payment_method", models.CharField(max_length=50)),
                ("payment_no", models.CharField(max_length=64)),
                ("date", models.DateField(default=django.utils.timezone.localdate)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("client", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="payments", to="warehouse_core.client")),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="warehouse_core.company")),
                ("supplier", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="payments", to="warehouse_core.supplier")),
            ],
            options={
                "ordering": ["-date", "-id"],
                "indexes": [
                    models.Index(fields=["company", "client"], name="payment_company_client_idx"),
                    models.Index(fields=["company", "supplier"], name="payment_company_supplier_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("company", "payment_no"), name="uq_payment_company_number"),
                    models.CheckConstraint(condition=models.Q(models.Q(("client__isnull", False), ("supplier__isnull", True)), models.Q(("client__isnull", True), ("supplier__isnull", False)), _connector="OR"), name="payment_single_counterparty"),
                    models.CheckConstraint(condition=models.Q(("amount__gt", 0)), name="payment_amount_positive"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CreditNote",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("client_name", models.CharField(blank=True, default="", max_length=200)),
                ("credit_note_no", models.CharField(max_length=64)),
                ("kind", models.CharField(choices=[("cancellation", "Cancellation"), ("return", "Return")], max_length=20)),
                ("order_no", models.CharField(blank=True, default="", max_length=64)),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=18)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("refunded", "Refunded"), ("adjusted", "Adjusted")], default="pending", max_length=20)),
                ("date", models.DateField(default=django.utils.timezone.localdate)),
                ("applied_to_dues", models.BooleanField(default=True)),
                ("is_deleted", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("client", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="credit_notes", to="warehouse_core.client")),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="warehouse_core.company")),
                ("order", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="credit_notes", to="warehouse_core.order")),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["company", "client"], name="creditnote_company_client_idx"),
                    models.Index(fields=["company", "order"], name="creditnote_company_order_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("company", "credit_note_no"), name="uq_creditnote_company_number"),
                    models.CheckConstraint(condition=models.Q(("total_amount__gte", 0)), name="creditnote_total_non_negative"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CreditNoteLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("product_name", models.CharField(blank=True, default="", max_length=200)),
                ("quantity", models.PositiveIntegerField()),
                ("price", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=18)),
                ("reason", models.CharField(blank=True, default="", max_length=200)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="warehouse_core.company")),
                ("credit_note", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="lines", to="warehouse_core.creditnote")),
                ("product", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to="warehouse_core.product")),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("quantity__gte", 1), ("price__gte", 0)), name="creditnoteline_positive_amounts"),
                ],
            },
        ),
        migrations.CreateModel(
            name="BalanceEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("field", models.CharField(choices=[("total_dues", "Client dues"), ("total_debit", "Supplier debit"), ("total_credit", "Supplier credit")], max_length=20)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=18)),
                ("event", models.CharField(choices=[("order_created", "Order created"), ("order_updated", "Order updated"), ("order_cancelled", "Order cancelled"), ("order_uncancelled", "Order un-cancelled"), ("order_deleted", "Order deleted"), ("payment_created", "Payment created"), ("payment_updated", "Payment updated"), ("payment_deleted", "Payment deleted"), ("purchase_created", "Purchase created"), ("purchase_updated", "Purchase updated"), ("purchase_deleted", "Purchase deleted"), ("credit_note_created", "Credit note created"), ("credit_note_updated", "Credit note updated"), ("credit_note_deleted", "Credit note deleted"), ("adjustment", "Adjustment")], max_length=30)),
                ("source_type", models.CharField(blank=True, default="", max_length=50)),
                ("source_id", models.PositiveBigIntegerField(blank=True, null=True)),
                ("reference", models.CharField(blank=True, default="", max_length=64)),
                ("note", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("client", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="balance_entries", to="warehouse_core.client")),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="warehouse_core.company")),
                ("supplier", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="balance_entries", to="warehouse_core.supplier")),
            ],
            options={
                "verbose_name_plural": "balance entries",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(fields=["company", "client", "created_at"], name="balance_company_client_idx"),
                    models.Index(fields=["company", "supplier", "created_at"], name="balance_company_supplier_idx"),
                    models.Index(fields=["source_type", "source_id"], name="balance_source_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(models.Q(("client__isnull", False), ("supplier__isnull", True)), models.Q(("client__isnull", True), ("supplier__isnull", False)), _connector="OR"), name="balanceentry_single_entity"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Expense",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField(default=django.utils.timezone.localdate)),
                ("category", models.CharField(max_length=100)),
                ("description", models.CharField(max_length=255)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=18)),
                ("payment_method", models.CharField(max_length=50)),
                ("reference", models.CharField(blank=True, default="", max_length=100)),
                ("notes", models.TextField(blank=True, default="")),
                ("vat", models.DecimalField(choices=[(decimal.Decimal("0"), "0%"), (decimal.Decimal("5"), "5%"), (decimal.Decimal("20"), "20%")], decimal_places=2, default=decimal.Decimal("0"), max_digits=5)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="warehouse_core.company")),
            ],
            options={
                "ordering": ["-date", "-created_at"],
                "indexes": [
                    models.Index(fields=["company", "category", "date"], name="expense_company_cat_date_idx"),
                ],
            },
        ),
    ]
