import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import payments.fields


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("customers", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("order_number", models.CharField(editable=False, max_length=20, unique=True)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("preparing", "Preparing"), ("ready", "Ready"), ("completed", "Completed"), ("cancelled", "Cancelled")], db_index=True, default="pending", max_length=10)),
                ("order_type", models.CharField(choices=[("dine-in", "Dine In"), ("takeaway", "Takeaway"), ("delivery", "Delivery")], max_length=10)),
                ("table_number", models.CharField(blank=True, default="", help_text="Set for dine-in orders only", max_length=10)),
                ("staff_id", models.CharField(db_index=True, max_length=64)),
                ("staff_name", models.CharField(help_text="Snapshot at checkout", max_length=150)),
                ("subtotal_amount", payments.fields.MoneyField()),
                ("discount_amount", payments.fields.MoneyField()),
                ("total_amount", payments.fields.MoneyField()),
                ("payment_method", models.CharField(blank=True, choices=[("cash", "Cash"), ("upi", "UPI"), ("split", "Split (Cash + UPI)")], default="", max_length=10)),
                ("cash_amount", payments.fields.MoneyField(blank=True, null=True)),
                ("upi_amount", payments.fields.MoneyField(blank=True, null=True)),
                ("payment_total", payments.fields.MoneyField(blank=True, null=True)),
                ("kot_printed", models.BooleanField(default=False)),
                ("bill_printed", models.BooleanField(default=False)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("completed_at", models.DateTimeField(blank=True, db_index=True, editable=False, help_text="Timestamp when the order was paid. Cash drawer days are keyed on this.", null=True)),
                ("customer", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="orders", to="customers.customer")),
            ],
            options={
                "ordering": ["-created_at", "order_number"],
                "indexes": [models.Index(fields=["staff_id", "status", "completed_at"], name="order_staff_status_done_idx")],
            },
        ),
        migrations.CreateModel(
            name="OrderLine",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("item_id", models.UUIDField()),
                ("name", models.CharField(max_length=200)),
                ("unit_price", payments.fields.MoneyField()),
                ("quantity", models.PositiveIntegerField()),
                ("category", models.CharField(blank=True, default="", max_length=100)),
                ("position", models.PositiveIntegerField(default=0)),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="lines", to="orders.order")),
            ],
            options={
                "ordering": ["position"],
            },
        ),
    ]
