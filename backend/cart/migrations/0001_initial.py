import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

import payments.fields


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Cart",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("staff_id", models.CharField(help_text="Staff member who owns this cart", max_length=64, unique=True)),
                ("discount_type", models.CharField(blank=True, choices=[("", "None"), ("percentage", "Percentage"), ("fixed", "Fixed Amount")], default="", max_length=20)),
                ("discount_percent", models.DecimalField(blank=True, decimal_places=2, help_text="Percentage off the subtotal, 0-100", max_digits=5, null=True, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ("discount_fixed", payments.fields.MoneyField(blank=True, help_text="Fixed amount off the subtotal, in minor units", null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-updated_at"],
            },
        ),
        migrations.CreateModel(
            name="CartLine",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("item_id", models.UUIDField(help_text="Menu item this line was taken from")),
                ("name", models.CharField(max_length=200)),
                ("unit_price", payments.fields.MoneyField()),
                ("quantity", models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ("category", models.CharField(blank=True, default="", max_length=100)),
                ("position", models.PositiveIntegerField(default=0)),
                ("cart", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="lines", to="cart.cart")),
            ],
            options={
                "ordering": ["position"],
            },
        ),
        migrations.AddConstraint(
            model_name="cartline",
            constraint=models.UniqueConstraint(fields=("cart", "item_id"), name="unique_item_per_cart"),
        ),
    ]
