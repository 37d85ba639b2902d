import uuid

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(help_text="Customer's name", max_length=150)),
                ("phone", models.CharField(blank=True, db_index=True, help_text="Customer's phone number, used for order notifications", max_length=20)),
                ("loyalty_points", models.PositiveIntegerField(default=0, help_text="Current points balance; never negative", validators=[django.core.validators.MinValueValidator(0)])),
                ("visit_count", models.PositiveIntegerField(default=0, help_text="Number of completed orders")),
                ("first_visit", models.DateTimeField(auto_now_add=True)),
                ("last_visit", models.DateTimeField(blank=True, help_text="Completion time of the latest order", null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Customer",
                "verbose_name_plural": "Customers",
                "ordering": ["name"],
            },
        ),
    ]
