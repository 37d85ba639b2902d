import uuid

from django.db import migrations, models

import payments.fields


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(help_text="Name shown on tickets.", max_length=200)),
                ("price", payments.fields.MoneyField(help_text="Current price in minor units (paise).")),
                ("category", models.CharField(blank=True, default="", max_length=100)),
                ("is_available", models.BooleanField(db_index=True, default=True, help_text="Unavailable items cannot be added to a cart.")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Menu Item",
                "verbose_name_plural": "Menu Items",
                "ordering": ["category", "name"],
            },
        ),
    ]
