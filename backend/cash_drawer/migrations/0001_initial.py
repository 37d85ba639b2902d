import uuid

import django.utils.timezone
from django.db import migrations, models

import payments.fields


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CashDrawerEntry",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("staff_id", models.CharField(max_length=64)),
                ("staff_name", models.CharField(max_length=150)),
                ("date", models.DateField(default=django.utils.timezone.localdate)),
                ("opening_amount", payments.fields.MoneyField()),
                ("closing_amount", payments.fields.MoneyField(blank=True, null=True)),
                ("reason", models.TextField(blank=True, default="", help_text="Note attached at opening")),
                ("opened_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("closed_at", models.DateTimeField(blank=True, editable=False, null=True)),
            ],
            options={
                "verbose_name": "Cash Drawer Entry",
                "verbose_name_plural": "Cash Drawer Entries",
                "ordering": ["-date", "staff_name"],
            },
        ),
        migrations.AddConstraint(
            model_name="cashdrawerentry",
            constraint=models.UniqueConstraint(fields=("staff_id", "date"), name="unique_drawer_per_staff_day"),
        ),
    ]
