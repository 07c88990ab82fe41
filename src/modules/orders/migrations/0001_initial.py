from decimal import Decimal

import django.utils.timezone
import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by", models.CharField(default="System", max_length=255)),
                ("updated_by", models.CharField(default="System", max_length=255)),
                (
                    "display_id",
                    models.CharField(editable=False, max_length=20, unique=True),
                ),
                ("customer_id", models.UUIDField(db_index=True)),
                (
                    "order_date",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
                ("delivery_date", models.DateTimeField()),
                ("products", models.TextField()),
                (
                    "total_value",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=12
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("COD", "Cash on Delivery"),
                            ("Advance Taken", "Advance Taken"),
                            ("Completed", "Completed"),
                            ("Delivered", "Delivered"),
                        ],
                        default="COD",
                        max_length=20,
                    ),
                ),
                (
                    "advance_amount",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True
                    ),
                ),
                ("special_instructions", models.TextField(blank=True, default="")),
            ],
            options={
                "db_table": "orders",
                "ordering": ["-order_date"],
                "indexes": [
                    models.Index(fields=["status"], name="orders_status_idx"),
                    models.Index(fields=["-order_date"], name="orders_order_date_idx"),
                    models.Index(fields=["delivery_date"], name="orders_delivery_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(total_value__gte=0),
                        name="orders_total_value_non_negative",
                    ),
                ],
            },
        ),
    ]
