from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal
from typing import Optional

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.customers.models import Customer
from modules.orders.constants import OrderStatus
from modules.orders.models import Order

SEED_ACTOR = "seed@bloomora.local"

SEED_CUSTOMERS = [
    (
        "Eleanor Vance",
        "+1 555-0101",
        "eleanor.v@example.com",
        "123 Rose Lane, Bloomville, FL 12345",
        "Loves lilies, allergic to daisies.",
    ),
    (
        "Marcus Holloway",
        "+1 555-0102",
        "marcus.h@example.com",
        "456 Orchid Ave, Petalburg, FL 12346",
        "Prefers vibrant colors. No pink.",
    ),
    (
        "Chloe Price",
        "+1 555-0103",
        "chloe.p@example.com",
        "789 Tulip St, Garden City, FL 12347",
        "Sunflowers for all occasions.",
    ),
    (
        "Arthur Morgan",
        "+1 555-0104",
        "arthur.m@example.com",
        "101 Wildflower Rd, Meadowview, FL 12348",
        "Rustic, natural arrangements.",
    ),
]

# (display_id, customer index, order offset days, delivery offset days,
#  products, total, status, advance, instructions)
# Orders recorded as "Processing" in the legacy data set are seeded as COD.
SEED_ORDERS = [
    ("PT-001001", 0, -5, -3, "One dozen white lilies, baby's breath", "75.00",
     OrderStatus.COMPLETED, None, "Deliver after 3 PM."),
    ("PT-001002", 1, -2, 1, "Mixed bouquet of orange and yellow flowers.", "120.50",
     OrderStatus.COD, None, 'Please include a card with "Happy Birthday!".'),
    ("PT-001003", 2, -1, 3, "Large sunflower arrangement.", "95.00",
     OrderStatus.ADVANCE_TAKEN, "50.00", "Use a clear vase."),
    ("PT-001004", 0, -10, -8, "Small rose bouquet", "45.00",
     OrderStatus.COMPLETED, None, "Thank you gift."),
    ("PT-001005", 3, 0, 5, "Wildflower mix with lavender.", "65.00",
     OrderStatus.COD, None, "As natural looking as possible."),
]

EXTRA_PRODUCTS = [
    "Red rose bouquet",
    "Peony centerpiece",
    "Orchid in ceramic pot",
    "Tulip bundle, pastel mix",
    "Bridal bouquet, white roses",
    "Sympathy wreath",
]


class Command(BaseCommand):
    help = "Seed database with sample florist customers and orders."

    def add_arguments(self, parser):
        parser.add_argument(
            "--extra-orders",
            type=int,
            default=20,
            help="Random orders to add on top of the fixed sample set.",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        customers = self._seed_customers()
        orders_created = self._seed_orders(customers)
        orders_created += self._seed_extra_orders(customers, options["extra_orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"customers={len(customers)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        if User.objects.filter(username="admin").exists():
            return 0
        User.objects.create_superuser(
            "admin", email="admin@bloomora.local", password="admin123"
        )
        return 1

    def _seed_customers(self) -> list[Customer]:
        self.stdout.write("Creating customers...")
        customers: list[Customer] = []
        for full_name, phone, email, address, preferences in SEED_CUSTOMERS:
            customer, _ = Customer.objects.get_or_create(
                full_name=full_name,
                defaults={
                    "phone": phone,
                    "email": email,
                    "address": address,
                    "preferences": preferences,
                    "created_by": SEED_ACTOR,
                    "updated_by": SEED_ACTOR,
                },
            )
            customers.append(customer)
        self.stdout.write(self.style.SUCCESS("Creating customers... Done!"))
        return customers

    def _create_order(
        self,
        display_id: str,
        customer: Customer,
        order_offset: int,
        delivery_offset: int,
        products: str,
        total: Decimal,
        status: str,
        advance: Optional[Decimal],
        instructions: str,
    ) -> bool:
        now = timezone.now()
        _, created = Order.objects.get_or_create(
            display_id=display_id,
            defaults={
                "customer_id": customer.id,
                "order_date": now + timedelta(days=order_offset),
                "delivery_date": now + timedelta(days=delivery_offset),
                "products": products,
                "total_value": total,
                "status": status,
                "advance_amount": advance,
                "special_instructions": instructions,
                "created_by": SEED_ACTOR,
                "updated_by": SEED_ACTOR,
            },
        )
        return created

    def _seed_orders(self, customers: list[Customer]) -> int:
        self.stdout.write("Creating orders...")
        created = 0
        for (
            display_id,
            customer_index,
            order_offset,
            delivery_offset,
            products,
            total,
            status,
            advance,
            instructions,
        ) in SEED_ORDERS:
            created += self._create_order(
                display_id,
                customers[customer_index],
                order_offset,
                delivery_offset,
                products,
                Decimal(total),
                status,
                Decimal(advance) if advance else None,
                instructions,
            )
        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return created

    def _seed_extra_orders(self, customers: list[Customer], count: int) -> int:
        if not customers or count <= 0:
            return 0
        self.stdout.write("Creating extra orders...")
        created = 0
        statuses = list(OrderStatus.values)
        for i in range(count):
            total = Decimal(random.randint(30, 400)).quantize(Decimal("0.01"))
            status = random.choice(statuses)
            advance = None
            if status == OrderStatus.ADVANCE_TAKEN:
                advance = (total * Decimal("0.4")).quantize(Decimal("0.01"))
            order_offset = -random.randint(0, 45)
            created += self._create_order(
                f"PT-{2001 + i:06d}",
                random.choice(customers),
                order_offset,
                order_offset + random.randint(1, 10),
                random.choice(EXTRA_PRODUCTS),
                total,
                status,
                advance,
                "",
            )
        self.stdout.write(self.style.SUCCESS("Creating extra orders... Done!"))
        return created
