from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.crackers.models import Cracker
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem

CATALOG = [
    ("Flower Pots Big", "பூச்சட்டி பெரியது", "Flower Pots", "320.00", "96.00"),
    ("Flower Pots Special", "பூச்சட்டி ஸ்பெஷல்", "Flower Pots", "450.00", "135.00"),
    ("Ground Chakkar Big", "தரைச்சக்கரம் பெரியது", "Ground Chakkars", "240.00", "72.00"),
    ("Ground Chakkar Deluxe", "தரைச்சக்கரம் டீலக்ஸ்", "Ground Chakkars", "380.00", "114.00"),
    ("7cm Electric Sparklers", "7செ.மீ மத்தாப்பு", "Sparklers", "60.00", "18.00"),
    ("10cm Colour Sparklers", "10செ.மீ கலர் மத்தாப்பு", "Sparklers", "110.00", "33.00"),
    ("15cm Green Sparklers", "15செ.மீ பச்சை மத்தாப்பு", "Sparklers", "290.00", "87.00"),
    ("4\" Lakshmi Crackers", "4\" லட்சுமி வெடி", "Sound Crackers", "150.00", "45.00"),
    ("Bullet Bomb", "புல்லட் பாம்", "Sound Crackers", "200.00", "60.00"),
    ("100 Wala", "100 வாலா", "Garlands", "180.00", "54.00"),
    ("1000 Wala", "1000 வாலா", "Garlands", "1200.00", "360.00"),
    ("Baby Rocket", "குழந்தை ராக்கெட்", "Rockets", "170.00", "51.00"),
    ("Whistling Rocket", "விசில் ராக்கெட்", "Rockets", "420.00", "126.00"),
    ("Twinkling Star", "மின்னும் நட்சத்திரம்", "Fancy", "140.00", "42.00"),
    ("Magic Pencil", "மேஜிக் பென்சில்", "Fancy", "95.00", "28.50"),
]

CUSTOMERS = [
    ("Karthik R", "9876543210", "12 Gandhi Road, Sivakasi", "Tamil Nadu"),
    ("Priya S", "9445012345", "4 MG Road, Bengaluru", "Karnataka"),
    ("Arun K", "9003012345", "22 Anna Nagar, Chennai", "Tamil Nadu"),
    ("Meena V", "8056012345", "7 Beach Road, Puducherry", "Puducherry"),
    ("Suresh P", "7708012345", "19 Temple Street, Madurai", "Tamil Nadu"),
]


class Command(BaseCommand):
    help = "Seed database with realistic development data (catalog and orders)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--orders",
            type=int,
            default=30,
            help="Number of orders to create (default: 30).",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        crackers = self._seed_crackers()
        orders_created = self._seed_orders(crackers, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"crackers={len(crackers)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_crackers(self) -> list[Cracker]:
        self.stdout.write("Creating crackers...")
        crackers: list[Cracker] = []
        for english, tamil, category, original, discount in CATALOG:
            cracker, _ = Cracker.objects.get_or_create(
                english_name=english,
                defaults={
                    "tamil_name": tamil,
                    "category": category,
                    "original_rate": Decimal(original),
                    "discount_rate": Decimal(discount),
                    "is_active": random.random() > 0.1,
                },
            )
            crackers.append(cracker)
        self.stdout.write(self.style.SUCCESS("Creating crackers... Done!"))
        return crackers

    def _seed_orders(self, crackers: list[Cracker], count: int) -> int:
        self.stdout.write("Creating orders...")
        if not crackers:
            self.stdout.write(self.style.WARNING("Skipping orders (no crackers)."))
            return 0

        orders_created = 0
        for i in range(count):
            order_number = f"SEED-{i + 1:04d}"
            if Order.objects.filter(order_number=order_number).exists():
                continue

            name, phone, address, state = random.choice(CUSTOMERS)
            placed_at = timezone.now() - timedelta(days=random.randint(0, 30))
            picked = random.sample(crackers, k=min(random.randint(1, 5), len(crackers)))

            order = Order.objects.create(
                order_number=order_number,
                order_date=placed_at.strftime("%d/%m/%Y"),
                customer_name=name,
                customer_number=phone,
                customer_address=address,
                customer_state=state,
                total_rate=Decimal("0.00"),
                status=random.choice(OrderStatus.values),
            )

            total = Decimal("0.00")
            for position, cracker in enumerate(picked):
                item = OrderItem(
                    order=order,
                    position=position,
                    name=cracker.english_name,
                    tamil_name=cracker.tamil_name,
                    quantity=random.randint(1, 10),
                    rate=cracker.discount_rate,
                    category=cracker.category,
                )
                item.save()
                total += item.amount

            Order.objects.filter(id=order.id).update(
                total_rate=total, created_at=placed_at
            )
            orders_created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders_created
