from __future__ import annotations

from datetime import date

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.customers.models import Address, Customer
from modules.posts.models import Post, PostComment

SEED_CUSTOMERS = [
    (
        "Raja",
        "Kolli",
        date(1982, 1, 10),
        {
            "street": "High Street",
            "town": "Belfast",
            "county": "India",
            "postcode": "BT893PY",
        },
    ),
    (
        "Paul",
        "Jones",
        date(1973, 1, 3),
        {
            "street": "Market Street",
            "town": "Portadown",
            "county": "Armagh",
            "postcode": "BT359JK",
        },
    ),
    (
        "Steve",
        "Toale",
        date(1979, 3, 8),
        {
            "street": "Main Street",
            "town": "Newry",
            "county": "Down",
            "postcode": "BT359JK",
        },
    ),
]

SEED_POSTS = [
    ("Getting started", "Customers can be managed through /api/v1/customers/.", [
        "Clear and short.",
        "Would like an example with an address.",
    ]),
    ("Caching notes", "Lookups by id are served from the customer cache.", [
        "How long do entries live?",
    ]),
]


class Command(BaseCommand):
    help = "Seed database with development data."

    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        customers = self._seed_customers()
        posts = self._seed_posts()

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"customers={len(customers)}, "
                f"posts={len(posts)}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
            created += 1
        if not User.objects.filter(username="user").exists():
            User.objects.create_user("user", password="user123")
            created += 1
        return created

    def _seed_customers(self) -> list[Customer]:
        self.stdout.write("Creating customers...")
        customers: list[Customer] = []
        for first_name, last_name, dob, address in SEED_CUSTOMERS:
            customer, created = Customer.objects.get_or_create(
                first_name=first_name,
                last_name=last_name,
                defaults={"date_of_birth": dob},
            )
            if created:
                Address.objects.create(customer=customer, **address)
            customers.append(customer)
        self.stdout.write(self.style.SUCCESS("Creating customers... Done!"))
        return customers

    def _seed_posts(self) -> list[Post]:
        self.stdout.write("Creating posts...")
        posts: list[Post] = []
        for title, content, reviews in SEED_POSTS:
            post, created = Post.objects.get_or_create(
                title=title, defaults={"content": content}
            )
            if created:
                PostComment.objects.bulk_create(
                    [PostComment(post=post, review=review) for review in reviews]
                )
            posts.append(post)
        self.stdout.write(self.style.SUCCESS("Creating posts... Done!"))
        return posts
