"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
and match the field names expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

PROVIDER_CATEGORIES = ["Mechanic", "Dealer", "Body Shop", "Detailing", "Tires", "Glass", "Inspection"]


def unique_user_id() -> str:
    """Generate unique user ids like 'user-lt-a1b2c3d4'."""
    return f"user-lt-{uuid.uuid4().hex[:8]}"


def provider_data() -> dict:
    """Payload for POST /service-providers."""
    return {
        "name": f"{fake.last_name()} {random.choice(['Motors', 'Auto', 'Garage', 'Car Care'])}"[:200],
        "category": random.choice(PROVIDER_CATEGORIES),
    }


def rating() -> int:
    """Skewed towards good reviews, like real marketplaces."""
    return random.choices([1, 2, 3, 4, 5], weights=[1, 1, 2, 4, 5])[0]


def review_data(user_id: str) -> dict:
    """Payload for POST /service-providers/{id}/reviews."""
    return {
        "user_id": user_id,
        "rating": rating(),
        "title": fake.sentence(nb_words=5)[:200],
        "body": fake.paragraph(nb_sentences=3),
    }
