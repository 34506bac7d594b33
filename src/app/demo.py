"""Demo catalog content for first launch."""

import logging
from datetime import datetime, timedelta

from src.domain.catalog import EventCatalog
from src.domain.models import Event, EventCategory

logger = logging.getLogger(__name__)

# (title, description, days ahead, hour, minute, location, category, capacity)
DEMO_EVENTS = [
    (
        "Artificial Intelligence Conference",
        "Explore the latest advances in AI with experts in the field. "
        "Discussion on ethics and the future of the technology.",
        7,
        14,
        0,
        "Amphitheatre A - Main Building",
        EventCategory.CONFERENCE,
        150,
    ),
    (
        "Inter-University Basketball Tournament",
        "Sports competition between the best university teams. Final under the lights!",
        3,
        10,
        0,
        "University Sports Complex",
        EventCategory.SPORT,
        60,
    ),
    (
        "Full-Stack Web Development Workshop",
        "Learn to build modern web applications with current technologies. Hands-on session.",
        14,
        9,
        30,
        "Computer Room 301",
        EventCategory.WORKSHOP,
        25,
    ),
    (
        "Annual Graduates Gala",
        "Celebration of academic success with cocktails, dinner and professional networking.",
        21,
        20,
        0,
        "Grand Events Hall",
        EventCategory.OTHER,
        200,
    ),
]


def seed_demo_events(catalog: EventCatalog, now: datetime) -> list[Event]:
    """
    Create the demo events when the catalog is empty.

    Dates are relative to the start of the current day. Returns the
    created events, or an empty list if the catalog already had events.
    """
    if catalog.get_all_events():
        return []

    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    created = [
        catalog.create_event(
            title,
            description,
            midnight + timedelta(days=days, hours=hour, minutes=minute),
            location,
            category,
            capacity,
        )
        for title, description, days, hour, minute, location, category, capacity in DEMO_EVENTS
    ]
    logger.info("Seeded %d demo event(s)", len(created))
    return created
