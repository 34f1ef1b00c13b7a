"""
Sample events for a fresh catalog.

Seeding goes through ``SportsEventService.create_event`` so sample events
get a server timestamp, the seeding identity on the roster and the same
capacity bounds as user-created events.
"""

import logging
from typing import List

from .models import Difficulty, EventCreateRequest
from .sports_event_service import SportsEventService

logger = logging.getLogger(__name__)

SEED_CREATOR_ID = "system"

SAMPLE_EVENTS = [
    EventCreateRequest(
        title="Morning Basketball",
        sport="Basketball",
        location="MAC Basketball Court 1",
        date="Today",
        time="8:00 AM",
        max_participants=10,
        description="Casual morning basketball game. All skill levels welcome!",
        difficulty=Difficulty.BEGINNER,
    ),
    EventCreateRequest(
        title="Soccer Scrimmage",
        sport="Soccer",
        location="MAC Soccer Field A",
        date="Today",
        time="6:00 PM",
        max_participants=22,
        description="11v11 soccer game. Looking for players!",
        difficulty=Difficulty.INTERMEDIATE,
    ),
    EventCreateRequest(
        title="Volleyball Practice",
        sport="Volleyball",
        location="MAC Volleyball Court 1",
        date="Tomorrow",
        time="7:00 PM",
        max_participants=12,
        description="Practice session for beginners and intermediate players",
        difficulty=Difficulty.BEGINNER,
    ),
    EventCreateRequest(
        title="Tennis Doubles",
        sport="Tennis",
        location="MAC Tennis Court 2",
        date="Tomorrow",
        time="5:30 PM",
        max_participants=4,
        description="Doubles tennis match. Need 2 more players!",
        difficulty=Difficulty.INTERMEDIATE,
    ),
    EventCreateRequest(
        title="Swimming Laps",
        sport="Swimming",
        location="MAC Swimming Pool",
        date="Tomorrow",
        time="7:00 AM",
        max_participants=8,
        description="Morning swim session with lane sharing",
        difficulty=Difficulty.BEGINNER,
    ),
    EventCreateRequest(
        title="Badminton Tournament",
        sport="Badminton",
        location="MAC Badminton Court 1",
        date="Weekend",
        time="2:00 PM",
        max_participants=8,
        description="Single elimination badminton tournament",
        difficulty=Difficulty.ADVANCED,
    ),
    EventCreateRequest(
        title="Ping Pong Fun",
        sport="Ping Pong",
        location="MAC Recreation Room - Table 1",
        date="Today",
        time="12:00 PM",
        max_participants=4,
        description="Casual ping pong games during lunch break",
        difficulty=Difficulty.BEGINNER,
    ),
    EventCreateRequest(
        title="Campus Morning Run",
        sport="Running",
        location="Campus Loop Trail",
        date="Daily",
        time="6:30 AM",
        max_participants=15,
        description="Join us for a morning run around campus!",
        difficulty=Difficulty.BEGINNER,
    ),
    EventCreateRequest(
        title="3v3 Basketball",
        sport="Basketball",
        location="MAC Basketball Court 3",
        date="Tonight",
        time="8:00 PM",
        max_participants=6,
        description="Fast-paced 3v3 basketball games",
        difficulty=Difficulty.INTERMEDIATE,
    ),
    EventCreateRequest(
        title="Beach Volleyball Style",
        sport="Volleyball",
        location="MAC Volleyball Court 2",
        date="Weekend",
        time="4:00 PM",
        max_participants=8,
        description="2v2 beach volleyball style games (indoor court)",
        difficulty=Difficulty.ADVANCED,
    ),
]


async def seed_sample_events(service: SportsEventService, creator_identity: str = SEED_CREATOR_ID) -> List[str]:
    """
    Create the sample events if the catalog is empty.

    Returns the ids of the created events (empty when already seeded).
    Capacities above the configured maximum are clamped to it.
    """
    existing = await service.repository.list_events()
    if existing:
        logger.info(f"Catalog already has {len(existing)} events, skipping seed")
        return []

    low, high = service.policy.min_participants, service.policy.max_participants
    created = []
    for sample in SAMPLE_EVENTS:
        capacity = min(max(sample.max_participants, low), high)
        request = sample.model_copy(update={"max_participants": capacity})
        event_id = await service.create_event(request, creator_identity)
        logger.info(f"Seeded event {event_id}: {sample.title}")
        created.append(event_id)

    logger.info(f"Seeded {len(created)} events")
    return created


__all__ = ["SAMPLE_EVENTS", "SEED_CREATOR_ID", "seed_sample_events"]
