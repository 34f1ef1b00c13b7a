"""
Sports Event Fixtures

Factories for event creation requests and stored event documents.
"""
import uuid
from typing import Any, Dict, List, Optional

from microservices.sports_event_service.models import Difficulty, EventCreateRequest

from .common import make_timestamp


def make_event_id() -> str:
    return f"evt_test_{uuid.uuid4().hex[:12]}"


def make_event_request(**overrides: Any) -> EventCreateRequest:
    """Valid creation request; override any field"""
    data = {
        "title": "Pickup Basketball",
        "sport": "Basketball",
        "location": "MAC Basketball Court 1",
        "date": "Today",
        "time": "6:00 PM",
        "max_participants": 10,
        "description": "Casual run, all levels welcome",
        "difficulty": Difficulty.BEGINNER,
    }
    data.update(overrides)
    return EventCreateRequest(**data)


def make_event_document(
    created_by: str,
    participant_ids: Optional[List[str]] = None,
    event_id: Optional[str] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    """Stored event document as returned by the store (``id`` included)"""
    participants = participant_ids if participant_ids is not None else [created_by]
    doc = {
        "id": event_id or make_event_id(),
        "title": "Pickup Basketball",
        "sport": "Basketball",
        "location": "MAC Basketball Court 1",
        "date": "Today",
        "time": "6:00 PM",
        "max_participants": 10,
        "participant_ids": list(participants),
        "participant_names": {p: f"Player {p[-4:]}" for p in participants},
        "created_by": created_by,
        "created_by_name": f"Player {created_by[-4:]}",
        "created_at": make_timestamp(),
        "description": "",
        "difficulty": "Beginner",
        "is_active": True,
        "closed_reason": None,
        "closed_at": None,
        "kicked": [],
    }
    doc.update(overrides)
    return doc
