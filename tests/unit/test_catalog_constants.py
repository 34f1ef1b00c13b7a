"""
Unit tests for catalog constants
"""
import pytest

from microservices.profile_service.models import SkillLevel
from microservices.sports_event_service.constants import (
    ACADEMIC_YEARS,
    ALL_SPORTS,
    ALL_SPORTS_FILTER,
    CAMPUS_LOCATIONS,
    MAJORS,
    SKILL_LEVELS,
    locations_for,
)
from microservices.sports_event_service.models import Difficulty
from microservices.sports_event_service.seed_data import SAMPLE_EVENTS

pytestmark = pytest.mark.unit


class TestCatalogConstants:

    def test_every_sport_has_a_location(self):
        assert set(CAMPUS_LOCATIONS) == set(ALL_SPORTS)
        assert all(CAMPUS_LOCATIONS[sport] for sport in ALL_SPORTS)

    def test_filter_value_is_not_a_sport(self):
        assert ALL_SPORTS_FILTER not in ALL_SPORTS

    def test_skill_levels_match_models(self):
        assert SKILL_LEVELS == [level.value for level in SkillLevel]
        assert SKILL_LEVELS == [d.value for d in Difficulty]

    def test_profile_options_unique(self):
        assert len(set(ACADEMIC_YEARS)) == len(ACADEMIC_YEARS)
        assert len(set(MAJORS)) == len(MAJORS)

    @pytest.mark.parametrize("request_", SAMPLE_EVENTS, ids=lambda r: r.title)
    def test_sample_events_use_campus_locations(self, request_):
        assert request_.location in CAMPUS_LOCATIONS[request_.sport]

    def test_locations_for(self):
        venues = locations_for("Swimming")
        venues.append("Somewhere")

        assert locations_for("Swimming") == ["MAC Swimming Pool"]
        assert locations_for("Curling") == []
