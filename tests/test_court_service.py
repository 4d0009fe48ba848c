"""
Tests for court_service: filtering, distance sorting, facets and CRUD.
"""

import pytest

from courtla.models.schemas import Court, CourtFilter, CreateCourtRequest
from courtla.services import court_service
from courtla.utils.geo_utils import calculate_distance_km

# Downtown LA
DOWNTOWN = (34.0522, -118.2437)


def make_court(court_id, latitude=34.0, longitude=-118.3, **overrides):
    fields = {
        "id": court_id,
        "name": f"Court {court_id}",
        "latitude": latitude,
        "longitude": longitude,
        "address": "123 Main St",
        "is_indoor": False,
        "surface_type": "Concrete",
        "is_lighted": True,
        "player_count": 5,
        "skill_level": 5.0,
        "description": "",
    }
    fields.update(overrides)
    return Court(**fields)


@pytest.fixture
def courts(store):
    return store.list_courts()


# ============================================================================
# filter_courts
# ============================================================================


class TestFilterCourts:
    """Tests for predicate filtering."""

    def test_empty_filter_returns_everything(self, courts):
        """No predicates means no narrowing, in the original order."""
        assert court_service.filter_courts(courts, CourtFilter()) == courts

    def test_outdoor_only(self, courts):
        result = court_service.filter_courts(courts, CourtFilter(is_indoor=False))
        assert [c.id for c in result] == ["court-1", "court-3", "court-5"]
        assert all(not c.is_indoor for c in result)

    def test_skill_level_range_is_inclusive(self, courts):
        result = court_service.filter_courts(
            courts, CourtFilter(skill_level_min=6.0, skill_level_max=7.5)
        )
        assert [c.id for c in result] == ["court-1", "court-2", "court-5"]

    def test_skill_level_min(self, courts):
        result = court_service.filter_courts(courts, CourtFilter(skill_level_min=7.0))
        assert result
        assert all(c.skill_level >= 7.0 for c in result)

    def test_surface_type_exact_match(self, courts):
        result = court_service.filter_courts(courts, CourtFilter(surface_type="Wood"))
        assert [c.id for c in result] == ["court-2", "court-4"]

    def test_surface_type_is_case_sensitive(self, courts):
        assert court_service.filter_courts(courts, CourtFilter(surface_type="wood")) == []

    def test_unlighted(self, courts):
        result = court_service.filter_courts(courts, CourtFilter(is_lighted=False))
        assert [c.id for c in result] == ["court-5"]

    def test_min_player_count(self, courts):
        result = court_service.filter_courts(courts, CourtFilter(min_player_count=10))
        assert [c.id for c in result] == ["court-1", "court-3", "court-5"]

    def test_predicates_are_anded(self, courts):
        result = court_service.filter_courts(
            courts, CourtFilter(is_indoor=False, is_lighted=True, skill_level_min=8.0)
        )
        assert [c.id for c in result] == ["court-3"]

    def test_radius_requires_all_three_fields(self, courts):
        """A radius without a reference point is ignored."""
        assert court_service.filter_courts(courts, CourtFilter(radius=0.1)) == courts
        assert (
            court_service.filter_courts(courts, CourtFilter(latitude=0, longitude=0)) == courts
        )

    def test_radius_search(self, courts):
        lat, lon = DOWNTOWN
        result = court_service.filter_courts(
            courts, CourtFilter(latitude=lat, longitude=lon, radius=5)
        )
        assert [c.id for c in result] == ["court-4", "court-5"]
        for court in result:
            assert calculate_distance_km(lat, lon, court.latitude, court.longitude) <= 5

    def test_result_is_subset_satisfying_predicates(self, courts):
        court_filter = CourtFilter(is_indoor=True, min_player_count=7)
        result = court_service.filter_courts(courts, court_filter)
        assert all(c in courts for c in result)
        assert all(c.is_indoor and c.player_count >= 7 for c in result)

    def test_filter_does_not_modify_input(self, courts):
        before = list(courts)
        court_service.filter_courts(courts, CourtFilter(is_indoor=True))
        assert courts == before


# ============================================================================
# sort_courts_by_distance
# ============================================================================


class TestSortCourtsByDistance:
    """Tests for nearest-first ordering."""

    def test_sorted_nearest_first(self, courts):
        lat, lon = DOWNTOWN
        result = court_service.sort_courts_by_distance(courts, lat, lon)
        distances = [calculate_distance_km(lat, lon, c.latitude, c.longitude) for c in result]
        assert distances == sorted(distances)
        assert result[0].id == "court-4"
        assert result[-1].id == "court-2"

    def test_returns_new_list(self, courts):
        before = [c.id for c in courts]
        court_service.sort_courts_by_distance(courts, 0, 0)
        assert [c.id for c in courts] == before

    def test_ties_keep_input_order(self):
        same_spot = [make_court("b", 34.0, -118.0), make_court("a", 34.0, -118.0)]
        far = make_court("far", 40.0, -100.0)
        result = court_service.sort_courts_by_distance([far] + same_spot, 34.0, -118.0)
        assert [c.id for c in result] == ["b", "a", "far"]


# ============================================================================
# search_courts / facets
# ============================================================================


def test_search_sorts_when_point_given_without_radius(store):
    lat, lon = DOWNTOWN
    result = court_service.search_courts(store, CourtFilter(latitude=lat, longitude=lon))
    assert len(result) == 5
    assert result[0].id == "court-4"


def test_search_keeps_store_order_without_point(store):
    result = court_service.search_courts(store, CourtFilter(is_lighted=True))
    assert [c.id for c in result] == ["court-1", "court-2", "court-3", "court-4"]


def test_surface_types_sorted_unique(courts):
    assert court_service.get_surface_types(courts) == ["Asphalt", "Concrete", "Wood"]


def test_skill_level_range(courts):
    skill_range = court_service.get_skill_level_range(courts)
    assert skill_range.min == 5.5
    assert skill_range.max == 8.0


def test_skill_level_range_empty():
    skill_range = court_service.get_skill_level_range([])
    assert (skill_range.min, skill_range.max) == (0, 10)


# ============================================================================
# CRUD
# ============================================================================


def test_create_court_applies_defaults(store):
    payload = CreateCourtRequest(
        name="Rucker Park West",
        latitude=34.1,
        longitude=-118.3,
        address="1 Hoop Ln",
        is_indoor=False,
        surface_type="Asphalt",
        is_lighted=False,
    )
    court = court_service.create_court(store, payload)

    assert court.player_count == 0
    assert court.skill_level == 5.0
    assert court.description == ""
    assert store.get_court(court.id) == court


def test_update_player_count_and_skill(store):
    court = court_service.update_player_count(store, "court-2", 14)
    assert court.player_count == 14
    court = court_service.update_skill_level(store, "court-2", 9.5)
    assert court.skill_level == 9.5
    assert court.player_count == 14


def test_update_missing_court_returns_none(store):
    assert court_service.update_player_count(store, "missing", 1) is None
    assert court_service.update_skill_level(store, "missing", 1.0) is None
