"""Tests for overlap magnitude, boundary references and conflict detection."""

import pytest

from parcelgeo.geometry.overlap import (
    overlap_percentage, intersection_area_ratio, is_deed_reference,
    do_boundaries_overlap, compare_parcels, OverlapDetector,
)
from parcelgeo.models import BoundarySet, OverlapVerdict, Parcel, as_polygon


# --- overlap_percentage ---

class TestOverlapPercentage:

    def test_disjoint_is_zero(self, parcel_a, parcel_far):
        assert overlap_percentage(parcel_a, parcel_far) == 0.0

    def test_partial_overlap_in_range(self, parcel_a, parcel_partial):
        pct = overlap_percentage(parcel_a, parcel_partial)
        assert 0.0 < pct < 100.0

    def test_contained_parcel_counts_all_its_vertices(self, parcel_a, parcel_inner):
        # pctB = 100, pctA = 0
        assert overlap_percentage(parcel_a, parcel_inner) == pytest.approx(50.0)
        assert overlap_percentage(parcel_inner, parcel_a) == pytest.approx(50.0)

    def test_more_mutual_containment_scores_higher(self, parcel_a, shift):
        # One corner of each inside the other
        slight = shift(parcel_a, 0.008, 0.008)
        # Three of four vertices inside parcel_a, and it covers parcel_a's NE corner
        heavy = as_polygon([(6.902, 79.902), (6.902, 79.908), (6.912, 79.912), (6.908, 79.902)])

        assert overlap_percentage(parcel_a, slight) == pytest.approx(25.0)
        assert overlap_percentage(parcel_a, heavy) == pytest.approx(50.0)

    def test_edge_crossing_only_is_zero_samples(self, cross_a, cross_b):
        # Overlapping, but no vertex of either lies inside the other
        assert overlap_percentage(cross_a, cross_b) == 0.0

    def test_degenerate_input(self, parcel_a):
        assert overlap_percentage(parcel_a, as_polygon([(6.905, 79.905)])) == 0.0


# --- intersection_area_ratio ---

class TestIntersectionAreaRatio:

    def test_contained(self, parcel_a, parcel_inner):
        assert intersection_area_ratio(parcel_a, parcel_inner) == pytest.approx(100.0)

    def test_quarter_overlap(self, parcel_a, parcel_partial):
        assert intersection_area_ratio(parcel_a, parcel_partial) == pytest.approx(25.0, rel=1e-6)

    def test_disjoint(self, parcel_a, parcel_far):
        assert intersection_area_ratio(parcel_a, parcel_far) == 0.0


# --- boundary references ---

class TestBoundaryReferences:

    @pytest.mark.parametrize("text", ["D001", "1234", "AB-12/3", " d77 "])
    def test_deed_reference(self, text):
        assert is_deed_reference(text)

    @pytest.mark.parametrize("text", ["Main Road", "Canal", "", None, "Lot of D001"])
    def test_not_deed_reference(self, text):
        assert not is_deed_reference(text)

    def test_matching_deed_on_facing_sides(self):
        assert do_boundaries_overlap(BoundarySet(North="D001"), BoundarySet(South="D001"))
        assert do_boundaries_overlap(BoundarySet(West="D042"), BoundarySet(East="D042"))

    def test_landmark_text_ignored(self):
        assert not do_boundaries_overlap(BoundarySet(North="Main Road"), BoundarySet(South="Main Road"))

    def test_same_side_does_not_match(self):
        assert not do_boundaries_overlap(BoundarySet(North="D001"), BoundarySet(North="D001"))

    def test_case_and_whitespace_insensitive(self):
        assert do_boundaries_overlap(BoundarySet(East="d001 "), BoundarySet(West="D001"))

    def test_missing_sides(self):
        assert not do_boundaries_overlap(None, BoundarySet(South="D001"))
        assert not do_boundaries_overlap(BoundarySet(), BoundarySet())


# --- verdicts ---

class TestCompareParcels:

    def test_polygon_only(self, parcel_a, parcel_partial):
        verdict = compare_parcels(parcel_a, parcel_partial)
        assert verdict.overlap_type == "polygon"
        assert 0.0 < verdict.overlap_percentage < 100.0

    def test_boundary_only(self, parcel_a, parcel_far):
        verdict = compare_parcels(parcel_a, parcel_far, BoundarySet(North="D9"), BoundarySet(South="D9"))
        assert verdict.overlap_type == "boundary"
        assert verdict.overlap_percentage is None

    def test_both(self, parcel_a, parcel_inner):
        verdict = compare_parcels(parcel_a, parcel_inner, BoundarySet(East="17"), BoundarySet(West="17"))
        assert verdict.overlap_type == "both"
        assert verdict.overlap_percentage == pytest.approx(50.0)

    def test_clear(self, parcel_a, parcel_far):
        assert compare_parcels(parcel_a, parcel_far) is None

    def test_verdict_serializes_camel_case(self):
        verdict = OverlapVerdict(overlap_type="boundary")
        assert verdict.model_dump(by_alias=True) == {"overlapType": "boundary", "overlapPercentage": None}
        assert OverlapVerdict.model_validate({"overlapType": "polygon", "overlapPercentage": 12.5}).overlap_percentage == 12.5


# --- OverlapDetector ---

class TestOverlapDetector:

    @pytest.fixture
    def parcels(self, parcel_a, parcel_far, parcel_partial):
        return [
            Parcel(parcel_id="DeedLinkPlan-1", coordinates=parcel_a, sides=BoundarySet(North="D300")),
            Parcel(parcel_id="DeedLinkPlan-2", coordinates=parcel_far),
            Parcel(parcel_id="DeedLinkPlan-3", coordinates=parcel_partial),
            Parcel(parcel_id="DeedLinkPlan-4", coordinates=[], sides=BoundarySet(South="D300")),
        ]

    def test_detect_pairs(self, parcels):
        results = OverlapDetector().detect(parcels)
        pairs = {(r.parcel_a, r.parcel_b): r.verdict.overlap_type for r in results}

        assert pairs == {
            ("DeedLinkPlan-1", "DeedLinkPlan-3"): "polygon",
            ("DeedLinkPlan-1", "DeedLinkPlan-4"): "boundary",
        }

    def test_detect_empty(self):
        assert OverlapDetector().detect([]) == []

    def test_check_candidate(self, parcels, parcel_a, shift):
        candidate = Parcel(parcel_id="new", coordinates=shift(parcel_a, 0.001, 0.001))
        results = OverlapDetector().check(candidate, parcels)

        assert [r.parcel_b for r in results] == ["DeedLinkPlan-1", "DeedLinkPlan-3"]
        assert all(r.parcel_a == "new" for r in results)

    def test_check_skips_itself(self, parcels):
        results = OverlapDetector().check(parcels[0], parcels)
        assert "DeedLinkPlan-1" not in [r.parcel_b for r in results]

    def test_parcel_accepts_stored_coordinate_shapes(self):
        parcel = Parcel.model_validate({
            "parcel_id": "p",
            "coordinates": [
                {"latitude": 6.9, "longitude": 79.9},
                {"lat": 6.9, "lng": 79.91},
                [6.91, 79.91],
            ],
        })
        assert [p.as_tuple() for p in parcel.coordinates] == [(6.9, 79.9), (6.9, 79.91), (6.91, 79.91)]
