"""Shared parcel fixtures."""

from typing import List

import pytest

from parcelgeo.models import GeoPoint, as_polygon


def _shifted(polygon: List[GeoPoint], d_lat: float, d_lng: float) -> List[GeoPoint]:
    return [GeoPoint(latitude=p.latitude + d_lat, longitude=p.longitude + d_lng) for p in polygon]


@pytest.fixture
def shift():
    """Translate a polygon by (d_lat, d_lng) degrees."""
    return _shifted


@pytest.fixture
def parcel_a() -> List[GeoPoint]:
    """Square parcel of 0.01° near Colombo."""
    return as_polygon([(6.90, 79.90), (6.90, 79.91), (6.91, 79.91), (6.91, 79.90)])


@pytest.fixture
def parcel_far(parcel_a) -> List[GeoPoint]:
    return _shifted(parcel_a, 0.1, 0.1)


@pytest.fixture
def parcel_partial(parcel_a) -> List[GeoPoint]:
    return _shifted(parcel_a, 0.005, 0.005)


@pytest.fixture
def parcel_inner() -> List[GeoPoint]:
    """Small square entirely inside parcel_a."""
    return as_polygon([(6.902, 79.902), (6.902, 79.904), (6.904, 79.904), (6.904, 79.902)])


@pytest.fixture
def unit_square() -> List[GeoPoint]:
    return as_polygon([(0, 0), (0, 1), (1, 1), (1, 0)])


@pytest.fixture
def cross_a() -> List[GeoPoint]:
    """Tall thin rectangle, crosses cross_b without vertex containment."""
    return as_polygon([(0.0, 0.4), (0.0, 0.6), (1.0, 0.6), (1.0, 0.4)])


@pytest.fixture
def cross_b() -> List[GeoPoint]:
    """Wide flat rectangle."""
    return as_polygon([(0.4, 0.0), (0.4, 1.0), (0.6, 1.0), (0.6, 0.0)])
