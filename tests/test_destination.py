from __future__ import annotations

from ean_mobile.destinations.destination import Category, Destination, parse_destinations


def test_parse_destinations_accepts_items_envelope_and_bare_list():
    items = [
        {"id": "1", "name": "Seattle", "category": "CITY", "categoryLocalized": "City"},
        {"id": "2", "name": "SeaTac Airport", "category": "airport"},
    ]

    from_envelope = parse_destinations({"items": items})
    from_list = parse_destinations(items)

    assert from_envelope == from_list
    assert from_envelope[0] == Destination(
        identifier="1", name="Seattle", category=Category.CITY, category_localized="City"
    )
    assert from_envelope[1].category is Category.AIRPORT


def test_parse_destinations_tolerates_unknown_categories_and_junk():
    destinations = parse_destinations({"items": [{"id": 9, "name": "Space Needle", "category": "POI"}, "junk"]})

    assert len(destinations) == 1
    assert destinations[0].identifier == "9"
    assert destinations[0].category is Category.UNKNOWN
    assert not destinations[0].is_city
    assert parse_destinations({"unexpected": True}) == []
