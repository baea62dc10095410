from datetime import date

import pytest

from models.shoe import Shoe, ShoeCategory
from services.where_builder import build_where, requested_tags


@pytest.fixture
def catalog(make_shoe):
    return {
        "air": make_shoe("A-1", label="Air Max", rating=5, price="120.00", category=ShoeCategory.SNEAKER,
                         release_date=date(2023, 5, 1), tags=["SPORT"]),
        "gel": make_shoe("G-1", label="Gel Nimbus", rating=3, price="80.00", category=ShoeCategory.RUNNING_SHOE,
                         available=False, release_date=date(2021, 1, 1), tags=["sport", "VINTAGE"]),
        "old": make_shoe("O-1", label="Old Skool", rating=1, price="40.00", category=ShoeCategory.SKATE_SHOE,
                         tags=None),
    }


def ids(db, params):
    return {shoe.id for shoe in db.query(Shoe).filter(build_where(params)).all()}


def test_empty_params_match_everything(db, catalog):
    assert ids(db, {}) == set(catalog.values())


def test_model_label_is_a_case_insensitive_substring(db, catalog):
    assert ids(db, {"model": "AIR"}) == {catalog["air"]}
    assert ids(db, {"model": "o"}) == {catalog["old"]}


@pytest.mark.parametrize("text", ["%", "r_m", "Air%Max"])
def test_model_label_wildcards_are_literal(db, catalog, text):
    assert ids(db, {"model": text}) == set()


def test_article_code_is_exact(db, catalog):
    assert ids(db, {"article_code": "G-1"}) == {catalog["gel"]}
    assert ids(db, {"article_code": "G-"}) == set()


def test_rating_is_a_minimum(db, catalog):
    assert ids(db, {"rating": "3"}) == {catalog["air"], catalog["gel"]}
    assert ids(db, {"rating": "4.9"}) == {catalog["air"]}


def test_price_is_a_maximum(db, catalog):
    assert ids(db, {"price": "80"}) == {catalog["gel"], catalog["old"]}
    assert ids(db, {"price": "80.50"}) == {catalog["gel"], catalog["old"]}


@pytest.mark.parametrize("name, value", [("rating", "many"), ("price", "cheap"), ("release_date", "yesterday")])
def test_unparsable_values_are_dropped(db, catalog, name, value):
    assert ids(db, {name: value}) == set(catalog.values())


def test_category_maps_free_text_to_the_enum(db, catalog):
    assert ids(db, {"category": "runningshoe"}) == {catalog["gel"]}
    assert ids(db, {"category": "SNEAKER"}) == {catalog["air"]}


def test_unknown_category_is_dropped(db, catalog):
    assert ids(db, {"category": "boot"}) == set(catalog.values())


def test_available(db, catalog):
    assert ids(db, {"available": "TRUE"}) == {catalog["air"], catalog["old"]}
    assert ids(db, {"available": "yes"}) == {catalog["gel"]}


def test_release_date_is_a_minimum(db, catalog):
    assert ids(db, {"release_date": "2022-01-01"}) == {catalog["air"]}


def test_tag_flag_matches_any_letter_case(db, catalog):
    assert ids(db, {"sport": "true"}) == {catalog["air"], catalog["gel"]}


def test_tag_flags_are_or_combined(db, catalog):
    assert ids(db, {"vintage": "true", "streetware": "true"}) == {catalog["gel"]}
    assert ids(db, {"streetware": "true"}) == set()


def test_tags_are_and_combined_with_other_fields(db, catalog):
    assert ids(db, {"sport": True, "rating": "4"}) == {catalog["air"]}


def test_false_tag_flags_are_ignored(db, catalog):
    assert ids(db, {"sport": "false"}) == set(catalog.values())


def test_unknown_names_are_ignored_by_the_builder(db, catalog):
    assert ids(db, {"colour": "red"}) == set(catalog.values())


def test_requested_tags():
    assert requested_tags({"sport": "True", "vintage": True, "streetware": "no"}) == ["SPORT", "VINTAGE"]
