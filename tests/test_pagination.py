import math

import pytest
from pymongo import ASCENDING, DESCENDING

from storefront.services.pagination import (
    build_page_envelope,
    build_product_filter,
    page_link,
    page_skip,
    sort_direction,
)


def test_middle_page():
    envelope = build_page_envelope(total=25, limit=10, page=2)

    assert envelope["totalPages"] == 3
    assert envelope["hasPrevPage"] is True
    assert envelope["hasNextPage"] is True
    assert envelope["prevPage"] == 1
    assert envelope["nextPage"] == 3


def test_single_page():
    envelope = build_page_envelope(total=5, limit=10, page=1)

    assert envelope["totalPages"] == 1
    assert envelope["hasPrevPage"] is False
    assert envelope["hasNextPage"] is False
    assert envelope["prevPage"] is None
    assert envelope["nextPage"] is None
    assert envelope["prevLink"] is None
    assert envelope["nextLink"] is None


@pytest.mark.parametrize("total", [0, 1, 9, 10, 11, 99, 100, 101])
@pytest.mark.parametrize("limit", [1, 3, 10])
@pytest.mark.parametrize("page", [1, 2, 5, 40])
def test_page_flags_follow_page_math(total, limit, page):
    envelope = build_page_envelope(total, limit, page)

    assert envelope["totalPages"] == math.ceil(total / limit)
    assert envelope["hasPrevPage"] == (page > 1)
    assert envelope["hasNextPage"] == (page < envelope["totalPages"])
    assert envelope["prevPage"] == (page - 1 if envelope["hasPrevPage"] else None)
    assert envelope["nextPage"] == (page + 1 if envelope["hasNextPage"] else None)
    assert envelope["page"] == page


def test_page_past_the_end_has_no_next_page():
    envelope = build_page_envelope(total=25, limit=10, page=7, payload=[])

    assert envelope["payload"] == []
    assert envelope["nextPage"] is None
    assert envelope["nextLink"] is None
    assert envelope["prevPage"] == 6


def test_links_carry_query_parameters():
    envelope = build_page_envelope(total=25, limit=10, page=2, sort="desc", query="electronics")

    assert envelope["prevLink"] == "/api/products?limit=10&page=1&sort=desc&query=electronics"
    assert envelope["nextLink"] == "/api/products?limit=10&page=3&sort=desc&query=electronics"


def test_links_leave_out_missing_parameters():
    assert page_link(5, 2) == "/api/products?limit=5&page=2"


def test_links_are_url_encoded():
    assert page_link(10, 1, query="home & garden") == "/api/products?limit=10&page=1&query=home+%26+garden"


def test_envelope_status_and_payload():
    envelope = build_page_envelope(total=1, limit=10, page=1, payload=[{"code": "P1"}])

    assert envelope["status"] == "success"
    assert envelope["payload"] == [{"code": "P1"}]


@pytest.mark.parametrize("limit,page", [(0, 1), (10, 0), (-1, 1)])
def test_rejects_non_positive_limit_or_page(limit, page):
    with pytest.raises(ValueError):
        build_page_envelope(total=10, limit=limit, page=page)


def test_skip():
    assert page_skip(10, 1) == 0
    assert page_skip(10, 3) == 20


def test_filter_matches_category_or_availability():
    assert build_product_filter("electronics") == {
        "$or": [{"category": "electronics"}, {"availability": "electronics"}]
    }


@pytest.mark.parametrize("query", [None, ""])
def test_no_query_means_no_filter(query):
    assert build_product_filter(query) == {}


def test_sort_direction():
    assert sort_direction("desc") == DESCENDING
    assert sort_direction("asc") == ASCENDING
    assert sort_direction(None) == ASCENDING
