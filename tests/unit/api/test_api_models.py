# tests/unit/api/test_api_models.py
"""Tests for api/models.py request validation and response mapping."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from creditai.api.models import (
    PagedResponse,
    PageQuery,
    ProfileRequest,
    ProfileResponse,
    RawDataProfileRequest,
)


class TestProfileRequest:
    def test_valid(self):
        req = ProfileRequest(name="Ana", numeric_score=0, behavior_text="x" * 10)
        assert req.numeric_score == 0

    @pytest.mark.parametrize(
        "field,value",
        [
            ("name", "Al"),
            ("name", "x" * 151),
            ("numeric_score", 1001),
            ("numeric_score", -1),
            ("behavior_text", "too short"),
        ],
    )
    def test_invalid(self, field, value):
        data = {"name": "Ana", "numeric_score": 500, "behavior_text": "x" * 40}
        data[field] = value
        with pytest.raises(ValidationError):
            ProfileRequest(**data)


class TestRawDataProfileRequest:
    def test_accepts_any_payload(self):
        req = RawDataProfileRequest(name="Carlos", numeric_score=810, raw_data=[1, 2])
        assert req.raw_data == [1, 2]
        assert req.instruction is None


class TestPaging:
    def test_page_query_bounds(self):
        with pytest.raises(ValidationError):
            PageQuery(page=0)
        with pytest.raises(ValidationError):
            PageQuery(page_size=101)

    def test_paged_response_generic(self, make_profile):
        item = ProfileResponse.from_profile(make_profile("p1"))
        page = PagedResponse[ProfileResponse](
            page_number=1, page_size=20, total_items=1, total_pages=1, items=[item]
        )
        assert page.items[0].identity == "p1"


class TestProfileResponse:
    def test_embedding_not_exposed(self, make_profile):
        response = ProfileResponse.from_profile(make_profile("p1"))
        assert response.has_embedding is True
        assert "embedding" not in response.model_dump()
