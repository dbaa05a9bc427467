"""
Tests for the response envelope builders.

Inspects the JSON bodies directly; no application needed.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from foundation.shared.responses import (
    build_page_meta,
    send_error,
    send_paginated,
    send_success,
)


def _body(response) -> dict:
    return json.loads(response.body)


@dataclass
class Widget:
    name: str
    created_at: datetime


class TestSendSuccess:
    """Tests for send_success."""

    def test_minimal_envelope_omits_optional_keys(self) -> None:
        response = send_success("Done")

        assert response.status_code == 200
        assert _body(response) == {"success": True, "message": "Done"}

    def test_data_and_meta_are_included(self) -> None:
        meta = build_page_meta(1, 10, 3)

        response = send_success("Listed", [1, 2, 3], 200, meta)

        body = _body(response)
        assert body["data"] == [1, 2, 3]
        assert body["meta"] == {"page": 1, "limit": 10, "total": 3, "totalPages": 1}

    def test_custom_status_code(self) -> None:
        response = send_success("Created", {"id": "abc"}, 201)

        assert response.status_code == 201
        assert _body(response)["data"] == {"id": "abc"}

    def test_falsy_data_is_kept(self) -> None:
        assert _body(send_success("Empty", []))["data"] == []
        assert _body(send_success("Zero", 0))["data"] == 0

    def test_dataclasses_and_datetimes_are_encoded(self) -> None:
        widget = Widget("bolt", datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))

        body = _body(send_success("Widget", widget))

        assert body["data"] == {"name": "bolt", "created_at": "2024-01-02T03:04:05+00:00"}


class TestSendError:
    """Tests for send_error."""

    def test_defaults_to_500_without_errors_key(self) -> None:
        response = send_error("Something broke")

        assert response.status_code == 500
        assert _body(response) == {"success": False, "message": "Something broke"}

    def test_field_errors_are_included(self) -> None:
        response = send_error("Validation failed", 422, {"name": ["required"]})

        assert response.status_code == 422
        assert _body(response) == {
            "success": False,
            "message": "Validation failed",
            "errors": {"name": ["required"]},
        }


class TestPagination:
    """Tests for page metadata and send_paginated."""

    @pytest.mark.parametrize(
        ("total", "limit", "expected"),
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (100, 1, 100), (5, 3, 2)],
    )
    def test_total_pages_is_ceiling(self, total: int, limit: int, expected: int) -> None:
        assert build_page_meta(1, limit, total)["totalPages"] == expected

    def test_total_pages_exact_for_large_totals(self) -> None:
        meta = build_page_meta(1, 3, 10**18 + 1)

        assert meta["totalPages"] == 333333333333333334

    def test_limit_below_one_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            build_page_meta(1, 0, 5)

    def test_send_paginated(self) -> None:
        response = send_paginated("Users", ({"id": n} for n in range(2)), page=2, limit=2, total=5)

        assert response.status_code == 200
        assert _body(response) == {
            "success": True,
            "message": "Users",
            "data": [{"id": 0}, {"id": 1}],
            "meta": {"page": 2, "limit": 2, "total": 5, "totalPages": 3},
        }
