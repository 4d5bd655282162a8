"""
Tests for identifiers, audit timestamps and CSV helpers.
"""

import re
from datetime import datetime

from core.utils import (
    create_timestamps,
    csv_header,
    generate_id,
    now_timestamp,
    parse_csv,
    records_to_csv,
    update_timestamps,
)
from models.common import HealthCheckResponse, create_error_response
from utils.datetime_utils import to_iso_timestamp

ID_PATTERN = re.compile(r"^\d{13}-[0-9a-z]{9}$")


class TestGenerateId:
    """Tests for record identifiers."""

    def test_generate_id_format(self):
        """Test an id is millis, a dash and nine base-36 characters."""
        assert ID_PATTERN.match(generate_id())

    def test_generate_id_unique(self):
        """Test a thousand ids never collide."""
        generated = {generate_id() for _ in range(1000)}
        assert len(generated) == 1000


class TestTimestamps:
    """Tests for audit field helpers."""

    def test_create_timestamps(self):
        """Test the creation envelope fields."""
        stamps = create_timestamps("user-1")

        assert stamps["created_at"] == stamps["updated_at"]
        assert stamps["created_by"] == "user-1"
        assert stamps["updated_by"] == "user-1"
        assert stamps["is_deleted"] is False

    def test_create_timestamps_without_user(self):
        """Test actors are None when no user is given."""
        stamps = create_timestamps()
        assert stamps["created_by"] is None
        assert stamps["updated_by"] is None

    def test_now_timestamp_has_offset(self):
        """Test timestamps carry the configured zone offset."""
        stamp = now_timestamp()
        parsed = datetime.fromisoformat(stamp)

        assert parsed.utcoffset() is not None
        assert stamp.endswith("+07:00")

    def test_update_timestamps_advance(self):
        """Test update timestamps come after creation timestamps."""
        created = create_timestamps("user-1")
        updated = update_timestamps("user-2")

        assert set(updated) == {"updated_at", "updated_by"}
        assert updated["updated_by"] == "user-2"
        assert updated["updated_at"] > created["updated_at"]

    def test_naive_datetime_assumed_local(self):
        """Test a naive datetime is serialized in the local zone."""
        assert to_iso_timestamp(datetime(2024, 1, 1, 8, 0)).endswith("+07:00")


class TestResponseTimestamps:
    """Tests for response model timestamps."""

    def test_error_response_timestamp_has_offset(self):
        """Test error responses are stamped in the local zone."""
        response = create_error_response("StorageException", "Boom")
        assert datetime.fromisoformat(response["timestamp"]).utcoffset() is not None

    def test_health_check_timestamp_has_offset(self):
        """Test health check responses are stamped in the local zone."""
        response = HealthCheckResponse(
            status="healthy",
            service="ERP Entity Store",
            version="1.0.0",
            storage="connected",
            environment="development",
        )
        assert response.timestamp.utcoffset() is not None


class TestCsv:
    """Tests for CSV export/import helpers."""

    def test_export_empty(self):
        """Test exporting no records yields an empty string."""
        assert records_to_csv([]) == ""

    def test_export_values(self):
        """Test quoting, None and nested values in an export."""
        text = records_to_csv([
            {"name": "Granite, Black", "qty": 2, "note": None, "lines": [{"a": 1}]},
        ])
        header, row = text.strip().split("\n")

        assert header == "name,qty,note,lines"
        assert row.startswith('"Granite, Black",2,,')
        assert '""a"": 1' in row

    def test_export_header_from_first_record(self):
        """Test the header comes from the first record."""
        text = records_to_csv([{"a": 1}, {"a": 2, "b": 3}])
        assert text == "a\n1\n2\n"

    def test_parse_rows(self):
        """Test parsing trims values and skips blank lines."""
        rows = parse_csv("name, code\n Granite ,GRN\n\nMarble\n")

        assert rows == [
            {"name": "Granite", "code": "GRN"},
            {"name": "Marble", "code": ""},
        ]

    def test_parse_header_only(self):
        """Test a header without rows parses to nothing."""
        assert parse_csv("name,code\n") == []
        assert parse_csv("") == []

    def test_parse_quoted_values(self):
        """Test quoted commas stay inside the value."""
        rows = parse_csv('name,notes\nA,"one, two"\n')
        assert rows == [{"name": "A", "notes": "one, two"}]

    def test_csv_header(self):
        """Test the template header line."""
        assert csv_header(["name", "code"]) == "name,code\n"
