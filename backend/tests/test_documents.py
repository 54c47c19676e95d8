"""
ProFast Backend - Document Helper Tests
========================================

What we test:
    ✅ Valid hex strings become ObjectId
    ✅ Malformed, missing and non-string ids raise ValidationError (→ 400)
    ✅ ObjectId values are stringified at any depth; other values untouched
"""

from datetime import datetime, timezone

import pytest
from bson import ObjectId

from profast.exceptions import ValidationError
from profast.schemas.documents import parse_object_id, serialize_document


class TestParseObjectId:

    def test_valid_hex_string(self):
        oid = ObjectId()
        assert parse_object_id(str(oid)) == oid

    def test_malformed_string_rejected(self):
        with pytest.raises(ValidationError, match="not a valid object identifier"):
            parse_object_id("not-an-id")

    def test_wrong_length_rejected(self):
        with pytest.raises(ValidationError):
            parse_object_id("abc123")

    def test_missing_value_rejected(self):
        with pytest.raises(ValidationError, match="'parcelId' is required"):
            parse_object_id(None, field="parcelId")

    def test_field_recorded_in_context(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_object_id("zzz", field="parcelId")
        assert exc_info.value.field == "parcelId"
        assert exc_info.value.context["field"] == "parcelId"


class TestSerializeDocument:

    def test_nested_object_ids_become_strings(self):
        parcel_id = ObjectId()
        doc = {
            "_id": parcel_id,
            "history": [{"parcelId": parcel_id, "status": "in_transit"}],
            "meta": {"ref": parcel_id},
        }
        result = serialize_document(doc)

        assert result["_id"] == str(parcel_id)
        assert result["history"][0]["parcelId"] == str(parcel_id)
        assert result["meta"]["ref"] == str(parcel_id)

    def test_other_values_untouched(self):
        paid_at = datetime(2025, 6, 1, tzinfo=timezone.utc)
        doc = {"amount": 150, "paid_at": paid_at, "note": None, "paid": True}
        assert serialize_document(doc) == doc

    def test_list_of_documents(self):
        ids = [ObjectId(), ObjectId()]
        result = serialize_document([{"_id": i} for i in ids])
        assert [d["_id"] for d in result] == [str(i) for i in ids]
