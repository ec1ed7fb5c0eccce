from decimal import Decimal

import pytest
from django.http import QueryDict

from catalog.domain.services import FieldDecoder, UploadValidationError


def valid_fields(**overrides):
    fields = {
        "name": "Test Rug",
        "category": "rug",
        "price": "100",
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def decoder():
    return FieldDecoder()


@pytest.mark.unit
class TestFieldDecoder:
    def test_minimal_fields_get_defaults(self, decoder):
        data = decoder.decode(valid_fields())

        assert data["name"] == "Test Rug"
        assert data["category"] == "rug"
        assert data["price"] == Decimal("100")
        assert data["status"] == "draft"
        assert data["stock_quantity"] == 0
        assert data["description"] == ""
        assert data["materials"] == ""
        assert data["dimensions"] is None
        assert data["show_on_home"] == []

    def test_decodes_all_fields(self, decoder):
        data = decoder.decode(
            valid_fields(
                description="Hand knotted",
                status="available",
                stockQuantity="3",
                materials="wool, linen",
                dimensions='{"width": 50, "height": 70, "unit": "cm"}',
                showOnHome="[true, false]",
            )
        )

        assert data["status"] == "available"
        assert data["stock_quantity"] == 3
        assert data["materials"] == "wool, linen"
        assert data["dimensions"] == {"width": 50, "height": 70, "unit": "cm"}
        assert data["show_on_home"] == [True, False]

    def test_whole_dimensions_stay_integers(self, decoder):
        data = decoder.decode(valid_fields(dimensions='{"width": 50.0, "height": 70.5, "unit": "in"}'))

        assert data["dimensions"] == {"width": 50, "height": 70.5, "unit": "in"}
        assert isinstance(data["dimensions"]["width"], int)

    def test_accepts_query_dict(self, decoder):
        raw = QueryDict(mutable=True)
        raw.update(valid_fields(dimensions='{"width": 120, "height": 180, "unit": "cm"}'))

        data = decoder.decode(raw)

        assert data["dimensions"]["width"] == 120

    def test_blank_dimensions_means_none(self, decoder):
        data = decoder.decode(valid_fields(dimensions=""))

        assert data["dimensions"] is None

    def test_malformed_dimensions_json(self, decoder):
        with pytest.raises(UploadValidationError) as exc_info:
            decoder.decode(valid_fields(dimensions="not-json"))

        assert list(exc_info.value.errors) == ["dimensions"]
        assert "JSON object" in exc_info.value.errors["dimensions"][0]

    def test_dimensions_must_be_object(self, decoder):
        with pytest.raises(UploadValidationError) as exc_info:
            decoder.decode(valid_fields(dimensions="[50, 70]"))

        assert exc_info.value.errors["dimensions"] == ["Dimensions must be a JSON object."]

    def test_dimensions_fields_are_checked(self, decoder):
        with pytest.raises(UploadValidationError) as exc_info:
            decoder.decode(valid_fields(dimensions='{"width": -1, "height": 70, "unit": "ft"}'))

        messages = exc_info.value.errors["dimensions"]
        assert any(message.startswith("width: ") for message in messages)
        assert any(message.startswith("unit: ") for message in messages)

    def test_show_on_home_must_be_boolean_list(self, decoder):
        with pytest.raises(UploadValidationError) as exc_info:
            decoder.decode(valid_fields(showOnHome='["yes", 1]'))

        assert exc_info.value.errors["showOnHome"] == ["Must be a JSON array of booleans."]

    def test_show_on_home_invalid_json(self, decoder):
        with pytest.raises(UploadValidationError) as exc_info:
            decoder.decode(valid_fields(showOnHome="[true,"))

        assert "showOnHome" in exc_info.value.errors

    @pytest.mark.parametrize("price", ["0", "-5", "abc"])
    def test_rejects_bad_price(self, decoder, price):
        with pytest.raises(UploadValidationError) as exc_info:
            decoder.decode(valid_fields(price=price))

        assert "price" in exc_info.value.errors

    def test_rejects_unknown_category(self, decoder):
        with pytest.raises(UploadValidationError) as exc_info:
            decoder.decode(valid_fields(category="tapestry"))

        assert "category" in exc_info.value.errors

    def test_rejects_negative_stock(self, decoder):
        with pytest.raises(UploadValidationError) as exc_info:
            decoder.decode(valid_fields(stockQuantity="-1"))

        assert "stockQuantity" in exc_info.value.errors

    def test_reports_every_bad_field(self, decoder):
        with pytest.raises(UploadValidationError) as exc_info:
            decoder.decode({"price": "free", "dimensions": "not-json"})

        assert set(exc_info.value.errors) == {"name", "category", "price", "dimensions"}

    def test_description_length_limit(self, decoder):
        with pytest.raises(UploadValidationError) as exc_info:
            decoder.decode(valid_fields(description="x" * 501))

        assert "description" in exc_info.value.errors
