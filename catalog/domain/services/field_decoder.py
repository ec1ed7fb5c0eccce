"""
FieldDecoder - turns string-encoded multipart fields into typed values.

Multipart bodies carry every field as text: numbers, the JSON-encoded
``dimensions`` object and the JSON ``showOnHome`` array are decoded here, in
one place, and every malformed field is reported together.
"""

import json
import logging
from decimal import Decimal
from typing import Any, Dict, Mapping

from rest_framework import serializers

from catalog.domain.models import Product

from .base import UploadValidationError

logger = logging.getLogger(__name__)


def _compact_number(value: float):
    """50.0 -> 50, so whole numbers survive a round trip unchanged."""
    return int(value) if float(value).is_integer() else value


class JSONStringField(serializers.Field):
    """Field accepting either a JSON-encoded string (FormData) or an already decoded value."""

    default_error_messages = {
        "invalid_json": "Value must be valid JSON.",
    }

    def to_internal_value(self, data):
        if isinstance(data, str):
            if not data.strip():
                return None
            try:
                return json.loads(data)
            except (json.JSONDecodeError, ValueError):
                self.fail("invalid_json")
        return data

    def to_representation(self, value):
        return value


class DimensionsSerializer(serializers.Serializer):
    """Physical size of a product."""

    UNIT_CHOICES = ["cm", "in", "inch"]

    width = serializers.FloatField()
    height = serializers.FloatField()
    unit = serializers.ChoiceField(choices=UNIT_CHOICES)

    def validate_width(self, value):
        if value <= 0:
            raise serializers.ValidationError("Ensure this value is greater than 0.")
        return _compact_number(value)

    def validate_height(self, value):
        if value <= 0:
            raise serializers.ValidationError("Ensure this value is greater than 0.")
        return _compact_number(value)


class DimensionsField(JSONStringField):
    """``{"width": n, "height": n, "unit": "cm"}`` sent as a JSON string."""

    default_error_messages = {
        "invalid_json": 'Dimensions must be a JSON object like {{"width": 50, "height": 70, "unit": "cm"}}.',
        "not_object": "Dimensions must be a JSON object.",
    }

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if value is None:
            return None
        if not isinstance(value, dict):
            self.fail("not_object")

        nested = DimensionsSerializer(data=value)
        if not nested.is_valid():
            raise serializers.ValidationError(nested.errors)
        return dict(nested.validated_data)


class BooleanListField(JSONStringField):
    """JSON array of booleans, e.g. ``[true, false, true]``."""

    default_error_messages = {
        "invalid_json": "Must be a JSON array of booleans.",
        "not_boolean_list": "Must be a JSON array of booleans.",
    }

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(item, bool) for item in value):
            self.fail("not_boolean_list")
        return value


class ProductUploadFieldsSerializer(serializers.Serializer):
    """Text fields of the product upload form, in their wire (camelCase) names."""

    name = serializers.CharField(max_length=255)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
    category = serializers.ChoiceField(choices=Product.CATEGORY_CHOICES)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    status = serializers.ChoiceField(choices=Product.STATUS_CHOICES, required=False, default="draft")
    stockQuantity = serializers.IntegerField(source="stock_quantity", min_value=0, required=False, default=0)
    materials = serializers.CharField(required=False, allow_blank=True, default="")
    dimensions = DimensionsField(required=False, allow_null=True, default=None)
    showOnHome = BooleanListField(source="show_on_home", required=False, default=list)


class FieldDecoder:
    """Decodes the raw form fields of a product upload."""

    serializer_class = ProductUploadFieldsSerializer

    def decode(self, raw_fields: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Decode and validate raw form fields.

        Args:
            raw_fields: Request form data (QueryDict or plain dict of strings)

        Returns:
            Typed product attributes keyed by model field name, plus
            "show_on_home" (list of booleans)

        Raises:
            UploadValidationError: With one entry per malformed field
        """
        serializer = self.serializer_class(data=raw_fields)
        if not serializer.is_valid():
            errors = {field: self._flatten(messages) for field, messages in serializer.errors.items()}
            logger.info(f"Product fields rejected: {sorted(errors)}")
            raise UploadValidationError(errors)

        return dict(serializer.validated_data)

    @staticmethod
    def _flatten(messages) -> list:
        if isinstance(messages, dict):
            return [f"{key}: {msg}" for key, value in messages.items() for msg in FieldDecoder._flatten(value)]
        if isinstance(messages, (list, tuple)):
            flat = []
            for message in messages:
                flat.extend(FieldDecoder._flatten(message))
            return flat
        return [str(messages)]
