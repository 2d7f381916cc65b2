"""Customer DRF serializers for API output and schema generation.

Request bodies are parsed into Pydantic DTOs (``dtos.py``) and checked by
the validation layer; these serializers render model instances and
describe the resource shape for the OpenAPI schema.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.models import Address, Customer


class AddressSerializer(serializers.ModelSerializer):
    class Meta:
        model = Address
        fields = ["street", "town", "county", "postcode"]


class CustomerSerializer(serializers.ModelSerializer):
    """Read serializer for the Customer resource.

    Renders the same shape as ``CustomerOutputDTO`` so list and detail
    responses are interchangeable.
    """

    address = AddressSerializer(
        source="current_address", allow_null=True, required=False
    )

    class Meta:
        model = Customer
        fields = ["id", "first_name", "last_name", "date_of_birth", "address"]
        read_only_fields = ["id"]
