"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``AddressDTO``: the four postal fields, used on input and output.
- ``CustomerInputDTO``: a *candidate* customer.  Pydantic only checks
  JSON types here; business constraints (non-blank names, date of birth
  not in the future) are checked by ``modules.customers.validation`` so
  the service can classify the failure.  Values longer than their
  database column are rejected here, as a malformed request.
- ``CustomerOutputDTO``: the snapshot returned to callers and stored in
  the customer cache.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from modules.customers.models import Address, Customer

# column widths of modules.customers.models
NAME_MAX_LENGTH = 100
STREET_MAX_LENGTH = 255
TOWN_MAX_LENGTH = 100
COUNTY_MAX_LENGTH = 100
POSTCODE_MAX_LENGTH = 20


# ---------------------------------------------------------------------------
# Address
# ---------------------------------------------------------------------------


class AddressDTO(BaseModel):
    """Postal address value object."""

    model_config = ConfigDict(frozen=True)

    street: str = Field(default="", max_length=STREET_MAX_LENGTH)
    town: str = Field(default="", max_length=TOWN_MAX_LENGTH)
    county: str = Field(default="", max_length=COUNTY_MAX_LENGTH)
    postcode: str = Field(default="", max_length=POSTCODE_MAX_LENGTH)

    @field_validator("street", "town", "county", "postcode", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @classmethod
    def from_entity(cls, address: Address) -> AddressDTO:
        return cls(
            street=address.street,
            town=address.town,
            county=address.county,
            postcode=address.postcode,
        )


# ---------------------------------------------------------------------------
# Input DTO
# ---------------------------------------------------------------------------


class CustomerInputDTO(BaseModel):
    """Immutable candidate for customer creation and update requests.

    Every field is optional at this level so that a missing name reaches
    the validation layer (and is reported as malformed) instead of
    failing type coercion.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    first_name: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH)
    last_name: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH)
    date_of_birth: Optional[date] = None
    address: Optional[AddressDTO] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if isinstance(v, str) else v

    def merged_over(self, current: CustomerOutputDTO) -> CustomerInputDTO:
        """Overlay the fields explicitly supplied in this DTO on *current*.

        Used for partial updates (PATCH): fields absent from the request
        keep their stored value, fields sent as ``null`` are cleared.  An
        address object is merged key by key over the stored address.
        """
        values: Dict[str, Any] = {
            "first_name": current.first_name,
            "last_name": current.last_name,
            "date_of_birth": current.date_of_birth,
            "address": current.address,
        }
        for name in self.model_fields_set:
            values[name] = getattr(self, name)
        if self.address is not None and current.address is not None:
            values["address"] = current.address.model_copy(
                update={
                    key: getattr(self.address, key)
                    for key in self.address.model_fields_set
                }
            )
        return CustomerInputDTO(**values)

    def to_fields(self) -> Dict[str, Any]:
        """Column values for the repository (address handled separately)."""
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "date_of_birth": self.date_of_birth,
            "address": self.address.model_dump() if self.address else None,
        }


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class CustomerOutputDTO(BaseModel):
    """Immutable customer snapshot for API responses and the cache."""

    model_config = ConfigDict(frozen=True)

    id: int
    first_name: str
    last_name: str
    date_of_birth: Optional[date] = None
    address: Optional[AddressDTO] = None

    @classmethod
    def from_entity(cls, customer: Customer) -> CustomerOutputDTO:
        """Build an output DTO from a Customer model instance."""
        address = customer.current_address
        return cls(
            id=customer.pk,
            first_name=customer.first_name,
            last_name=customer.last_name,
            date_of_birth=customer.date_of_birth,
            address=AddressDTO.from_entity(address) if address is not None else None,
        )
