"""
Pydantic models for dog records.

``DogCreate`` is the accepted shape of a new record: ``name``, ``age``
and ``gender`` are required, everything else is optional and unknown
fields are dropped.  ``DogUpdate`` applies the same type rules to the
fields a client chooses to send but, unlike ``DogCreate``, does not
require the full set of required fields; it only refuses to clear them.
``DogRead`` is the response shape, with the store identifier exposed
as ``id``.

Field names on the wire are camelCase (``imageUrl``) as the listing
front-end expects; attributes use snake_case.
"""

from typing import Annotated, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


# JSON numbers: integers stay integers, numeric strings are coerced.  BSON
# stores at most 8-byte integers, larger ones are kept as doubles.
Int64 = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]
Number = Union[Int64, float]

# Fields a stored record must always hold.
REQUIRED_FIELDS = ("name", "age", "gender")


class Owner(BaseModel):
    """Current owner of a dog listed for adoption."""

    model_config = ConfigDict(coerce_numbers_to_str=True, allow_inf_nan=False)

    name: Optional[str] = None
    bio: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")


class DogCreate(BaseModel):
    """Schema for creating a dog record."""

    model_config = ConfigDict(coerce_numbers_to_str=True, allow_inf_nan=False)

    name: str = Field(..., min_length=1, examples=["Rex"])
    age: Number = Field(..., examples=[3])
    gender: str = Field(..., min_length=1, examples=["male"])
    color: Optional[str] = Field(None, examples=["brown"])
    weight: Optional[Number] = Field(None, examples=[20])
    location: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    description: Optional[str] = None
    owner: Optional[Owner] = None


class DogUpdate(BaseModel):
    """Schema for updating a dog record.

    All fields are optional; only provided values are written.  A
    required field that is sent must still be valid, so ``name``,
    ``age`` and ``gender`` cannot be set to ``null`` or emptied.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True, allow_inf_nan=False)

    name: Optional[str] = Field(None, min_length=1)
    age: Optional[Number] = None
    gender: Optional[str] = Field(None, min_length=1)
    color: Optional[str] = None
    weight: Optional[Number] = None
    location: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    description: Optional[str] = None
    owner: Optional[Owner] = None

    @model_validator(mode="after")
    def required_fields_not_cleared(self) -> "DogUpdate":
        for field in REQUIRED_FIELDS:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} is required and cannot be null")
        return self


class DogRead(BaseModel):
    """Schema for a dog record returned by the API.

    Only ``id`` is mandatory so that any stored document can be
    rendered; responses are serialized with ``exclude_unset`` and
    therefore list exactly the fields the record holds.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: Optional[str] = None
    age: Optional[Number] = None
    gender: Optional[str] = None
    color: Optional[str] = None
    weight: Optional[Number] = None
    location: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    description: Optional[str] = None
    owner: Optional[Owner] = None


def format_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic ``ValidationError`` into one readable line.

    Example: ``Dog validation failed: name: Field required, age: Input
    should be a valid number``.
    """
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "Dog validation failed: " + ", ".join(parts)
