"""Catalog record models and their partial-update counterparts.

Form values arrive as text; these models coerce them into the stored
types. Empty text is treated as "no value".
"""

from typing import Annotated, Any, ClassVar

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


def _integral_to_int(value: float) -> int | float:
    return int(value) if value.is_integer() else value


# Parsed as one float type so errors name the field once; whole values stay ints
Number = Annotated[float, AfterValidator(_integral_to_int)]
Item = dict[str, Any]


class _CatalogModel(BaseModel):
    """Shared configuration and coercion rules for catalog models."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        allow_inf_nan=False,
        extra="ignore",
    )

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def _non_negative(value: int | float | None) -> int | float | None:
    if value is not None and value < 0:
        raise ValueError("Must not be negative")
    return value


class CatalogRecord(_CatalogModel):
    """Fields common to every stored record."""

    # Keys kept in the stored item even when their value is None.
    NULLABLE_FIELDS: ClassVar[frozenset[str]] = frozenset()

    id: str = Field(..., min_length=1, description="Record identifier and primary key")
    image: dict[str, str] | None = Field(None, description="Variant name to public URL")
    created_at: int | None = Field(None, alias="createdAt", description="Epoch milliseconds")
    updated_at: int | None = Field(None, alias="updatedAt", description="Epoch milliseconds")

    def to_item(self) -> Item:
        """Return the record as it is stored in the table store and cache."""
        data = self.model_dump(by_alias=True)
        return {
            key: value
            for key, value in data.items()
            if value is not None or key in self.NULLABLE_FIELDS
        }


class Product(CatalogRecord):
    NULLABLE_FIELDS: ClassVar[frozenset[str]] = frozenset({"old_price"})

    category: str | None = None
    desc: str | None = None
    name: str = Field(..., min_length=1)
    new_price: Number = Field(..., validation_alias=AliasChoices("new_price", "newPrice"))
    old_price: Number | None = Field(
        None, validation_alias=AliasChoices("old_price", "oldPrice")
    )
    quantity: int = Field(..., ge=0)
    season: str | None = None
    type: str | None = None

    @field_validator("new_price", "old_price")
    @classmethod
    def check_prices(cls, value: int | float | None) -> int | float | None:
        return _non_negative(value)


class Banner(CatalogRecord):
    category: str | None = None
    title: str | None = None
    name: str | None = None
    is_active: bool = Field(True, alias="isActive")


class Category(CatalogRecord):
    name: str = Field(..., min_length=1)
    description: str | None = None
    priority: Number | None = None
    is_active: bool = Field(True, alias="isActive")


class ProductChanges(_CatalogModel):
    """Fields a product update may overwrite."""

    category: str | None = None
    desc: str | None = None
    name: str | None = None
    new_price: Number | None = Field(
        None, validation_alias=AliasChoices("new_price", "newPrice")
    )
    old_price: Number | None = Field(
        None, validation_alias=AliasChoices("old_price", "oldPrice")
    )
    quantity: int | None = Field(None, ge=0)
    season: str | None = None
    type: str | None = None

    @field_validator("new_price", "old_price")
    @classmethod
    def check_prices(cls, value: int | float | None) -> int | float | None:
        return _non_negative(value)


class BannerChanges(_CatalogModel):
    """Fields a banner update may overwrite."""

    category: str | None = None
    title: str | None = None
    name: str | None = None
    is_active: bool | None = Field(None, alias="isActive")


class CategoryChanges(_CatalogModel):
    """Fields a category update may overwrite."""

    name: str | None = None
    description: str | None = None
    priority: Number | None = None
    is_active: bool | None = Field(None, alias="isActive")
