"""
Shopify product models used while assembling a bundle
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductReference(BaseModel):
    """A product picked in the admin UI, as submitted with a save-bundle request"""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Numeric product id or product GID")
    title: str = Field("", description="Product title")
    image_src: str = Field("", alias="imageSrc", description="First image URL")
    price: Optional[str] = Field(None, description="First variant price")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("id")
    @classmethod
    def id_not_blank(cls, v):
        if not v.strip():
            raise ValueError("product id must not be empty")
        return v.strip()

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("title", "image_src", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v


class ProductOption(BaseModel):
    """One option axis of a product (e.g. Size) with its ordered values"""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    values: List[str] = Field(default_factory=list)


class ResolvedProduct(BaseModel):
    """Product data needed to build a bundle component"""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    options: List[ProductOption] = Field(default_factory=list)
    first_variant_id: Optional[str] = None

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "ResolvedProduct":
        """Build from a Product node of the nodes(ids:) query"""
        variant_edges = (node.get("variants") or {}).get("edges") or []
        first_variant_id = None
        if variant_edges:
            first_variant_id = (variant_edges[0].get("node") or {}).get("id")

        return cls(
            id=node["id"],
            title=node.get("title") or "",
            options=[
                ProductOption(
                    id=option["id"],
                    name=option.get("name") or "",
                    values=list(option.get("values") or []),
                )
                for option in node.get("options") or []
            ],
            first_variant_id=first_variant_id,
        )
