from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class CategoryIn(CamelModel):
    name: str = Field(max_length=120)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Category name is required")
        return v

class CategoryRef(CamelModel):
    id: int
    name: str

class CategoryOut(CategoryRef):
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductIn(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    price: float = Field(gt=0)
    stock: int = Field(ge=0)
    category_id: int
    image: str | None = None

class ProductOut(CamelModel):
    id: int
    name: str
    description: str | None = None
    price: float
    stock: int
    category_id: int
    image: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    category: CategoryRef | None = None

class Pagination(CamelModel):
    page: int
    limit: int
    total_items: int
    total_pages: int

class ProductPage(CamelModel):
    products: list[ProductOut]
    pagination: Pagination
