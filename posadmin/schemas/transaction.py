from datetime import datetime
from pydantic import Field
from posadmin.schemas.catalog import CamelModel

class TransactionItemIn(CamelModel):
    product_id: int
    quantity: int = Field(ge=1)

class TransactionIn(CamelModel):
    items: list[TransactionItemIn] = Field(min_length=1)

class ProductBrief(CamelModel):
    id: int
    name: str
    price: float

class TransactionItemOut(CamelModel):
    id: int
    product_id: int
    quantity: int
    price: float
    product: ProductBrief | None = None

class TransactionOut(CamelModel):
    id: int
    date: datetime
    total: float
    cashier_id: int | None = None
    items: list[TransactionItemOut] = []
