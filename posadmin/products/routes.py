from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from posadmin.auth.deps import get_db, get_identity, require_admin
from posadmin.auth.identity import Identity
from posadmin.products.query import ProductQuery
from posadmin.products import service
from posadmin.schemas.catalog import ProductIn, ProductOut, ProductPage, Pagination

router = APIRouter(prefix="/api/products", tags=["products"])

@router.get("", response_model=ProductPage)
def list_products(
    page: str | None = None,
    limit: str | None = None,
    search: str | None = None,
    category_id: str | None = Query(None, alias="categoryId"),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    spec = ProductQuery.from_params(page, limit, search, category_id, sort_by, sort_order)
    products, total = service.list_products(db, spec)
    return ProductPage(
        products=[ProductOut.model_validate(p) for p in products],
        pagination=Pagination(
            page=spec.page,
            limit=spec.limit,
            total_items=total,
            total_pages=spec.total_pages(total),
        ),
    )

@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db), identity: Identity = Depends(get_identity)):
    return service.get_product(db, product_id)

@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(body: ProductIn, db: Session = Depends(get_db), identity: Identity = Depends(require_admin)):
    return service.create_product(db, body)

@router.put("/{product_id}", response_model=ProductOut)
def update_product(product_id: int, body: ProductIn, db: Session = Depends(get_db), identity: Identity = Depends(require_admin)):
    return service.update_product(db, product_id, body)

@router.delete("/{product_id}")
def delete_product(product_id: int, db: Session = Depends(get_db), identity: Identity = Depends(require_admin)):
    service.delete_product(db, product_id)
    return {"message": "Product deleted"}
