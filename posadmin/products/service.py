import logging
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from posadmin.errors import BadRequest, NotFound
from posadmin.models.catalog import Category, Product
from posadmin.models.transaction import TransactionItem
from posadmin.products.query import ProductQuery, SortField, SortOrder
from posadmin.schemas.catalog import ProductIn
from posadmin.uploads.storage import remove_upload

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    SortField.NAME: Product.name,
    SortField.PRICE: Product.price,
    SortField.STOCK: Product.stock,
    SortField.CREATED_AT: Product.created_at,
}

def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"

def list_products(db: Session, spec: ProductQuery) -> tuple[list[Product], int]:
    q = db.query(Product)
    if spec.category_id is not None:
        q = q.filter(Product.category_id == spec.category_id)
    if spec.search:
        pattern = _like_pattern(spec.search)
        q = q.filter(or_(
            Product.name.ilike(pattern, escape="\\"),
            Product.description.ilike(pattern, escape="\\"),
        ))

    total = q.count()

    column = SORT_COLUMNS[spec.sort_by]
    ordering = column.asc() if spec.sort_order is SortOrder.ASC else column.desc()
    rows = (q.options(joinedload(Product.category))
             .order_by(ordering, Product.id.desc())
             .offset(spec.offset)
             .limit(spec.limit)
             .all())
    return rows, total

def get_product(db: Session, product_id: int) -> Product:
    product = (db.query(Product)
                 .options(joinedload(Product.category))
                 .filter(Product.id == product_id)
                 .first())
    if product is None:
        raise NotFound("Product not found")
    return product

def _require_category(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)
    if category is None:
        raise BadRequest("Category not found", details={"categoryId": "No category with this id"})
    return category

def create_product(db: Session, body: ProductIn) -> Product:
    _require_category(db, body.category_id)
    product = Product(
        name=body.name.strip(),
        description=body.description or "",
        price=body.price,
        stock=body.stock,
        category_id=body.category_id,
        image=body.image or None,
    )
    db.add(product); db.commit(); db.refresh(product)
    logger.info("Created product %s (%s)", product.id, product.name)
    return product

def update_product(db: Session, product_id: int, body: ProductIn) -> Product:
    product = get_product(db, product_id)
    _require_category(db, body.category_id)

    product.name = body.name.strip()
    product.description = body.description or ""
    product.price = body.price
    product.stock = body.stock
    product.category_id = body.category_id
    old_image = product.image
    # omitted image keeps the stored one; explicit null clears it
    if "image" in body.model_fields_set:
        product.image = body.image or None
    db.commit(); db.refresh(product)
    logger.info("Updated product %s", product.id)

    if old_image and old_image != product.image:
        remove_upload(old_image)
    return product

def delete_product(db: Session, product_id: int) -> None:
    product = get_product(db, product_id)

    used = (db.query(TransactionItem)
              .filter(TransactionItem.product_id == product_id)
              .count())
    if used:
        raise BadRequest(
            "Product cannot be deleted because it appears in transactions",
            transactionCount=used,
        )

    image = product.image
    db.delete(product)
    db.commit()
    logger.info("Deleted product %s", product_id)

    if image:
        remove_upload(image)
