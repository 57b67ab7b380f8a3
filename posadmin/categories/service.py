import logging
from sqlalchemy import func
from sqlalchemy.orm import Session
from posadmin.errors import BadRequest, NotFound
from posadmin.models.catalog import Category, Product

logger = logging.getLogger(__name__)

def list_categories(db: Session) -> list[Category]:
    return db.query(Category).order_by(Category.name.asc()).all()

def get_category(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)
    if category is None:
        raise NotFound("Category not found")
    return category

def _ensure_unique_name(db: Session, name: str, exclude_id: int | None = None):
    q = db.query(Category).filter(func.lower(Category.name) == name.lower())
    if exclude_id is not None:
        q = q.filter(Category.id != exclude_id)
    if q.first() is not None:
        raise BadRequest("A category with this name already exists")

def create_category(db: Session, name: str) -> Category:
    _ensure_unique_name(db, name)
    category = Category(name=name)
    db.add(category); db.commit(); db.refresh(category)
    logger.info("Created category %s (%s)", category.id, category.name)
    return category

def update_category(db: Session, category_id: int, name: str) -> Category:
    category = get_category(db, category_id)
    _ensure_unique_name(db, name, exclude_id=category_id)
    category.name = name
    db.commit(); db.refresh(category)
    logger.info("Renamed category %s to %s", category.id, category.name)
    return category

def delete_category(db: Session, category_id: int) -> None:
    category = get_category(db, category_id)
    in_use = db.query(Product).filter(Product.category_id == category_id).count()
    if in_use:
        raise BadRequest(
            "Category cannot be deleted because it still has products",
            productCount=in_use,
        )
    db.delete(category)
    db.commit()
    logger.info("Deleted category %s", category_id)
