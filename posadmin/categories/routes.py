from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from posadmin.auth.deps import get_db, get_identity, require_admin
from posadmin.auth.identity import Identity
from posadmin.categories import service
from posadmin.schemas.catalog import CategoryIn, CategoryOut

router = APIRouter(prefix="/api/categories", tags=["categories"])

@router.get("", response_model=list[CategoryOut])
def list_categories(db: Session = Depends(get_db), identity: Identity = Depends(get_identity)):
    return service.list_categories(db)

@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, db: Session = Depends(get_db), identity: Identity = Depends(get_identity)):
    return service.get_category(db, category_id)

@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(body: CategoryIn, db: Session = Depends(get_db), identity: Identity = Depends(require_admin)):
    return service.create_category(db, body.name)

@router.put("/{category_id}", response_model=CategoryOut)
def update_category(category_id: int, body: CategoryIn, db: Session = Depends(get_db), identity: Identity = Depends(require_admin)):
    return service.update_category(db, category_id, body.name)

@router.delete("/{category_id}")
def delete_category(category_id: int, db: Session = Depends(get_db), identity: Identity = Depends(require_admin)):
    service.delete_category(db, category_id)
    return {"message": "Category deleted"}
