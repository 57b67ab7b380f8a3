from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from posadmin.auth.deps import get_db, get_identity
from posadmin.auth.identity import Identity
from posadmin.transactions import service
from posadmin.schemas.transaction import TransactionIn, TransactionOut

router = APIRouter(prefix="/api/transactions", tags=["transactions"])

@router.get("", response_model=list[TransactionOut])
def list_transactions(db: Session = Depends(get_db), identity: Identity = Depends(get_identity)):
    return service.list_transactions(db)

@router.get("/{transaction_id}", response_model=TransactionOut)
def get_transaction(transaction_id: int, db: Session = Depends(get_db), identity: Identity = Depends(get_identity)):
    return service.get_transaction(db, transaction_id)

@router.post("", response_model=TransactionOut, status_code=status.HTTP_201_CREATED)
def create_transaction(body: TransactionIn, db: Session = Depends(get_db), identity: Identity = Depends(get_identity)):
    return service.create_transaction(db, body, cashier_id=identity.id)
