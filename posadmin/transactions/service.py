import logging
from collections import Counter
from sqlalchemy.orm import Session, selectinload
from posadmin.errors import BadRequest, NotFound
from posadmin.models.catalog import Product
from posadmin.models.transaction import Transaction, TransactionItem
from posadmin.schemas.transaction import TransactionIn

logger = logging.getLogger(__name__)

def list_transactions(db: Session) -> list[Transaction]:
    return (db.query(Transaction)
              .options(selectinload(Transaction.items).selectinload(TransactionItem.product))
              .order_by(Transaction.date.desc(), Transaction.id.desc())
              .all())

def get_transaction(db: Session, transaction_id: int) -> Transaction:
    tx = (db.query(Transaction)
            .options(selectinload(Transaction.items).selectinload(TransactionItem.product))
            .filter(Transaction.id == transaction_id)
            .first())
    if tx is None:
        raise NotFound("Transaction not found")
    return tx

def create_transaction(db: Session, body: TransactionIn, cashier_id: int | None = None) -> Transaction:
    """Record a sale: snapshot unit prices, compute the total, decrement stock.

    Nothing is written unless every line passes the product and stock checks.
    """
    wanted = Counter()
    for item in body.items:
        wanted[item.product_id] += item.quantity

    products = {p.id: p for p in db.query(Product).filter(Product.id.in_(wanted.keys())).all()}

    missing = sorted(pid for pid in wanted if pid not in products)
    if missing:
        raise BadRequest("Product not found", details={"productIds": missing})

    short = [
        {"productId": pid, "requested": qty, "available": products[pid].stock}
        for pid, qty in wanted.items()
        if products[pid].stock < qty
    ]
    if short:
        raise BadRequest("Insufficient stock", details=short)

    tx = Transaction(cashier_id=cashier_id, total=0)
    total = 0.0
    for item in body.items:
        product = products[item.product_id]
        tx.items.append(TransactionItem(
            product_id=product.id,
            quantity=item.quantity,
            price=product.price,
        ))
        total += product.price * item.quantity
    tx.total = round(total, 2)

    for pid, qty in wanted.items():
        products[pid].stock -= qty

    db.add(tx)
    db.commit()
    logger.info("Recorded transaction %s: %d item(s), total %.2f", tx.id, len(tx.items), tx.total)
    return get_transaction(db, tx.id)
