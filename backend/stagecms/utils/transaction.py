from contextlib import contextmanager
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from stagecms.extensions import db
from stagecms.domain.exceptions import TransactionError

@contextmanager
def transactional():
    """
    Context manager for database transactions.

    Store failures surface as TransactionError; nothing partial is committed.
    """
    try:
        yield
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error("Transaction rolled back: %s", exc)
        raise TransactionError(
            "Staging transaction failed and was rolled back",
            meta={"cause": exc.__class__.__name__},
        ) from exc
    except Exception:
        db.session.rollback()
        raise
