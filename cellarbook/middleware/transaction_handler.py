from sqlalchemy.orm import Session
from functools import wraps
import logging

logger = logging.getLogger(__name__)


def transactional(func):
    """
    Décorateur pour gérer automatiquement les transactions
    Usage: @transactional sur les méthodes de service (self.db requis)
    """

    @wraps(func)
    def wrapper(self, *args, **kwargs):
        db: Session = self.db
        try:
            result = func(self, *args, **kwargs)
            db.commit()
            logger.debug(f"Transaction committed in {func.__name__}")
            return result
        except Exception as e:
            db.rollback()
            logger.warning(f"Transaction rolled back in {func.__name__}: {e}")
            raise

    return wrapper
