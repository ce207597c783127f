# checkout/repos/base.py
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from checkout.domain.errors import ConflictError, StorageError
from checkout.utils.logging import get_logger

logger = get_logger(__name__)


class BaseRepo:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self):
        """
        Jednostka pracy: commit na koncu bloku, rollback przy dowolnym bledzie.
        Bledy bazy nie wychodza poza repo jako SQLAlchemyError.
        """
        try:
            yield self.db
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Integrity violation, transaction rolled back: {e.orig}")
            raise ConflictError("Conflicting concurrent modification, please retry") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Storage failure, transaction rolled back: {e}")
            raise StorageError() from e
        except Exception:
            self.db.rollback()
            raise
