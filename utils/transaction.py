import logging
from contextlib import contextmanager
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from models import db
from utils.errors import APIError, Conflict, InternalError

logger = logging.getLogger(__name__)


@contextmanager
def transaction(action: str, conflict_message: Optional[str] = None):
    """
    Run the enclosed block as one unit of work and commit it.

    Anything raised inside rolls the session back. Store failures are
    re-raised as InternalError (or Conflict when ``conflict_message`` is
    given and a constraint was violated); core errors pass through as is.
    """
    try:
        yield db.session
        db.session.commit()
    except APIError:
        db.session.rollback()
        raise
    except IntegrityError as e:
        db.session.rollback()
        if conflict_message:
            logger.info(f"Conflict during {action}: {str(e.orig)}")
            raise Conflict(conflict_message) from e
        logger.error(f"Integrity error during {action}: {str(e)}")
        raise InternalError(f"Failed to {action}") from e
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Store error during {action}: {str(e)}")
        raise InternalError(f"Failed to {action}") from e
    except Exception:
        db.session.rollback()
        raise
