"""Hunt domain services: answers, challenges and question selection.

Routes call into this package and translate the errors it raises into HTTP
responses. Every write is committed on its own; a failure part-way through a
handler leaves the earlier writes in place.
"""

from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from hunt_api import db
from hunt_api.errors import DatabaseError


@contextmanager
def storage_errors(tag: str, message: str = 'Database error', expose_details: bool = True):
    """Turn SQLAlchemy failures into DatabaseError.

    The driver message is always logged; it is attached to the error only when
    `expose_details` is set.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception(f"{tag} storage failure: {exc}")
        raise DatabaseError(message, details=str(exc) if expose_details else None) from exc
