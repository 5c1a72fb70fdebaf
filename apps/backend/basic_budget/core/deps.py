from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from .database import get_db
from ..services.context import Services, build_services, sql_context


def get_services(db: Session = Depends(get_db)) -> Services:
    """Request-scoped service bundle over the SQL repositories.

    Tests may override this dependency to inject a fixed clock or an in-memory
    context.
    """
    return build_services(sql_context(db))
