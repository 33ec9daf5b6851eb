# meeting_scheduler/db/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models in the Meeting Scheduler service.

    Models register themselves on import; `meeting_scheduler.db.session`
    imports them all before any create_all/drop_all.
    """
    pass
