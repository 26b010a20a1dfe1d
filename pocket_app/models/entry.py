from sqlalchemy import Column, Integer, Text
from pocket_app.database.connection import Base


class Entry(Base):
    """
    A saved tag -> URL mapping.

    Rows are append-only: nothing in the server updates or deletes them.
    The UNIQUE constraint on ``tag`` is what settles concurrent saves of
    the same tag, not application code.
    """
    __tablename__ = "entries"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    tag = Column(Text, unique=True)
    url = Column(Text)
