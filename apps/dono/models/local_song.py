"""Local song model."""

from sqlalchemy import Column, Integer, Text

from database import Base


class LocalSongRecord(Base):
    """A song played from the local library."""

    __tablename__ = "local_songs"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True, unique=True, nullable=False)
    ts = Column(Integer, nullable=False)
    title = Column(Text, nullable=False)
    artist = Column(Text, nullable=False)
    album = Column(Text, nullable=False)
