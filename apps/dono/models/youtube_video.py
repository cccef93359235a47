"""YouTube video reference model."""

from sqlalchemy import Column, Integer, Text

from database import Base


class VideoRecord(Base):
    """A YouTube video reference; the same ``vid`` may appear on many rows."""

    __tablename__ = "youtube_videos"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True, unique=True, nullable=False)
    vid = Column(Text, nullable=False)
    # ts and duration are stored as given; their unit is owned by the writer
    ts = Column(Integer, nullable=False)
    duration = Column(Integer, nullable=False)
    title = Column(Text, nullable=False)
