"""Models package."""

from .youtube_video import VideoRecord
from .local_song import LocalSongRecord
