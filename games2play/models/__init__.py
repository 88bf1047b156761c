from games2play.core.database import Base

from .score import HighScore, Player
