from typing import List, Optional

from pydantic import BaseModel

from ..queue.schemas import QueueEntryOut


class PlaybackResponse(BaseModel):
    played: Optional[QueueEntryOut] = None
    queue: List[QueueEntryOut]
    version: int


class NowPlayingResponse(BaseModel):
    now_playing: Optional[QueueEntryOut] = None
