from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from songqueue.core import QueueEntry, Track


class SpotifyArtist(BaseModel):
    name: str


class SpotifyImage(BaseModel):
    url: str


class SpotifyAlbum(BaseModel):
    name: str = ""
    images: List[SpotifyImage] = Field(default_factory=list)


class SpotifyTrackIn(BaseModel):
    """
    A track as returned by /search (raw Spotify track object).

    Unknown Spotify fields are ignored.
    """

    id: str = Field(..., min_length=1)
    name: str
    artists: List[SpotifyArtist] = Field(default_factory=list)
    album: SpotifyAlbum = Field(default_factory=SpotifyAlbum)
    duration_ms: int
    uri: str = Field(..., min_length=1)
    explicit: bool = False
    external_urls: Dict[str, str] = Field(default_factory=dict)

    def to_track(self) -> Track:
        return Track.from_spotify(self.model_dump())


class QueueEntryOut(BaseModel):
    id: str
    name: str
    artist_names: List[str]
    album_name: str
    duration_ms: int
    uri: str
    external_url: Optional[str] = None
    explicit: bool = False
    image_url: Optional[str] = None
    team_name: str

    @classmethod
    def from_entry(cls, entry: QueueEntry) -> "QueueEntryOut":
        return cls(**entry.to_dict())

    def to_entry(self) -> QueueEntry:
        return QueueEntry.from_dict(self.model_dump())


class QueueResponse(BaseModel):
    queue: List[QueueEntryOut]
    version: int


class AddTrackRequest(BaseModel):
    track: Optional[SpotifyTrackIn] = None


class ReplaceQueueRequest(BaseModel):
    queue: List[QueueEntryOut]
    version: Optional[int] = None
