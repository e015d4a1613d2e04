from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional


@dataclass(frozen=True)
class Track:
    id: str
    name: str
    artist_names: List[str]
    album_name: str
    duration_ms: int
    uri: str
    external_url: Optional[str] = None
    explicit: bool = False
    image_url: Optional[str] = None

    @classmethod
    def from_spotify(cls, item: Dict[str, Any]) -> "Track":
        """
        Build a Track from a raw Spotify track object (search result item).

        Raises KeyError / TypeError / ValueError when mandatory fields are
        missing; callers at the API boundary turn that into InvalidInput.
        """
        album = item.get("album") or {}
        images = album.get("images") or []
        return cls(
            id=item["id"],
            name=item["name"],
            artist_names=[a["name"] for a in item.get("artists") or [] if a.get("name")],
            album_name=album.get("name") or "",
            duration_ms=int(item["duration_ms"]),
            uri=item["uri"],
            external_url=(item.get("external_urls") or {}).get("spotify"),
            explicit=bool(item.get("explicit", False)),
            image_url=images[0].get("url") if images else None,
        )


@dataclass(frozen=True)
class QueueEntry:
    """
    A track plus the team that added it.

    `team_name` is stamped at enqueue time; search results never carry it.
    """

    track: Track
    team_name: str

    @property
    def id(self) -> str:
        return self.track.id

    @property
    def uri(self) -> str:
        return self.track.uri

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self.track)
        data["team_name"] = self.team_name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QueueEntry":
        fields = dict(data)
        team_name = fields.pop("team_name")
        return cls(track=Track(**fields), team_name=team_name)


class Capability(str, Enum):
    ADD_TRACK = "add_track"
    REMOVE_TRACK = "remove_track"
    CLEAR_QUEUE = "clear_queue"
    CONTROL_PLAYBACK = "control_playback"


class IdentityKind(str, Enum):
    TEAM = "team"
    ADMIN = "admin"


TEAM_CAPABILITIES: FrozenSet[Capability] = frozenset({Capability.ADD_TRACK})
ADMIN_CAPABILITIES: FrozenSet[Capability] = frozenset(Capability)


@dataclass(frozen=True)
class Identity:
    """
    Who is acting: a team (by team name) or an admin (by admin name).

    Admin is a superset capability: it can also add tracks.
    """

    kind: IdentityKind
    name: str
    capabilities: FrozenSet[Capability] = field(default=frozenset())

    @classmethod
    def team(cls, team_name: str) -> "Identity":
        return cls(IdentityKind.TEAM, team_name, TEAM_CAPABILITIES)

    @classmethod
    def admin(cls, name: str) -> "Identity":
        return cls(IdentityKind.ADMIN, name, ADMIN_CAPABILITIES)

    @property
    def is_admin(self) -> bool:
        return self.kind == IdentityKind.ADMIN

    def can(self, capability: Capability) -> bool:
        return capability in self.capabilities
