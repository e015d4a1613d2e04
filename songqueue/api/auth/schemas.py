"""Pydantic schemas for the auth API (team/admin login and sessions)."""

from typing import List, Optional

from pydantic import BaseModel


class VerifyRequest(BaseModel):
    code: Optional[str] = None


class TeamInfo(BaseModel):
    team_name: str


class AdminInfo(BaseModel):
    name: str


class VerifyResponse(BaseModel):
    success: bool = True
    team: Optional[TeamInfo] = None
    admin: Optional[AdminInfo] = None
    session_token: str
    capabilities: List[str]


class SessionResponse(BaseModel):
    kind: str
    name: str
    is_admin: bool
    capabilities: List[str]
