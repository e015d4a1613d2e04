"""Lookup of team codes and admin codes.

Two backends share the same two-method interface:

- AppwriteIdentityVerifier queries the hosted document database over its REST
  API (one equality-filtered listDocuments call per lookup);
- JsonFileIdentityVerifier reads a local JSON file, for development and tests.

A lookup returns the matching Identity, or None when the code is unknown.
Transport problems raise UpstreamUnavailable; they are never reported as an
unknown code.
"""

import json
from typing import Any, Dict, List, Optional, Protocol

import requests

from songqueue.config import (
    APPWRITE_ADMIN_COLLECTION_ID,
    APPWRITE_API_KEY,
    APPWRITE_DATABASE_ID,
    APPWRITE_ENDPOINT,
    APPWRITE_PROJECT_ID,
    APPWRITE_TEAMS_COLLECTION_ID,
    HTTP_TIMEOUT_SECONDS,
    IDENTITY_BACKEND,
    IDENTITY_CODES_FILE,
)
from songqueue.core import (
    Identity,
    UpstreamUnavailable,
    log_step,
    log_warning,
    read_json_object,
)


class IdentityVerifier(Protocol):
    def lookup_team(self, code: str) -> Optional[Identity]: ...

    def lookup_admin(self, code: str) -> Optional[Identity]: ...


class AppwriteIdentityVerifier:
    TEAM_CODE_ATTRIBUTE = "team_code"
    TEAM_NAME_ATTRIBUTE = "team_name"
    ADMIN_CODE_ATTRIBUTE = "password"
    ADMIN_NAME_ATTRIBUTE = "name"

    def __init__(
        self,
        endpoint: str = APPWRITE_ENDPOINT,
        project_id: str = APPWRITE_PROJECT_ID,
        api_key: str = APPWRITE_API_KEY,
        database_id: str = APPWRITE_DATABASE_ID,
        teams_collection_id: str = APPWRITE_TEAMS_COLLECTION_ID,
        admin_collection_id: str = APPWRITE_ADMIN_COLLECTION_ID,
    ) -> None:
        if not endpoint or not project_id or not database_id:
            raise ValueError("Missing Appwrite environment variables.")
        self.endpoint = endpoint.rstrip("/")
        self.project_id = project_id
        self.api_key = api_key
        self.database_id = database_id
        self.teams_collection_id = teams_collection_id
        self.admin_collection_id = admin_collection_id

    def _headers(self) -> Dict[str, str]:
        headers = {"X-Appwrite-Project": self.project_id}
        if self.api_key:
            headers["X-Appwrite-Key"] = self.api_key
        return headers

    def _find_one(self, collection_id: str, attribute: str, value: str) -> Optional[Dict[str, Any]]:
        url = (
            f"{self.endpoint}/databases/{self.database_id}"
            f"/collections/{collection_id}/documents"
        )
        queries = [
            json.dumps({"method": "equal", "attribute": attribute, "values": [value]}),
            json.dumps({"method": "limit", "values": [1]}),
        ]
        try:
            r = requests.get(
                url,
                headers=self._headers(),
                params={"queries[]": queries},
                timeout=HTTP_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            raise UpstreamUnavailable(
                f"Identity lookup failed: {e}", service="appwrite"
            ) from e

        if r.status_code != 200:
            log_warning(f"Appwrite listDocuments -> {r.status_code}: {r.text}")
            raise UpstreamUnavailable(
                f"Identity lookup failed: HTTP {r.status_code}",
                service="appwrite",
                upstream_status=r.status_code,
            )

        try:
            data = r.json()
        except ValueError as e:
            raise UpstreamUnavailable(
                "Identity lookup failed: non-JSON answer", service="appwrite"
            ) from e
        if not isinstance(data, dict):
            raise UpstreamUnavailable(
                "Identity lookup failed: unexpected answer", service="appwrite"
            )

        documents: List[Dict[str, Any]] = data.get("documents") or []
        return documents[0] if documents else None

    def lookup_team(self, code: str) -> Optional[Identity]:
        log_step("Verifying team code against Appwrite...")
        doc = self._find_one(self.teams_collection_id, self.TEAM_CODE_ATTRIBUTE, code)
        if doc is None:
            return None
        return Identity.team(doc.get(self.TEAM_NAME_ATTRIBUTE) or code)

    def lookup_admin(self, code: str) -> Optional[Identity]:
        log_step("Verifying admin code against Appwrite...")
        doc = self._find_one(self.admin_collection_id, self.ADMIN_CODE_ATTRIBUTE, code)
        if doc is None:
            return None
        return Identity.admin(doc.get(self.ADMIN_NAME_ATTRIBUTE) or "admin")


class JsonFileIdentityVerifier:
    """
    Codes from a local JSON file:

        {
          "teams":  [{"team_code": "red-42", "team_name": "Red"}],
          "admins": [{"password": "letmein", "name": "Alex"}]
        }

    The file is re-read on every lookup so codes can be edited while the
    server runs.
    """

    def __init__(self, path: str = IDENTITY_CODES_FILE) -> None:
        self.path = path

    def _load(self) -> Dict[str, Any]:
        return read_json_object(
            self.path,
            on_error=lambda e: log_warning(f"Invalid identity codes file {self.path}: {e}"),
        )

    def lookup_team(self, code: str) -> Optional[Identity]:
        for team in self._load().get("teams") or []:
            if isinstance(team, dict) and team.get("team_code") == code:
                return Identity.team(team.get("team_name") or code)
        return None

    def lookup_admin(self, code: str) -> Optional[Identity]:
        for admin in self._load().get("admins") or []:
            if isinstance(admin, dict) and admin.get("password") == code:
                return Identity.admin(admin.get("name") or "admin")
        return None


def build_identity_verifier(backend: str = IDENTITY_BACKEND) -> IdentityVerifier:
    if backend == "appwrite":
        return AppwriteIdentityVerifier()
    if backend == "file":
        return JsonFileIdentityVerifier()
    raise ValueError(f"Unsupported identity backend: {backend!r}")
