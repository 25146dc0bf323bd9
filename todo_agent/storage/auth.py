"""Google OAuth handling for the Google Tasks backend."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import structlog
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from ..config import settings
from ..errors import AuthorizationError

log = structlog.get_logger()

# If modifying these scopes, delete the persisted token file.
SCOPES = ["https://www.googleapis.com/auth/tasks"]


def load_saved_credentials(token_path: Path) -> Optional[Credentials]:
    """Read previously authorized credentials, or ``None`` if there are none."""
    if not token_path.exists():
        return None
    try:
        return Credentials.from_authorized_user_file(str(token_path), SCOPES)
    except ValueError as exc:
        log.warning("ignoring unreadable token file", path=str(token_path), error=str(exc))
        return None


def save_credentials(credentials: Credentials, credentials_path: Path, token_path: Path) -> None:
    """Persist ``credentials`` in the authorized-user format google-auth reads back."""
    keys = json.loads(credentials_path.read_text("utf-8"))
    key = keys.get("installed") or keys.get("web") or {}
    payload = {
        "type": "authorized_user",
        "client_id": key.get("client_id"),
        "client_secret": key.get("client_secret"),
        "refresh_token": credentials.refresh_token,
    }
    token_path.write_text(json.dumps(payload), encoding="utf-8")
    log.info("credentials saved", path=str(token_path))


def authorize(
    credentials_path: Path | None = None,
    token_path: Path | None = None,
) -> Credentials:
    """Load persisted credentials or run the interactive consent flow."""
    credentials_path = credentials_path or settings.credentials_path
    token_path = token_path or settings.token_path

    try:
        credentials = load_saved_credentials(token_path)
        if credentials is not None and credentials.valid:
            return credentials
        if credentials is not None and credentials.refresh_token:
            credentials.refresh(Request())
            return credentials
        if credentials is not None:
            log.info("saved token cannot be refreshed", path=str(token_path))

        if not credentials_path.exists():
            raise AuthorizationError(
                f"Client secrets file not found: {credentials_path}"
            )

        log.info("starting consent flow", credentials=str(credentials_path))
        flow = InstalledAppFlow.from_client_secrets_file(str(credentials_path), SCOPES)
        credentials = flow.run_local_server(port=0)
        if credentials.refresh_token:
            save_credentials(credentials, credentials_path, token_path)
        return credentials
    except (GoogleAuthError, OSError, ValueError) as exc:
        raise AuthorizationError(f"Google authorization failed: {exc}") from exc


def get_authorized_client(
    credentials_path: Path | None = None,
    token_path: Path | None = None,
) -> Any:
    """Return an authorized Google Tasks v1 service."""
    credentials = authorize(credentials_path, token_path)
    return build("tasks", "v1", credentials=credentials, cache_discovery=False)


__all__ = [
    "SCOPES",
    "authorize",
    "get_authorized_client",
    "load_saved_credentials",
    "save_credentials",
]
