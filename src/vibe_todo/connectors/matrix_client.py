# src/vibe_todo/connectors/matrix_client.py

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from nio import AsyncClient, AsyncClientConfig, LoginResponse

logger = logging.getLogger(__name__)

try:
    import olm  # type: ignore  # noqa: F401

    OLM_AVAILABLE = True
except Exception:
    OLM_AVAILABLE = False


def _session_path(store_dir: Path) -> Path:
    return store_dir / "session.json"


def _load_json(path: Path) -> dict[str, Any]:
    val = json.loads(path.read_text("utf-8"))
    if isinstance(val, dict):
        return val
    raise ValueError("Expected JSON object")


def _atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    tmp = path.with_suffix(".tmp")
    tmp.write_text(json.dumps(data, ensure_ascii=False), "utf-8")
    os.replace(tmp, path)
    try:
        os.chmod(path, 0o600)
    except OSError:
        pass


def _restore_session(client: AsyncClient, session_file: Path, encryption_enabled: bool) -> bool:
    data = _load_json(session_file)

    access_token = data.get("access_token")
    sess_user_id = data.get("user_id")
    device_id = data.get("device_id")
    if not access_token or not sess_user_id or not device_id:
        raise ValueError("session.json is missing required fields")

    client.access_token = str(access_token)
    client.user_id = str(sess_user_id)
    client.device_id = str(device_id)

    if encryption_enabled:
        try:
            client.load_store()
        except Exception as e:
            logger.warning("Failed to load E2EE store: %r", e)
    logger.info("Matrix session restored for %s", client.user_id)
    return True


async def create_matrix_client(settings) -> AsyncClient | None:
    """
    Create a Matrix AsyncClient used only to post notifications.

    session.json keeps the access token/device id so restarts do not log in
    again. It holds credentials and lives under the gitignored data dir.
    """
    homeserver = (getattr(settings, "matrix_homeserver", "") or "").strip()
    user_id = (getattr(settings, "matrix_user_id", "") or "").strip()
    password = (getattr(settings, "matrix_password", "") or "").strip()
    store_dir = Path(getattr(settings, "matrix_store_path", Path(".local/vibe/matrix_store")))

    if not homeserver or not user_id:
        logger.error("Matrix is not configured: set VIBE_MATRIX_HOMESERVER and VIBE_MATRIX_USER_ID")
        return None

    try:
        store_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Failed to create directory %s: %r", store_dir, e)
    session_file = _session_path(store_dir)

    encryption_enabled = bool(OLM_AVAILABLE)
    client = AsyncClient(
        homeserver,
        user_id,
        store_path=str(store_dir) if encryption_enabled else None,
        config=AsyncClientConfig(encryption_enabled=encryption_enabled, store_sync_tokens=True),
    )

    if session_file.exists():
        try:
            _restore_session(client, session_file, encryption_enabled)
            return client
        except Exception as e:
            logger.warning("Failed to restore Matrix session.json, will try password login: %r", e)

    if not password:
        logger.error(
            "Matrix session.json not found and password is not set. "
            "Set VIBE_MATRIX_PASSWORD once to bootstrap a session."
        )
        await client.close()
        return None

    device_name = f"{getattr(settings, 'app_name', 'Vibe To-Do')} (Python)"
    logger.info("Logging in to Matrix to bootstrap a new session (device_name=%r)...", device_name)

    resp = await client.login(password=password, device_name=device_name)
    if not isinstance(resp, LoginResponse):
        logger.error("Matrix login failed: %r", resp)
        await client.close()
        return None

    try:
        _atomic_write_json(
            session_file,
            {"access_token": resp.access_token, "user_id": resp.user_id, "device_id": resp.device_id},
        )
        logger.info("Matrix session saved to %s (user=%s)", session_file, resp.user_id)
    except OSError as e:
        # Still usable for this run; the next start logs in again.
        logger.error("Failed to write Matrix session.json (%s): %r", session_file, e)

    return client
