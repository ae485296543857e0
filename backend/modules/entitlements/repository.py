"""
Profile repository for database access.

Encapsulates the Supabase queries against the users table. Rows are keyed
by ``id`` (the session uid) and mapped to ProfileRecord.

Note: This repository does NOT perform authorization checks and does NOT
derive tiers. The evaluator is responsible for both.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from supabase import Client

from shared.repository import BaseRepository
from .models import ProfileRecord
from .exceptions import ProfileStoreUnavailableError

logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository[ProfileRecord]):
    """
    Repository for user profile documents.

    Any client error is raised as ProfileStoreUnavailableError so that
    callers see a single upstream failure type.
    """

    def __init__(self, db: Client, table: str = "users") -> None:
        super().__init__(db, table)

    def get(self, uid: str) -> Optional[ProfileRecord]:
        """
        Get a profile record by uid.

        Args:
            uid: The user's ID.

        Returns:
            ProfileRecord, or None if no document exists.
        """
        row = self._fetch_row(uid, "*")
        if row is None:
            return None
        return self._map_to_record(row)

    def get_tokens_valid_after(self, uid: str) -> Optional[datetime]:
        """Get the revocation timestamp used by the session verifier."""
        row = self._fetch_row(uid, "id, tokens_valid_after")
        if row is None:
            return None
        return self._map_to_record(row).tokens_valid_after

    def accept_terms(self, uid: str, version: str) -> datetime:
        """
        Upsert the accept-terms fields, leaving other columns untouched.

        Args:
            uid: The user's ID.
            version: Accepted terms version (e.g. "v1").

        Returns:
            The stored acceptance time (UTC).
        """
        accepted_at = datetime.now(timezone.utc)
        data = {
            "id": uid,
            "accepted_terms_at": accepted_at.isoformat(),
            "accepted_terms_version": version,
        }
        try:
            self._db.table(self._table).upsert(data, on_conflict="id").execute()
        except Exception as e:
            logger.error(f"Failed to record terms acceptance for {uid}: {e}")
            raise ProfileStoreUnavailableError() from e
        return accepted_at

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _fetch_row(self, uid: str, columns: str) -> Optional[dict[str, Any]]:
        try:
            return self._first_row("id", uid, columns)
        except Exception as e:
            logger.error(f"Failed to read profile {uid}: {e}")
            raise ProfileStoreUnavailableError() from e

    def _map_to_record(self, row: dict[str, Any]) -> ProfileRecord:
        return ProfileRecord.model_validate(row)
