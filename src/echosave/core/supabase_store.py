"""Supabase (PostgREST) implementation of the record store."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from .errors import BackendError, UnknownError
from .models import Record
from .store import CONFLICT_KEY

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "code_groups"
SELECT_COLUMNS = "code,file_name,content"


class SupabaseRecordStore:
    """Reads and writes code group rows through the Supabase REST API."""

    def __init__(
        self,
        url: str,
        key: str,
        *,
        table: str = DEFAULT_TABLE,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the store.

        Args:
            url: Project URL, e.g. https://xyzcompany.supabase.co
            key: Anon (or service) API key
            table: Table holding the code/file_name/content columns
            timeout: Request timeout in seconds
            client: Pre-built client to use instead of creating one (tests)
        """
        self.url = (url or "").rstrip("/")
        self.key = key or ""
        self.table = table
        self.endpoint = f"{self.url}/rest/v1/{table}"
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            limits=httpx.Limits(max_keepalive_connections=5),
        )

    @property
    def configured(self) -> bool:
        return bool(self.url and self.key)

    def _headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.key,
            "Authorization": f"Bearer {self.key}",
            "Accept": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    @staticmethod
    def _filters(code: str, file_name: Optional[str] = None) -> Dict[str, str]:
        params = {"code": f"eq.{code}"}
        if file_name is not None:
            params["file_name"] = f"eq.{file_name}"
        return params

    async def _request(
        self,
        method: str,
        *,
        params: Dict[str, str],
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> httpx.Response:
        if not self.configured:
            raise BackendError("Supabase credentials are missing. Check your .env file.")

        try:
            response = await self.http_client.request(
                method,
                self.endpoint,
                params=params,
                json=json,
                headers=self._headers(prefer),
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, self.endpoint, e)
            raise BackendError(f"Request to Supabase failed: {e}") from e

        if response.is_error:
            raise self._error_from_response(response)
        return response

    @staticmethod
    def _error_from_response(response: httpx.Response) -> Exception:
        """Map an error response to BackendError (known shape) or UnknownError."""
        try:
            payload = response.json()
        except ValueError:
            return UnknownError(response.text, status_code=response.status_code)

        if isinstance(payload, dict) and isinstance(payload.get("message"), str):
            return BackendError(
                payload["message"],
                status_code=response.status_code,
                code=payload.get("code"),
                details=payload.get("details"),
                hint=payload.get("hint"),
            )
        return UnknownError(payload, status_code=response.status_code)

    async def query(self, code: str, file_name: Optional[str] = None) -> List[Record]:
        params = {"select": SELECT_COLUMNS, **self._filters(code, file_name)}
        response = await self._request("GET", params=params)
        try:
            rows = response.json()
        except ValueError:
            raise UnknownError(response.text, status_code=response.status_code)
        if not isinstance(rows, list):
            raise UnknownError(rows, status_code=response.status_code)

        try:
            records = [self._record_from_row(row, code) for row in rows]
        except (KeyError, AttributeError, TypeError, ValidationError) as e:
            raise UnknownError(rows, status_code=response.status_code) from e
        logger.debug("Fetched %d record(s) for code %s", len(records), code)
        return records

    @staticmethod
    def _record_from_row(row: Dict[str, Any], code: str) -> Record:
        # Rows selected without the code column still belong to this group
        content = row.get("content")
        if not isinstance(row["file_name"], str) or not isinstance(content, (str, type(None))):
            raise TypeError(f"Unexpected row shape: {row!r}")
        return Record(code=row.get("code", code), file_name=row["file_name"], content=content or "")

    async def upsert(self, record: Record) -> None:
        await self._request(
            "POST",
            params={"on_conflict": ",".join(CONFLICT_KEY)},
            json=[record.model_dump()],
            prefer="resolution=merge-duplicates,return=minimal",
        )
        logger.debug("Upserted %s/%s", record.code, record.file_name)

    async def delete_by_code_and_file(self, code: str, file_name: str) -> None:
        await self._request("DELETE", params=self._filters(code, file_name), prefer="return=minimal")
        logger.debug("Deleted %s/%s", code, file_name)

    async def delete_by_code(self, code: str) -> None:
        await self._request("DELETE", params=self._filters(code), prefer="return=minimal")
        logger.debug("Deleted group %s", code)

    async def aclose(self) -> None:
        """Clean up resources."""
        if self._owns_client:
            await self.http_client.aclose()
