"""HTTP client for running SQL against Cloudflare D1."""
import logging
from typing import Any

import httpx
from sqlalchemy.dialects import sqlite
from sqlalchemy.sql import ClauseElement

from core.config import Settings

logger = logging.getLogger(__name__)

_DIALECT = sqlite.dialect()


class BackendError(Exception):
    """Raised when D1 is unreachable or answers with a failure or malformed payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


def compile_statement(statement: ClauseElement) -> tuple[str, list[Any]]:
    """
    Render a SQLAlchemy statement as SQLite SQL with positional ``?`` parameters.

    Returns:
        Tuple of (sql, params) ready for the D1 query endpoint.
    """
    compiled = statement.compile(dialect=_DIALECT)
    values = compiled.params
    params = [values[name] for name in (compiled.positiontup or [])]
    return str(compiled), params


class D1Client:
    """
    Sends one query per HTTP round trip to the D1 ``/query`` endpoint.

    No retries and no transactions: each execute() call is an independent
    statement, so multi-step service operations are not atomic.
    """

    def __init__(
        self,
        query_url: str,
        api_token: str,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._query_url = query_url
        self._api_token = api_token
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> "D1Client":
        """Build a client from the D1 credentials in settings."""
        return cls(
            query_url=settings.d1_query_url,
            api_token=settings.cloudflare_d1_api_token,
            timeout=settings.d1_timeout,
        )

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_token}",
            "Content-Type": "application/json",
        }

    async def execute(self, sql: str, params: list[Any] | None = None) -> list[dict[str, Any]]:
        """
        Run one SQL statement.

        Returns:
            Rows of the first statement result (empty list if none).

        Raises:
            BackendError: On transport failure, non-2xx status, a false success
                flag, any reported error, or a first result without success.
        """
        try:
            response = await self._client.post(
                self._query_url,
                json={"sql": sql, "params": params or []},
                headers=self._get_headers(),
            )
        except httpx.HTTPError as e:
            logger.warning("D1 request could not be sent: %s", e)
            raise BackendError(f"D1 request failed: {e}") from e

        if not response.is_success:
            logger.warning("D1 request failed with status %s", response.status_code)
            raise BackendError(
                f"D1 request failed ({response.status_code}): {response.text}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise BackendError("D1 returned a non-JSON response.") from e
        if not isinstance(body, dict):
            raise BackendError("D1 returned an unexpected response shape.")

        errors = body.get("errors") or []
        if not body.get("success") or errors:
            details = "; ".join(
                f"{err.get('code')}: {err.get('message')}"
                for err in errors
                if isinstance(err, dict)
            ) or "Unknown error"
            logger.warning("D1 query failed: %s", details)
            raise BackendError(f"D1 query failed: {details}")

        results = body.get("result") or []
        first = results[0] if results else None
        if not isinstance(first, dict) or not first.get("success"):
            raise BackendError("D1 query failed with empty result payload.")

        return first.get("results") or []

    async def run(self, statement: ClauseElement) -> list[dict[str, Any]]:
        """Compile a SQLAlchemy statement and execute it."""
        sql, params = compile_statement(statement)
        return await self.execute(sql, params)

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
