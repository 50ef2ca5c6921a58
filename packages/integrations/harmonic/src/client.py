"""Harmonic Client for company and people intelligence.

Harmonic provides startup and company data APIs including:
- Company search and enrichment by website domain
- People search and profiles
- Company employee listings
- Saved search results

Each public method issues exactly one HTTP request and returns the parsed
JSON response untouched. Pagination cursors are passed through verbatim.
"""

from __future__ import annotations

import time
from typing import Any
from urllib.parse import quote, urlencode

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field, model_validator

from packages.core.src.config import AuthScheme, CompanyLookup, HarmonicConfig
from packages.core.src.errors import RequestFailure, TransportFailure
from packages.integrations.harmonic.src.credentials import Credential, CredentialStore

logger = structlog.get_logger()


class RequestDescriptor(BaseModel):
    """One outbound request: path, method and either query params or a JSON body."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Resource path, starting with '/'")
    method: str = Field(default="GET")
    params: list[tuple[str, str]] | None = Field(
        default=None, description="Ordered query parameters"
    )
    json_body: dict[str, Any] | None = Field(default=None)

    @model_validator(mode="after")
    def check_params_or_body(self) -> RequestDescriptor:
        if self.params and self.json_body is not None:
            raise ValueError("A request carries query parameters or a JSON body, not both")
        return self

    @property
    def target(self) -> str:
        """Path with its query string, as shown in diagnostics."""
        if not self.params:
            return self.path
        return f"{self.path}?{urlencode(self.params)}"


def _segment(value: str) -> str:
    """Percent-encode a value embedded in a URL path."""
    return quote(str(value), safe="")


def _paged_params(size: int, cursor: str | None, **extra: str) -> list[tuple[str, str]]:
    params = [(key, value) for key, value in extra.items()]
    params.append(("size", str(size)))
    if cursor is not None:
        params.append(("cursor", cursor))
    return params


class HarmonicClient:
    """Client for the Harmonic REST API.

    The authentication scheme and company-lookup variant are fixed at
    construction from configuration, so a deployment never mixes them.
    The API key itself is read from the credential store each time a
    request is built.

    Example:
        store = CredentialStore()
        store.set("my-key")
        client = HarmonicClient(get_config(), store)
        companies = await client.search_companies("acme", size=5)
    """

    def __init__(
        self,
        config: HarmonicConfig,
        credentials: CredentialStore,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._credentials = credentials
        self._auth_scheme = config.auth_scheme
        self._company_lookup = config.company_lookup
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            transport=transport,
        )
        self._logger = logger.bind(
            component="harmonic_client",
            auth_scheme=self._auth_scheme.value,
        )

    @property
    def auth_scheme(self) -> AuthScheme:
        return self._auth_scheme

    @property
    def company_lookup(self) -> CompanyLookup:
        return self._company_lookup

    def _apply_auth(
        self,
        credential: Credential,
        headers: dict[str, str],
        params: list[tuple[str, str]],
    ) -> None:
        if self._auth_scheme == AuthScheme.BEARER:
            headers["Authorization"] = f"Bearer {credential.value}"
        elif self._auth_scheme == AuthScheme.APIKEY_QUERY:
            params.append(("apikey", credential.value))
        else:
            headers["apikey"] = credential.value

    async def request(self, descriptor: RequestDescriptor) -> Any:
        """Send one request to the Harmonic API.

        Args:
            descriptor: What to request

        Returns:
            Parsed JSON response, or None for an empty body

        Raises:
            PreconditionError: If no API key has been set
            RequestFailure: On any non-2xx status or a non-JSON body
            TransportFailure: If the API could not be reached
        """
        credential = self._credentials.current()

        headers = {"Accept": "application/json"}
        params = list(descriptor.params or [])
        self._apply_auth(credential, headers, params)

        log = self._logger.bind(method=descriptor.method, path=descriptor.path)
        log.debug("harmonic_request", key_preview=credential.preview)
        start_time = time.time()

        try:
            response = await self._client.request(
                descriptor.method,
                descriptor.path,
                params=params or None,
                json=descriptor.json_body,
                headers=headers,
            )
        except httpx.TransportError as e:
            log.warning("harmonic_transport_failed", error=str(e))
            raise TransportFailure(
                e, method=descriptor.method, path=descriptor.path
            ) from e

        time_ms = (time.time() - start_time) * 1000
        log.info("harmonic_response", status_code=response.status_code, time_ms=time_ms)

        if not response.is_success:
            raise RequestFailure(
                response.status_code,
                response.text,
                method=descriptor.method,
                path=descriptor.path,
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise RequestFailure(
                response.status_code,
                response.text,
                method=descriptor.method,
                path=descriptor.path,
                reason="invalid_response",
            ) from e

    async def search_companies(
        self,
        query: str,
        size: int | None = None,
        cursor: str | None = None,
    ) -> Any:
        """Search companies by free-text query.

        Args:
            query: Search query
            size: Page size (deployment default when omitted)
            cursor: Pagination cursor from a previous page
        """
        size = size or self._config.default_page_size
        return await self.request(
            RequestDescriptor(path="/companies", params=_paged_params(size, cursor, q=query))
        )

    async def get_company_by_domain(self, domain: str) -> Any:
        """Look up a company by its website domain.

        Uses the deployment's lookup variant: a POST with a
        ``website_domain`` body, or a GET on the domain path.
        """
        if self._company_lookup == CompanyLookup.GET_PATH:
            descriptor = RequestDescriptor(path=f"/companies/{_segment(domain)}")
        else:
            descriptor = RequestDescriptor(
                path="/companies",
                method="POST",
                json_body={"website_domain": domain},
            )
        return await self.request(descriptor)

    async def search_people(
        self,
        query: str,
        size: int | None = None,
        cursor: str | None = None,
    ) -> Any:
        """Search people by free-text query."""
        size = size or self._config.default_page_size
        return await self.request(
            RequestDescriptor(path="/people", params=_paged_params(size, cursor, q=query))
        )

    async def get_person(self, person_id: str) -> Any:
        """Get a person by Harmonic ID."""
        return await self.request(RequestDescriptor(path=f"/people/{_segment(person_id)}"))

    async def get_company_employees(
        self,
        company_id: str,
        size: int | None = None,
        cursor: str | None = None,
    ) -> Any:
        """List employees of a company, one page at a time."""
        size = size or self._config.default_page_size
        return await self.request(
            RequestDescriptor(
                path=f"/companies/{_segment(company_id)}/employees",
                params=_paged_params(size, cursor),
            )
        )

    async def get_saved_search_results(
        self,
        search_id: str,
        size: int | None = None,
        cursor: str | None = None,
    ) -> Any:
        """Get one page of results from a saved search."""
        size = size or self._config.default_page_size
        return await self.request(
            RequestDescriptor(
                path=f"/saved_searches:results/{_segment(search_id)}",
                params=_paged_params(size, cursor),
            )
        )

    async def close(self) -> None:
        """Close HTTP client."""
        await self._client.aclose()
