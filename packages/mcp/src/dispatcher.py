"""Tool Dispatcher.

Routes named tool invocations from the host to HarmonicClient operations:
- checks that a credential is configured (except for set_api_key)
- validates arguments against the tool's schema
- shapes the upstream response into a ToolResult
- classifies every failure into a coded HarmonicMCPError

Example:
    dispatcher = ToolDispatcher.from_config(get_config())
    await dispatcher.dispatch(ToolInvocation(name="set_api_key", arguments={"api_key": "k"}))
    result = await dispatcher.dispatch(
        ToolInvocation(name="search_companies", arguments={"query": "acme", "size": 5})
    )
    print(result.text)
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable, Sequence
from enum import Enum
from typing import Any

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from packages.core.src.config import HarmonicConfig
from packages.core.src.errors import (
    HarmonicMCPError,
    InternalError,
    PreconditionError,
    RequestFailure,
    ToolExecutionError,
    TransportFailure,
    UnknownToolError,
    ValidationError,
)
from packages.integrations.harmonic.src.client import HarmonicClient, RequestDescriptor
from packages.integrations.harmonic.src.credentials import CredentialStore
from packages.mcp.src import catalog
from packages.mcp.src.observability import DispatchObserver, LoggingDispatchObserver
from packages.mcp.src.types import (
    DispatchEvent,
    ProbeOutcome,
    ToolDescriptor,
    ToolInvocation,
    ToolResult,
)

logger = structlog.get_logger()

Handler = Callable[[dict[str, Any]], Awaitable[ToolResult]]


class DispatcherPhase(str, Enum):
    """Credential phase of the dispatcher."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class ToolDispatcher:
    """Maps tool invocations onto the Harmonic API client.

    The dispatcher owns the credential store shared with its client. It
    starts UNAUTHENTICATED and moves to AUTHENTICATED after the first
    set_api_key call; later calls replace the key and stay AUTHENTICATED.
    """

    def __init__(
        self,
        client: HarmonicClient,
        credentials: CredentialStore,
        tools: Sequence[ToolDescriptor],
        observer: DispatchObserver | None = None,
        probe_requests: Sequence[RequestDescriptor] = catalog.PROBE_REQUESTS,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            client: Harmonic API client reading from ``credentials``
            credentials: Credential store
            tools: Tool catalog (see ``catalog.build_catalog``)
            observer: Receives one DispatchEvent per dispatch
            probe_requests: Candidate requests for test_connection
        """
        self._client = client
        self._credentials = credentials
        self._tools = {tool.name: tool for tool in tools}
        self._observer = observer or LoggingDispatchObserver()
        self._probe_requests = tuple(probe_requests)
        self._logger = logger.bind(component="tool_dispatcher")

        self._handlers: dict[str, Handler] = {
            catalog.SET_API_KEY: self._set_api_key,
            catalog.SEARCH_COMPANIES: self._search_companies,
            catalog.GET_COMPANY_BY_DOMAIN: self._get_company_by_domain,
            catalog.SEARCH_PEOPLE: self._search_people,
            catalog.GET_PERSON: self._get_person,
            catalog.GET_COMPANY_EMPLOYEES: self._get_company_employees,
            catalog.GET_SAVED_SEARCH_RESULTS: self._get_saved_search_results,
            catalog.TEST_CONNECTION: self._test_connection,
        }

    @classmethod
    def from_config(
        cls,
        config: HarmonicConfig,
        observer: DispatchObserver | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ToolDispatcher:
        """Create a dispatcher with its own credential store and client."""
        credentials = CredentialStore()
        client = HarmonicClient(config, credentials, transport=transport)
        return cls(client, credentials, catalog.build_catalog(config), observer=observer)

    @property
    def phase(self) -> DispatcherPhase:
        if self._credentials.is_set():
            return DispatcherPhase.AUTHENTICATED
        return DispatcherPhase.UNAUTHENTICATED

    def list_tools(self) -> list[ToolDescriptor]:
        """Return the full tool catalog. Callable in either phase."""
        return list(self._tools.values())

    def resolve(self, name: str) -> ToolDescriptor:
        """Find the descriptor for a tool name or its legacy alias.

        Raises:
            UnknownToolError: If no tool matches
        """
        tool = self._tools.get(catalog.LEGACY_ALIASES.get(name, name))
        if tool is None and name.startswith(catalog.LEGACY_PREFIX):
            tool = self._tools.get(name[len(catalog.LEGACY_PREFIX) :])
        if tool is None:
            raise UnknownToolError(name)
        return tool

    async def dispatch(self, invocation: ToolInvocation) -> ToolResult:
        """Execute one tool invocation.

        Every failure leaves as a HarmonicMCPError subclass; anything
        unclassified is wrapped in InternalError.

        Args:
            invocation: Tool name and arguments from the host

        Returns:
            Tool result with a single text block
        """
        start_time = time.time()
        outcome = "success"

        try:
            return await self._dispatch(invocation)
        except HarmonicMCPError as e:
            outcome = e.code
            raise
        except Exception as e:
            wrapped = InternalError(str(e) or type(e).__name__, cause=e)
            outcome = wrapped.code
            raise wrapped from e
        finally:
            self._observer.record(
                DispatchEvent(
                    tool_name=invocation.name,
                    outcome=outcome,
                    latency_ms=(time.time() - start_time) * 1000,
                )
            )

    async def _dispatch(self, invocation: ToolInvocation) -> ToolResult:
        tool = self.resolve(invocation.name)

        if tool.requires_credential and not self._credentials.is_set():
            raise PreconditionError(
                f"Harmonic API key not set. Please use {catalog.SET_API_KEY} first.",
                details={"tool_name": tool.name},
            )

        arguments = self._validate(tool, invocation.arguments)

        try:
            return await self._handlers[tool.name](arguments)
        except (RequestFailure, TransportFailure) as e:
            raise ToolExecutionError(tool.name, e) from e

    def _validate(self, tool: ToolDescriptor, arguments: dict[str, Any] | None) -> dict[str, Any]:
        """Validate an argument bag, filling in declared defaults."""
        try:
            parsed = tool.input_model().model_validate(arguments or {})
        except PydanticValidationError as e:
            errors = [
                {
                    "field": ".".join(str(part) for part in err["loc"]),
                    "message": err["msg"],
                    "type": err["type"],
                }
                for err in e.errors()
            ]
            summary = "; ".join(f"{err['field']}: {err['message']}" for err in errors)
            raise ValidationError(
                f"Invalid arguments for '{tool.name}': {summary}",
                tool_name=tool.name,
                errors=errors,
            ) from e
        return parsed.model_dump()

    # Handlers

    async def _set_api_key(self, args: dict[str, Any]) -> ToolResult:
        self._credentials.set(args["api_key"])
        return ToolResult.from_text(
            "Harmonic API key has been set successfully. "
            "You can now use the other Harmonic tools."
        )

    async def _search_companies(self, args: dict[str, Any]) -> ToolResult:
        data = await self._client.search_companies(args["query"], args["size"], args["cursor"])
        return ToolResult.from_json(data)

    async def _get_company_by_domain(self, args: dict[str, Any]) -> ToolResult:
        return ToolResult.from_json(await self._client.get_company_by_domain(args["domain"]))

    async def _search_people(self, args: dict[str, Any]) -> ToolResult:
        data = await self._client.search_people(args["query"], args["size"], args["cursor"])
        return ToolResult.from_json(data)

    async def _get_person(self, args: dict[str, Any]) -> ToolResult:
        return ToolResult.from_json(await self._client.get_person(args["person_id"]))

    async def _get_company_employees(self, args: dict[str, Any]) -> ToolResult:
        data = await self._client.get_company_employees(
            args["company_id"], args["size"], args["cursor"]
        )
        return ToolResult.from_json(data)

    async def _get_saved_search_results(self, args: dict[str, Any]) -> ToolResult:
        data = await self._client.get_saved_search_results(
            args["search_id"], args["size"], args["cursor"]
        )
        return ToolResult.from_json(data)

    async def _test_connection(self, args: dict[str, Any]) -> ToolResult:
        """Request every candidate path and report each outcome.

        Failures are recorded, never raised, so all candidates are tried.
        """
        outcomes: list[ProbeOutcome] = []

        for descriptor in self._probe_requests:
            try:
                response = await self._client.request(descriptor)
                outcomes.append(
                    ProbeOutcome(path=descriptor.target, outcome="success", detail=response)
                )
            except (RequestFailure, TransportFailure) as e:
                outcomes.append(
                    ProbeOutcome(path=descriptor.target, outcome="failed", detail=e.message)
                )

        self._logger.info(
            "connection_tested",
            candidates=len(outcomes),
            succeeded=sum(1 for o in outcomes if o.outcome == "success"),
        )
        return ToolResult.from_json([o.model_dump() for o in outcomes])

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()
