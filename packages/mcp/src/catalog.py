"""Static catalog of Harmonic tools.

The catalog is built once at startup. Only the page-size default depends
on configuration.
"""

from __future__ import annotations

from packages.core.src.config import HarmonicConfig
from packages.integrations.harmonic.src.client import RequestDescriptor
from packages.mcp.src.types import ParameterType, ToolDescriptor, ToolParameter

SET_API_KEY = "set_api_key"
SEARCH_COMPANIES = "search_companies"
GET_COMPANY_BY_DOMAIN = "get_company_by_domain"
SEARCH_PEOPLE = "search_people"
GET_PERSON = "get_person"
GET_COMPANY_EMPLOYEES = "get_company_employees"
GET_SAVED_SEARCH_RESULTS = "get_saved_search_results"
TEST_CONNECTION = "test_connection"

# Earlier server builds exposed every tool as "harmonic_<name>"
LEGACY_PREFIX = "harmonic_"

# Legacy names that differ from the canonical name after the prefix
LEGACY_ALIASES = {
    "harmonic_get_company": GET_COMPANY_BY_DOMAIN,
    "harmonic_search_company_by_domain": GET_COMPANY_BY_DOMAIN,
}

MAX_PAGE_SIZE = 1000

# Candidate paths tried, in order, by the connection test
PROBE_REQUESTS: tuple[RequestDescriptor, ...] = (
    RequestDescriptor(path="/companies", params=[("q", "google"), ("size", "1")]),
    RequestDescriptor(path="/company", params=[("q", "google"), ("size", "1")]),
    RequestDescriptor(path="/search/companies", params=[("q", "google"), ("size", "1")]),
    RequestDescriptor(path="/"),
    RequestDescriptor(path="/api/v1/companies", params=[("q", "google"), ("size", "1")]),
)


def _string(name: str, description: str, required: bool = False) -> ToolParameter:
    return ToolParameter(
        name=name,
        type=ParameterType.STRING,
        description=description,
        required=required,
    )


def _paging(page_size: int) -> tuple[ToolParameter, ...]:
    return (
        ToolParameter(
            name="size",
            type=ParameterType.INTEGER,
            description=f"Number of results to return (default: {page_size})",
            default=page_size,
            minimum=1,
            maximum=MAX_PAGE_SIZE,
        ),
        _string("cursor", "Cursor for pagination, as returned by a previous page (optional)"),
    )


def build_catalog(config: HarmonicConfig) -> tuple[ToolDescriptor, ...]:
    """Build the tool list advertised to the host."""
    paging = _paging(config.default_page_size)

    return (
        ToolDescriptor(
            name=SET_API_KEY,
            description="Set the Harmonic API key for authentication",
            parameters=(_string("api_key", "Your Harmonic API key", required=True),),
            requires_credential=False,
        ),
        ToolDescriptor(
            name=SEARCH_COMPANIES,
            description="Search for companies in the Harmonic database",
            parameters=(_string("query", "Search query for companies", required=True), *paging),
        ),
        ToolDescriptor(
            name=GET_COMPANY_BY_DOMAIN,
            description="Get detailed information about a company by its website domain",
            parameters=(
                _string(
                    "domain",
                    "The website domain of the company (e.g., harmonic.ai)",
                    required=True,
                ),
            ),
        ),
        ToolDescriptor(
            name=SEARCH_PEOPLE,
            description="Search for people/professionals in the Harmonic database",
            parameters=(_string("query", "Search query for people", required=True), *paging),
        ),
        ToolDescriptor(
            name=GET_PERSON,
            description="Get detailed information about a person by their ID",
            parameters=(
                _string("person_id", "The ID of the person in Harmonic's database", required=True),
            ),
        ),
        ToolDescriptor(
            name=GET_COMPANY_EMPLOYEES,
            description="Get the active employees of a company",
            parameters=(_string("company_id", "The ID of the company", required=True), *paging),
        ),
        ToolDescriptor(
            name=GET_SAVED_SEARCH_RESULTS,
            description="Get results from a saved search",
            parameters=(_string("search_id", "The ID of the saved search", required=True), *paging),
        ),
        ToolDescriptor(
            name=TEST_CONNECTION,
            description="Test the API connection and check which endpoints respond",
        ),
    )
