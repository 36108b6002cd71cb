"""FastMCP server exposing the reference database as MCP tools.

Tools:
  - search_reference(kind, query)  — records of one kind matching query
  - search_all_reference(query)    — matches across every kind, tagged by kind

The store is an in-memory ReferenceStore replaced via set_store() for tests.

Usage:
    uv run python -m backend.mcp_server
"""

from mcp.server.fastmcp import FastMCP

from mother.models import ReferenceKind
from mother.reference import ReferenceStore

mcp = FastMCP("mother-reference")

_store = ReferenceStore()


def set_store(store: ReferenceStore) -> None:
    """Replace the active store (used in tests)."""
    global _store
    _store = store


@mcp.tool()
def search_reference(kind: str, query: str = "") -> list[dict]:
    """Search one reference kind (planet, alien, character, organization,
    spaceship, movie). An empty query lists every record of that kind."""
    records = _store.search(ReferenceKind(kind), query)
    return [r.model_dump(mode="json", by_alias=True) for r in records]


@mcp.tool()
def search_all_reference(query: str) -> list[dict]:
    """Search every reference kind. Each result carries its kind."""
    return [
        {"kind": hit.kind.value, "record": hit.record.model_dump(mode="json", by_alias=True)}
        for hit in _store.search_all(query)
    ]


if __name__ == "__main__":
    mcp.run()
