"""Reference database endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from mother.formatting import format_long
from mother.models import ReferenceKind
from mother.reference import ReferenceStore

from .deps import get_store
from .models import SearchHitView

router = APIRouter()


@router.get("/wiki")
async def wiki_counts(store: ReferenceStore = Depends(get_store)):
    """Number of records per kind."""
    return {kind.value: count for kind, count in store.counts().items()}


@router.get("/wiki/search", response_model=list[SearchHitView])
async def wiki_search(
    q: str = "",
    franchise: str | None = None,
    kind: ReferenceKind | None = None,
    store: ReferenceStore = Depends(get_store),
):
    """Search every kind at once."""
    return [
        {"kind": hit.kind.value, "record": hit.record.model_dump(mode="json", by_alias=True)}
        for hit in store.search_all(q, franchise=franchise, kind=kind)
    ]


@router.get("/wiki/{kind}")
async def wiki_list(
    kind: ReferenceKind,
    q: str = "",
    franchise: str | None = None,
    store: ReferenceStore = Depends(get_store),
):
    """Records of one kind matching q (all of them when q is empty)."""
    return [
        r.model_dump(mode="json", by_alias=True)
        for r in store.search(kind, q, franchise=franchise)
    ]


@router.get("/wiki/{kind}/{record_id}")
async def wiki_record(
    kind: ReferenceKind,
    record_id: str,
    store: ReferenceStore = Depends(get_store),
):
    """A single record plus its long-form sheet."""
    record = store.get(kind, record_id)
    if not record:
        raise HTTPException(404, "Record not found")
    return {"record": record.model_dump(mode="json", by_alias=True), "sheet": format_long(record)}
