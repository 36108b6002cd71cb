"""Text rendering for reference-database replies.

Long-form record sheets are Handlebars templates rendered with pybars;
listings and fixed notices are plain strings.
"""

from collections.abc import Callable
from typing import Any

import pybars

from mother.models import ReferenceKind, ReferenceRecord
from mother.reference import SearchHit


_compiler = pybars.Compiler()
_cache: dict[str, Callable] = {}


class TemplateError(Exception):
    """Raised when a Handlebars template fails to compile or render."""


def _helper_upper(this, value):
    """{{{upper field}}} — uppercase a value, empty for missing fields."""
    return str(value).upper() if value is not None else ""


_HELPERS: dict[str, Callable] = {
    "upper": _helper_upper,
}


def render_template(template_str: str, context: dict[str, Any]) -> str:
    """Compile and render a Handlebars template with the given context.

    Templates are cached by source string to avoid recompilation.
    """
    try:
        compiled = _cache.get(template_str)
        if compiled is None:
            compiled = _compiler.compile(template_str)
            _cache[template_str] = compiled
        return str(compiled(context, helpers=_HELPERS))
    except Exception as e:
        raise TemplateError(f"Template error: {e}") from e


# ── Record sheets ────────────────────────────────────────

RECORD_SHEET = (
    "{{{heading}}}: {{{upper name}}}\n"
    "FRANCHISE: {{{franchise}}}\n"
    "{{#each rows}}{{{label}}}: {{{value}}}\n{{/each}}"
    "{{#each lists}}{{{label}}}:\n{{#each items}}  - {{{this}}}\n{{/each}}{{/each}}"
    "\n{{{description}}}"
)

KIND_LABELS: dict[ReferenceKind, str] = {
    ReferenceKind.PLANET: "PLANETARY",
    ReferenceKind.ALIEN: "XENOBIOLOGY",
    ReferenceKind.CHARACTER: "PERSONNEL",
    ReferenceKind.ORGANIZATION: "ORGANIZATION",
    ReferenceKind.SPACESHIP: "VESSEL",
    ReferenceKind.MOVIE: "ARCHIVE FILM",
}

# Scalar fields shown on each sheet, in order
SHEET_FIELDS: dict[ReferenceKind, tuple[str, ...]] = {
    ReferenceKind.PLANET: (
        "type", "classification", "location", "atmosphere", "gravity", "climate",
        "population", "government", "technology_level", "first_appearance", "history",
    ),
    ReferenceKind.ALIEN: (
        "species", "classification", "home_planet", "physiology", "lifespan",
        "intelligence_level", "technology_level", "culture", "government",
        "language", "first_appearance", "history",
    ),
    ReferenceKind.CHARACTER: (
        "species", "occupation", "affiliation", "status", "first_appearance", "history",
    ),
    ReferenceKind.ORGANIZATION: (
        "type", "headquarters", "leader", "first_appearance", "history",
    ),
    ReferenceKind.SPACESHIP: (
        "ship_class", "registry", "owner", "operator", "status",
        "first_appearance", "history",
    ),
    ReferenceKind.MOVIE: (
        "director", "release_year", "setting", "plot_summary",
    ),
}

SHEET_LISTS: dict[ReferenceKind, tuple[str, ...]] = {
    ReferenceKind.PLANET: ("notable_features", "notable_locations", "inhabitants"),
    ReferenceKind.ALIEN: ("notable_abilities", "weaknesses", "notable_individuals"),
    ReferenceKind.MOVIE: ("characters",),
}

_LABEL_OVERRIDES = {"ship_class": "CLASS"}


def _label(field: str) -> str:
    return _LABEL_OVERRIDES.get(field, field.replace("_", " ").upper())


def record_context(record: ReferenceRecord) -> dict[str, Any]:
    """Template variables for one record sheet. Empty fields are left out."""
    kind = record.KIND
    rows = []
    for field in SHEET_FIELDS[kind]:
        value = getattr(record, field)
        if value in (None, ""):
            continue
        if field == "type" and kind is ReferenceKind.PLANET:
            value = str(value).replace("_", " ").upper()
        rows.append({"label": _label(field), "value": str(value)})
    lists = []
    for field in SHEET_LISTS.get(kind, ()):
        items = getattr(record, field)
        if items:
            lists.append({"label": _label(field), "items": list(items)})
    return {
        "heading": f"{KIND_LABELS[kind]} RECORD",
        "name": record.name,
        "franchise": record.franchise,
        "rows": rows,
        "lists": lists,
        "description": record.description,
    }


def format_long(record: ReferenceRecord) -> str:
    return render_template(RECORD_SHEET, record_context(record))


def format_short(record: ReferenceRecord, tag: str | None = None) -> str:
    """One listing line: • NAME (FRANCHISE) — CLASSIFIER."""
    tag = record.classifier() if tag is None else tag
    line = f"• {record.name.upper()} ({record.franchise})"
    return f"{line} — {tag}" if tag else line


# ── Replies ──────────────────────────────────────────────


def format_results(kind: ReferenceKind, query: str, records: list[ReferenceRecord]) -> str:
    """Reply for a kind-specific query: sheet for one hit, listing for several."""
    label = KIND_LABELS[kind]
    if not records:
        return f'NO DATA FOUND FOR "{query.upper()}" IN {label} DATABASE.'
    if len(records) == 1:
        return format_long(records[0])
    return format_listing(kind, records)


def format_listing(kind: ReferenceKind, records: list[ReferenceRecord]) -> str:
    label = KIND_LABELS[kind]
    if not records:
        return f"NO {label} RECORDS ON FILE."
    lines = [f"{len(records)} {label} RECORDS FOUND:"]
    lines.extend(format_short(r) for r in records)
    return "\n".join(lines)


def format_hits(query: str, hits: list[SearchHit]) -> str:
    """Reply for a cross-database /wiki query."""
    if not hits:
        return f'NO DATA FOUND FOR "{query.upper()}" IN ANY DATABASE.'
    if len(hits) == 1:
        return format_long(hits[0].record)
    lines = [f"{len(hits)} RECORDS FOUND ACROSS ALL DATABASES:"]
    lines.extend(format_short(h.record, KIND_LABELS[h.kind]) for h in hits)
    return "\n".join(lines)


COMMAND_HELP = (
    ("/wiki [query]", "SEARCH ALL DATABASES"),
    ("/planets [query]", "PLANETARY DATABASE"),
    ("/aliens [query]", "XENOBIOLOGY DATABASE"),
    ("/characters [query]", "PERSONNEL DATABASE"),
    ("/organizations [query]", "ORGANIZATION DATABASE"),
    ("/spaceships [query]", "VESSEL DATABASE"),
    ("/movies [query]", "ARCHIVE FILM DATABASE"),
)


def format_help(counts: dict[ReferenceKind, int]) -> str:
    lines = ["WEYLAND-YUTANI REFERENCE DATABASE", "AVAILABLE QUERIES:"]
    lines.extend(f"{cmd} - {desc}" for cmd, desc in COMMAND_HELP)
    lines.append("OMIT THE QUERY TO LIST EVERY RECORD.")
    lines.append("")
    lines.append("RECORDS ON FILE:")
    lines.extend(f"{KIND_LABELS[kind]}: {count}" for kind, count in counts.items())
    return "\n".join(lines)
