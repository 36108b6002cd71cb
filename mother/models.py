"""Core domain models.

Reference records, transcript messages, provider results, user settings and
the router's session state. Pydantic is used for validation and
serialisation at every data boundary.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Reference records
# ---------------------------------------------------------------------------

class ReferenceKind(str, Enum):
    PLANET = "planet"
    ALIEN = "alien"
    CHARACTER = "character"
    ORGANIZATION = "organization"
    SPACESHIP = "spaceship"
    MOVIE = "movie"


class ReferenceRecord(BaseModel):
    """Fields shared by every reference record. Records never change after seeding."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    KIND: ClassVar[ReferenceKind]
    # Fields concatenated into the search blob, in order
    SEARCH_FIELDS: ClassVar[tuple[str, ...]] = ("name", "description")

    id: str
    name: str
    franchise: str
    description: str
    first_appearance: str | None = None
    history: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def search_blob(self) -> str:
        """All searchable text, one field (or list item) per line, lowercased."""
        parts: list[str] = []
        for field in self.SEARCH_FIELDS:
            value = getattr(self, field)
            if value is None:
                continue
            if isinstance(value, list):
                parts.extend(str(v) for v in value)
            else:
                parts.append(str(value))
        return "\n".join(parts).lower()

    def classifier(self) -> str:
        """Short tag shown in listings after the franchise."""
        return ""


class Planet(ReferenceRecord):
    KIND = ReferenceKind.PLANET
    SEARCH_FIELDS = (
        "name", "description", "classification", "location",
        "notable_features", "notable_locations", "inhabitants",
    )

    type: Literal["planet", "moon", "asteroid", "space_station", "artificial"]
    classification: str | None = None
    location: str | None = None
    atmosphere: str | None = None
    gravity: str | None = None
    climate: str | None = None
    population: str | None = None
    government: str | None = None
    technology_level: str | None = None
    notable_features: list[str] = Field(default_factory=list)
    notable_locations: list[str] = Field(default_factory=list)
    inhabitants: list[str] = Field(default_factory=list)

    def classifier(self) -> str:
        return self.type.replace("_", " ").upper()


class Alien(ReferenceRecord):
    KIND = ReferenceKind.ALIEN
    SEARCH_FIELDS = (
        "name", "species", "description", "classification", "physiology",
        "culture", "notable_abilities", "weaknesses", "notable_individuals",
    )

    species: str
    home_planet: str | None = None
    classification: str | None = None
    physiology: str | None = None
    lifespan: str | None = None
    intelligence_level: str | None = None
    technology_level: str | None = None
    culture: str | None = None
    government: str | None = None
    language: str | None = None
    notable_abilities: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    notable_individuals: list[str] = Field(default_factory=list)

    def classifier(self) -> str:
        return (self.classification or self.species).upper()


class Character(ReferenceRecord):
    KIND = ReferenceKind.CHARACTER
    SEARCH_FIELDS = ("name", "description", "species", "occupation", "affiliation")

    species: str | None = None
    occupation: str | None = None
    affiliation: str | None = None
    status: str | None = None

    def classifier(self) -> str:
        return (self.occupation or self.species or "").upper()


class Organization(ReferenceRecord):
    KIND = ReferenceKind.ORGANIZATION
    SEARCH_FIELDS = ("name", "description", "type", "leader")

    type: str
    headquarters: str | None = None
    leader: str | None = None

    def classifier(self) -> str:
        return self.type.upper()


class Spaceship(ReferenceRecord):
    KIND = ReferenceKind.SPACESHIP
    SEARCH_FIELDS = ("name", "description", "ship_class", "owner", "operator")

    ship_class: str | None = Field(default=None, alias="class")
    registry: str | None = None
    owner: str | None = None
    operator: str | None = None
    status: str | None = None

    def classifier(self) -> str:
        return (self.ship_class or "").upper()


class Movie(ReferenceRecord):
    KIND = ReferenceKind.MOVIE
    SEARCH_FIELDS = (
        "name", "description", "director", "release_year",
        "plot_summary", "characters", "setting",
    )

    director: str | None = None
    release_year: int | None = None
    plot_summary: str | None = None
    characters: list[str] = Field(default_factory=list)
    setting: str | None = None

    def classifier(self) -> str:
        return str(self.release_year) if self.release_year else ""


RECORD_TYPES: dict[ReferenceKind, type[ReferenceRecord]] = {
    cls.KIND: cls for cls in (Planet, Alien, Character, Organization, Spaceship, Movie)
}


# ---------------------------------------------------------------------------
# Transcript
# ---------------------------------------------------------------------------

Sender = Literal["user", "mother"]


class Message(BaseModel):
    """A single entry in the chat transcript. Append-only."""

    model_config = ConfigDict(frozen=True)

    id: str
    content: str
    sender: Sender
    timestamp: datetime = Field(default_factory=_utcnow)


class MessageView(BaseModel):
    """What the transcript shows for a message right now."""

    id: str
    sender: Sender
    content: str  # visible prefix while streaming, full text otherwise
    timestamp: datetime
    streaming: bool = False
    copyable: bool = False


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------

AIProvider = Literal["ollama", "openai", "google", "anthropic"]


class ModelInfo(BaseModel):
    name: str
    size: int = 0  # bytes
    modified_at: str = ""


class ProviderReply(BaseModel):
    """Normalised result of one chat completion call."""

    content: str = ""
    error: str | None = None


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

ColorTheme = Literal["green", "yellow", "blue", "red", "purple", "cyan", "alienEarth"]


class Settings(BaseModel):
    ai_provider: AIProvider = "ollama"
    ollama_url: str = "http://localhost:11434"
    openai_api_key: str = ""
    google_api_key: str = ""
    anthropic_api_key: str = ""
    current_model: str = "llama3.1:8b"
    color_theme: ColorTheme = "green"
    enable_sounds: bool = True
    show_scanlines: bool = True


# ---------------------------------------------------------------------------
# Router state
# ---------------------------------------------------------------------------

class SessionState(BaseModel):
    """Everything the command router remembers between two inputs."""

    model_config = ConfigDict(frozen=True)

    awaiting_model_selection: bool = False
    boot_in_progress: bool = False
    available_models: list[ModelInfo] = Field(default_factory=list)
