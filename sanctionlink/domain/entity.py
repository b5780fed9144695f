"""Entity domain models as returned by the OpenSanctions API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_value_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return [v for v in value if v is not None]
    return [value]


def _normalize_properties(value: Any) -> dict[str, list[Any]]:
    if not isinstance(value, dict):
        return {}
    return {str(key): _as_value_list(values) for key, values in value.items()}


class EntityRecord(BaseModel):
    """An immutable entity snapshot.

    Attributes:
        id: Globally unique, stable identifier
        caption: Display string, may be empty
        schema_name: Schema tag such as "Person" or "Ownership" (``schema`` on the wire)
        properties: Property name to ordered values; each value is either a bare
            identifier string or an embedded reference object
        datasets: Source dataset tags
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: str
    caption: str = ""
    schema_name: str = Field(default="", alias="schema")
    properties: dict[str, list[Any]] = {}
    datasets: list[str] = []
    referents: list[str] = []
    target: bool = False
    first_seen: str | None = None
    last_seen: str | None = None
    last_change: str | None = None

    @field_validator("properties", mode="before")
    @classmethod
    def _coerce_properties(cls, value: Any) -> dict[str, list[Any]]:
        return _normalize_properties(value)

    @field_validator("caption", mode="before")
    @classmethod
    def _coerce_caption(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""


class EmbeddedReference(BaseModel):
    """A property value carrying a nested entity instead of a bare identifier."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: str
    caption: str | None = None
    schema_name: str | None = Field(default=None, alias="schema")
    properties: dict[str, list[Any]] = {}

    @field_validator("properties", mode="before")
    @classmethod
    def _coerce_properties(cls, value: Any) -> dict[str, list[Any]]:
        return _normalize_properties(value)


class SearchParams(BaseModel):
    query: str = ""
    schema_name: str | None = Field(default=None, alias="schema")
    dataset: str | None = None
    countries: list[str] = []
    topics: list[str] = []
    limit: int = 20
    offset: int = 0

    model_config = ConfigDict(populate_by_name=True)


class SearchTotal(BaseModel):
    value: int = 0
    relation: str = "eq"


class FacetValue(BaseModel):
    name: str
    label: str = ""
    count: int = 0


class Facet(BaseModel):
    label: str = ""
    values: list[FacetValue] = []


class SearchResponse(BaseModel):
    total: SearchTotal = SearchTotal()
    limit: int = 0
    offset: int = 0
    results: list[EntityRecord] = []
    facets: dict[str, Facet] | None = None


class ConnectionStatus(BaseModel):
    """Outcome of a connectivity check against the API."""

    success: bool
    total_entities: int | None = None
    error: str | None = None
