"""Journal request/response schemas."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationInfo,
    field_validator,
    model_validator,
)

from daily_journal.domains.journal.constants import (
    CONTENT_MAX_LENGTH,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_SORT_FIELD,
    MAX_PAGE_SIZE,
    MAX_TAGS,
    SORT_FIELDS,
    TAG_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Category,
    Mood,
)

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=TITLE_MAX_LENGTH)]
Content = Annotated[str, StringConstraints(min_length=1, max_length=CONTENT_MAX_LENGTH)]
Tag = Annotated[str, StringConstraints(strip_whitespace=True, max_length=TAG_MAX_LENGTH)]

# Columns that may be omitted on update but never cleared.
NON_NULLABLE_FIELDS = ("title", "content", "mood", "category", "tags", "entry_date", "is_private", "is_favorite")


def to_local_naive(value: datetime) -> datetime:
    """Entries are stored on the server-local wall clock."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def parse_date_bound(value: Any, *, end_of_day: bool = False) -> Optional[datetime]:
    """Parse a filter bound; a bare ``YYYY-MM-DD`` end bound covers the whole day."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_local_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time.max if end_of_day else time.min)
    if not isinstance(value, str):
        raise ValueError("invalid date")
    raw = value.strip()
    try:
        if len(raw) == 10:
            day = date.fromisoformat(raw)
            return datetime.combine(day, time.max if end_of_day else time.min)
        return to_local_naive(datetime.fromisoformat(raw))
    except ValueError:
        raise ValueError(f"invalid date: {raw!r}") from None


class Coordinates(BaseModel):
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class Location(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100)
    coordinates: Optional[Coordinates] = None


class Weather(BaseModel):
    condition: Optional[str] = Field(default=None, max_length=50)
    temperature: Optional[float] = None
    description: Optional[str] = Field(default=None, max_length=100)
    humidity: Optional[float] = None
    wind_speed: Optional[float] = None


class Sentiment(BaseModel):
    score: Optional[float] = Field(default=None, ge=-1, le=1)
    magnitude: Optional[float] = Field(default=None, ge=0)


class Attachment(BaseModel):
    """Attachment metadata; file storage lives elsewhere."""

    model_config = ConfigDict(extra="allow")

    filename: Optional[str] = None
    original_name: Optional[str] = None
    mimetype: Optional[str] = None
    size: Optional[int] = Field(default=None, ge=0)
    url: Optional[str] = None


class EntryCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: Title
    content: Content
    mood: Mood
    category: Category
    tags: List[Tag] = Field(default_factory=list, max_length=MAX_TAGS)
    entry_date: Optional[datetime] = None
    is_private: bool = True
    is_favorite: bool = False
    # Accepted for client compatibility; recomputed from content on save.
    word_count: Optional[int] = Field(default=None, ge=0)
    location: Optional[Location] = None
    weather: Optional[Weather] = None
    sentiment: Optional[Sentiment] = None
    attachments: List[Attachment] = Field(default_factory=list)

    @field_validator("content")
    @classmethod
    def reject_blank_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("content must not be blank")
        return v


class EntryUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: Optional[Title] = None
    content: Optional[Content] = None
    mood: Optional[Mood] = None
    category: Optional[Category] = None
    tags: Optional[List[Tag]] = Field(default=None, max_length=MAX_TAGS)
    entry_date: Optional[datetime] = None
    is_private: Optional[bool] = None
    is_favorite: Optional[bool] = None
    word_count: Optional[int] = Field(default=None, ge=0)
    location: Optional[Location] = None
    weather: Optional[Weather] = None
    sentiment: Optional[Sentiment] = None
    attachments: Optional[List[Attachment]] = None
    # Optimistic concurrency: when given, must equal the stored version.
    version: Optional[int] = Field(default=None, ge=1)

    @field_validator("content")
    @classmethod
    def reject_blank_content(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("content must not be blank")
        return v

    @model_validator(mode="after")
    def reject_cleared_required_fields(self) -> "EntryUpdate":
        for name in NON_NULLABLE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> Dict[str, Any]:
        """Fields the caller actually sent, minus control fields."""
        data = self.model_dump(exclude_unset=True, exclude={"version", "word_count"})
        for key in ("location", "weather", "sentiment"):
            if data.get(key) is not None:
                data[key] = getattr(self, key).model_dump(exclude_none=True)
        return data


class _DateRangeFilter(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    mood: Optional[Mood] = None
    category: Optional[Category] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator("mood", "category", mode="before")
    @classmethod
    def blank_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_bounds(cls, v: Any, info: ValidationInfo) -> Optional[datetime]:
        return parse_date_bound(v, end_of_day=info.field_name == "end_date")


class EntryListFilter(_DateRangeFilter):
    search: Optional[str] = None
    is_favorite: Optional[bool] = None
    sort_by: str = DEFAULT_SORT_FIELD
    sort_order: Literal["asc", "desc"] = "desc"
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @field_validator("search", "is_favorite", "sort_by", "sort_order", "page", "limit", mode="before")
    @classmethod
    def blank_is_default(cls, v: Any, info: ValidationInfo) -> Any:
        if isinstance(v, str) and not v.strip():
            return cls.model_fields[info.field_name].get_default()
        return v

    @field_validator("sort_by")
    @classmethod
    def known_sort_field(cls, v: str) -> str:
        if v not in SORT_FIELDS:
            raise ValueError(f"sort_by must be one of {', '.join(sorted(SORT_FIELDS))}")
        return v


class EntrySearchFilter(_DateRangeFilter):
    q: Optional[str] = None
    limit: int = Field(default=DEFAULT_SEARCH_LIMIT, ge=1, le=MAX_PAGE_SIZE)

    @field_validator("limit", mode="before")
    @classmethod
    def blank_limit(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return DEFAULT_SEARCH_LIMIT
        return v


class EntryResponse(BaseModel):
    id: int
    title: str
    content: str
    mood: str
    category: str
    tags: List[str]
    word_count: int
    reading_time: int
    entry_date: datetime
    is_private: bool
    is_favorite: bool
    attachments: List[Dict[str, Any]] = []
    location: Optional[Dict[str, Any]] = None
    weather: Optional[Dict[str, Any]] = None
    sentiment: Optional[Dict[str, Any]] = None
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
