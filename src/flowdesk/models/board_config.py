"""Configuration models for flowdesk.yml."""

from pydantic import BaseModel, Field, field_validator


def _validate_identifier(value: str, name: str = "ID") -> str:
    """Validate an identifier is lowercase alphanumeric with underscores."""
    if not value:
        raise ValueError(f"{name} cannot be empty")
    if not value[0].isalpha():
        raise ValueError(f"{name} must start with a letter")
    if not all(c.isalnum() or c == "_" for c in value):
        raise ValueError(f"{name} must be alphanumeric with underscores only")
    if value != value.lower():
        raise ValueError(f"{name} must be lowercase")
    return value


def _validate_alias_list(aliases: list[str], alias_type: str = "Alias") -> list[str]:
    """Validate a list of aliases follow identifier format rules."""
    for alias in aliases:
        _validate_identifier(alias, f"{alias_type} '{alias}'")
    return aliases


def _check_aliases(ids: list[str], aliases: list[str], label: str) -> None:
    """Aliases must not shadow an ID or repeat."""
    for alias in aliases:
        if alias in ids:
            raise ValueError(f"{label} alias '{alias}' conflicts with {label.lower()} ID")
    if len(aliases) != len(set(aliases)):
        raise ValueError(f"Duplicate {label.lower()} alias found")


def _normalize(value: str) -> str:
    """Map a display label like "In Progress" to identifier form."""
    return "_".join(value.strip().lower().replace("-", " ").split())


class ColumnConfig(BaseModel):
    """Configuration for a single board column (one task status)."""

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    status_alias: list[str] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate column ID is lowercase with underscores only."""
        return _validate_identifier(v, "Column ID")

    @field_validator("status_alias")
    @classmethod
    def validate_aliases(cls, v: list[str]) -> list[str]:
        """Validate that aliases follow column ID format rules."""
        return _validate_alias_list(v, "Alias")


class PriorityConfig(BaseModel):
    """Configuration for a single priority level.

    Priorities are ordered by position in the config list (first = lowest).
    """

    id: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1, description="Display label")
    priority_alias: list[str] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate priority ID is lowercase with underscores only."""
        return _validate_identifier(v, "Priority ID")

    @field_validator("priority_alias")
    @classmethod
    def validate_aliases(cls, v: list[str]) -> list[str]:
        """Validate that priority aliases follow identifier format rules."""
        return _validate_alias_list(v, "Priority alias")


class BoardConfig(BaseModel):
    """Configuration for board columns and priorities."""

    columns: list[ColumnConfig] = Field(..., min_length=2, max_length=8)
    priorities: list[PriorityConfig] = Field(default_factory=list)

    @field_validator("columns")
    @classmethod
    def validate_columns(cls, v: list[ColumnConfig]) -> list[ColumnConfig]:
        """Validate column constraints."""
        ids = [col.id for col in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Column IDs must be unique")

        aliases = [alias for col in v for alias in col.status_alias]
        _check_aliases(ids, aliases, "Column")
        return v

    @field_validator("priorities")
    @classmethod
    def validate_priorities(cls, v: list[PriorityConfig]) -> list[PriorityConfig]:
        """Validate priority constraints."""
        ids = [p.id for p in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Priority IDs must be unique")

        aliases = [alias for p in v for alias in p.priority_alias]
        _check_aliases(ids, aliases, "Priority")
        return v

    @property
    def column_ids(self) -> list[str]:
        """List of column IDs in display order."""
        return [col.id for col in self.columns]

    @property
    def priority_ids(self) -> list[str]:
        """List of priority IDs in order (first = lowest priority)."""
        return [p.id for p in self.priorities]

    @property
    def first_column(self) -> str:
        return self.columns[0].id

    @property
    def final_column(self) -> str:
        """The column that counts as finished work."""
        return self.columns[-1].id

    def get_title(self, column_id: str) -> str:
        """Get display title for a column ID."""
        for col in self.columns:
            if col.id == column_id:
                return col.title
        return column_id.replace("_", " ").title()

    def resolve_status(self, status: str) -> str:
        """
        Resolve a status to its canonical column ID.

        Accepts a column ID, an alias, or a column title in any case
        ("In Progress" -> "in_progress"). Unknown values are returned unchanged.
        """
        if status in self.column_ids:
            return status

        normalized = _normalize(status)
        for col in self.columns:
            if normalized == col.id or normalized in col.status_alias:
                return col.id
            if normalized == _normalize(col.title):
                return col.id

        return status

    def is_valid_status(self, status: str) -> bool:
        """Check if status resolves to a configured column."""
        return self.resolve_status(status) in self.column_ids

    def resolve_priority(self, priority_value: str) -> str:
        """Resolve a priority ID, alias or label to its canonical priority ID."""
        if priority_value in self.priority_ids:
            return priority_value

        normalized = _normalize(priority_value)
        for p in self.priorities:
            if normalized == p.id or normalized in p.priority_alias:
                return p.id

        return priority_value

    @classmethod
    def default(cls) -> "BoardConfig":
        """Return the default four-column workflow."""
        return cls(
            columns=[
                ColumnConfig(id="pending", title="Pending", status_alias=["todo"]),
                ColumnConfig(id="in_progress", title="In Progress", status_alias=["inprogress"]),
                ColumnConfig(id="review", title="Review"),
                ColumnConfig(id="completed", title="Completed", status_alias=["done"]),
            ],
            priorities=[
                PriorityConfig(id="low", label="Low"),
                PriorityConfig(id="medium", label="Medium"),
                PriorityConfig(id="high", label="High", priority_alias=["urgent"]),
            ],
        )


class FlowdeskConfig(BaseModel):
    """Root configuration from flowdesk.yml."""

    version: int = 1
    board: BoardConfig = Field(default_factory=BoardConfig.default)

    @classmethod
    def default(cls) -> "FlowdeskConfig":
        """Return default configuration."""
        return cls(board=BoardConfig.default())
