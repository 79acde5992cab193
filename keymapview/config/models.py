"""Configuration models for the keymap parser."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class KnownKeyboard(BaseModel):
    """One entry of the known-board registry."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    keyword: str = Field(description="Substring searched in file path and content")
    name: str = Field(description="Display name of the board")
    is_split: bool = Field(default=True, description="Whether the board is split")

    @field_validator("keyword")
    @classmethod
    def validate_keyword(cls, v: str) -> str:
        """Keywords are matched case-insensitively."""
        if not v:
            raise ValueError("Keyword must not be empty")
        return v.lower()


class ParserConfig(BaseModel):
    """Tunable settings of the keymap parser.

    The split-detection thresholds are heuristics: they were chosen to match
    common split boards and can be adjusted per user.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    split_gap_ratio: float = Field(
        default=1.5,
        gt=1.0,
        description="Middle gap must exceed this multiple of the mean other gap",
    )
    split_majority_ratio: float = Field(
        default=0.5,
        ge=0.0,
        lt=1.0,
        description="Fraction of analyzed lines that must show a middle gap",
    )
    split_min_tokens: int = Field(
        default=6,
        ge=2,
        description="Minimum bindings on a line for it to be analyzed",
    )
    default_split: bool = Field(
        default=True,
        description="Split flag used when gap analysis is inconclusive",
    )
    extra_keyboards: list[KnownKeyboard] = Field(
        default_factory=list,
        description="Additional boards, checked before the built-in registry",
    )
