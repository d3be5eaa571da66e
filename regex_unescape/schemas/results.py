"""
Result schemas for regex-unescape JSON output.

Defines Pydantic models for the structured report printed by the CLI.
"""

from typing import Optional, List
from pydantic import BaseModel, Field

from ..scanner import EscapeKind, EscapeToken


class EscapeTokenModel(BaseModel):
    """
    One decoded step of the input.
    """

    kind: EscapeKind = Field(
        description="How the sequence was classified"
    )
    start: int = Field(
        ge=0,
        description="Start offset in the input (inclusive)"
    )
    end: int = Field(
        ge=0,
        description="End offset in the input (exclusive)"
    )
    source: str = Field(
        description="Input characters consumed by this step"
    )
    value: str = Field(
        description="Decoded output for this step (empty for a dangling backslash)"
    )

    @classmethod
    def from_token(cls, token: EscapeToken, text: str) -> "EscapeTokenModel":
        return cls(
            kind=token.kind,
            start=token.start,
            end=token.end,
            source=text[token.start:token.end],
            value=token.value,
        )


class UnescapeResult(BaseModel):
    """
    Decoded form of a single input.
    """

    input: str = Field(
        description="Escaped input text"
    )
    output: str = Field(
        description="Decoded literal text"
    )
    line: Optional[int] = Field(
        default=None,
        ge=1,
        description="1-based line number when decoding line by line"
    )
    tokens: Optional[List[EscapeTokenModel]] = Field(
        default=None,
        description="Per-step breakdown (if requested)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "input": "\\(a\\|b\\)\\x41",
                "output": "(a|b)A",
                "line": None,
            }
        }


class UnescapeReport(BaseModel):
    """
    Complete CLI report.
    """

    success: bool = Field(
        description="Whether every input was decoded"
    )
    message: str = Field(
        description="Status message or error description"
    )
    processing_time: float = Field(
        description="Total processing time in seconds"
    )
    results: List[UnescapeResult] = Field(
        default_factory=list,
        description="List of decoded inputs"
    )
