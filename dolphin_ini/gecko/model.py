from __future__ import annotations

from pydantic import BaseModel, Field


class GeckoCodeLine(BaseModel):
    """One line of a Gecko code body.

    `text` is the line as written; `address` and `data` are set when the line
    is the usual pair of 8-digit hex words.
    """

    text: str
    address: str | None = None
    data: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.address is not None and self.data is not None


class GeckoCode(BaseModel):
    name: str
    creator: str | None = None
    notes: list[str] = Field(default_factory=list)
    code_lines: list[GeckoCodeLine] = Field(default_factory=list)
    enabled: bool = False
    default_enabled: bool = False
    user_defined: bool = False
