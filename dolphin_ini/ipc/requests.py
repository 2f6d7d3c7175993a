from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from dolphin_ini.gecko.model import GeckoCode


class _Request(BaseModel):
    # Wire names follow the caller's camelCase convention.
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class FetchGeckoCodesRequest(_Request):
    ini_name: str = Field(alias="iniName", min_length=1)


class UpdateGeckosRequest(_Request):
    ini_name: str = Field(alias="iniName", min_length=1)
    codes: list[GeckoCode]


class FetchSysInisRequest(_Request):
    pass


class SectionRequest(_Request):
    path: str = Field(min_length=1)
    section: str


class KeyRequest(SectionRequest):
    key: str


class SetValueRequest(KeyRequest):
    value: str


class SetLinesRequest(SectionRequest):
    lines: list[str]
