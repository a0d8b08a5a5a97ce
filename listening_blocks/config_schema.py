from __future__ import annotations

import re
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_FILENAME_RE = re.compile(r"^[^/\\]+$")


def _validate_filename(value: str) -> str:
    name = (value or "").strip()
    if not _FILENAME_RE.fullmatch(name):
        raise ValueError("must be a plain file name without directories")
    return name


PositiveInt = Annotated[int, Field(ge=1)]


class BlocksConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    default_topic: str = "Post"
    separator: str = "\nOR\n"

    @field_validator("default_topic")
    @classmethod
    def _topic_must_be_non_blank(cls, v: str) -> str:
        topic = (v or "").strip()
        if not topic:
            raise ValueError("must be a non-empty topic")
        return topic

    @field_validator("separator")
    @classmethod
    def _separator_must_be_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must be non-empty")
        return v


class TitlesConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_words: PositiveInt = 7
    min_words: PositiveInt = 4

    @model_validator(mode="after")
    def _min_must_fit_max(self) -> "TitlesConfig":
        if self.min_words > self.max_words:
            raise ValueError("min_words must be <= max_words")
        return self


class ExportConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    markdown_filename: str = "listening_blocks.md"
    workbook_filename: str = "listening_blocks.xlsx"

    @field_validator("markdown_filename", "workbook_filename")
    @classmethod
    def _plain_filename(cls, v: str) -> str:
        return _validate_filename(v)


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    blocks: BlocksConfig = Field(default_factory=BlocksConfig)
    titles: TitlesConfig = Field(default_factory=TitlesConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
