#!/usr/bin/env python3
"""Pydantic models for change sets, publish targets and publish outcomes."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from configs.config import Config

ChangeStatus = Literal["modified", "added", "deleted", "renamed"]


class ChangedFile(BaseModel):
    path: str = Field(min_length=1)
    status: ChangeStatus = "modified"
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    diff: str = ""
    content: Optional[str] = None

    model_config = {"frozen": True, "extra": "ignore"}


class ChangeSet(BaseModel):
    files: List[ChangedFile] = Field(default_factory=list)
    summary: str = ""
    branch_name: str
    base_branch: str = Config.DEFAULT_BASE_BRANCH
    total_files: int = 0
    truncated: bool = False

    model_config = {"frozen": True}

    @field_validator("files")
    @classmethod
    def _unique_paths(cls, files: List[ChangedFile]) -> List[ChangedFile]:
        seen = set()
        for f in files:
            if f.path in seen:
                raise ValueError(f"duplicate path in change set: {f.path}")
            seen.add(f.path)
        return files

    @model_validator(mode="after")
    def _check_total(self) -> "ChangeSet":
        if self.total_files and self.total_files < len(self.files):
            raise ValueError("total_files cannot be smaller than the number of retained files")
        return self

    @property
    def is_empty(self) -> bool:
        return not self.files

    def find(self, path: str) -> Optional[ChangedFile]:
        for f in self.files:
            if f.path == path:
                return f
        return None


class GitHubSettings(BaseModel):
    token: str
    owner: str
    repo: str
    base_branch: str = Config.DEFAULT_BASE_BRANCH
    head_branch: str = Config.CURRENT_BRANCH_SENTINEL


class PublishResult(BaseModel):
    success: bool
    url: Optional[str] = None
    error: Optional[str] = None
