"""Repository descriptor models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class RepoOwner(BaseModel):
    """Account owning a repository."""

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, description="GraphQL node id of the account")
    login: str = Field(..., min_length=1, description="Account login")


class RepoInfo(BaseModel):
    """A remote repository as reported by `gh repo list`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1, description="Short name, used as the local folder name")
    full_name: str = Field(
        ..., alias="nameWithOwner", min_length=1, description="Repository in format owner/name"
    )
    owner: RepoOwner

    @property
    def owner_login(self) -> str:
        """Login of the owning account."""
        return self.owner.login


RepoList = TypeAdapter(list[RepoInfo])


def parse_repo_list(data: str | bytes) -> list[RepoInfo]:
    """Parse the JSON array printed by `gh repo list --json nameWithOwner,name,owner`."""
    return RepoList.validate_json(data)
