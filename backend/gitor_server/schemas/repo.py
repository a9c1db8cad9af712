from pydantic import BaseModel, ConfigDict, Field


class TagRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    hash: str
    name: str


class RepositoryRead(BaseModel):
    """Repository snapshot as sent to clients.

    Keys are capitalized on the wire (Name, Branches, Remotes, Tags).
    """
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    name: str = Field(alias="Name")
    branches: list[str] = Field(default_factory=list, alias="Branches")
    remotes: list[str] = Field(default_factory=list, alias="Remotes")
    tags: list[TagRead] = Field(default_factory=list, alias="Tags")
