"""
Domain model for the copy/paste record.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Message(BaseModel):
    """The latest text copied by a user. One record per identifier."""

    model_config = ConfigDict(populate_by_name=True)

    identifier: str = Field(
        ...,
        serialization_alias="Identifier",
        validation_alias=AliasChoices("Identifier", "identifier"),
    )
    text: str = Field(
        "",
        serialization_alias="Text",
        validation_alias=AliasChoices("Text", "text"),
    )
    time: int = Field(
        0,
        serialization_alias="Time",
        validation_alias=AliasChoices("Time", "time"),
        description="Unix timestamp, in seconds, of the last write.",
    )


class CopyRequest(BaseModel):
    """JSON body accepted by ``POST /copy``."""

    identifier: str = Field("", validation_alias=AliasChoices("Identifier", "identifier"))
    text: str = Field("", validation_alias=AliasChoices("Text", "text"))


__all__ = ["CopyRequest", "Message"]
