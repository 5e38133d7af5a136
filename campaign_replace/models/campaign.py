"""
Campaign data models for the dotdigital API.

This module defines Pydantic models for campaigns and account information as
returned by the dotdigital v2 REST API. Field names follow Python conventions
and map to the API's camelCase JSON keys through aliases.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

API_ENDPOINT_PROPERTY = "ApiEndpoint"


class Campaign(BaseModel):
    """
    A dotdigital email campaign.

    Campaigns obtained from the list endpoint carry no content (both content
    fields are None) until fetched individually. Attributes that this tool does
    not interpret (subject, fromAddress, replyAction, status, ...) are kept as
    extra fields so a full campaign can be sent back on update unchanged.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: int = Field(..., gt=0)
    name: str = ""
    html_content: Optional[str] = None
    plain_text_content: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def name_or_empty(cls, v: Optional[str]) -> str:
        """The API may return a null name."""
        return "" if v is None else v

    @property
    def content_loaded(self) -> bool:
        """True when at least one content field has been fetched."""
        return self.html_content is not None or self.plain_text_content is not None

    def to_api_payload(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON body expected by the update endpoint."""
        return self.model_dump(by_alias=True, exclude_none=True)


class AccountProperty(BaseModel):
    """A single named property from the account-info response."""

    name: str
    type: str = "String"
    value: Optional[str] = None


class AccountInfo(BaseModel):
    """Account details returned when verifying API credentials."""

    model_config = ConfigDict(extra="ignore")

    id: int
    properties: list[AccountProperty] = Field(default_factory=list)

    def get_property(self, name: str) -> Optional[str]:
        """Return the value of a named property, or None if absent."""
        for prop in self.properties:
            if prop.name.lower() == name.lower():
                return prop.value
        return None

    @property
    def api_endpoint(self) -> Optional[str]:
        """Regional API host this account must be served from, if reported."""
        value = self.get_property(API_ENDPOINT_PROPERTY)
        return value.rstrip("/") if value else None
