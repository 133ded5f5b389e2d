"""Pydantic models shared across HTTP routes."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class NamingRequest(BaseModel):
    """Schema describing the payload used to generate names."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    prefix: str | None = Field(default=None, description="Leading segment (letters, digits, hyphens).")
    suffix: str | None = Field(default=None, description="Trailing segment, e.g. an instance number like 01.")
    environment: str | None = Field(default=None, description="Deployment environment (e.g. prod, dev).")
    region: str | None = Field(default=None, description="Azure region short code (e.g. weu).")
    custom_resource_types: Dict[str, str] = Field(
        default_factory=dict,
        description="Resource type to short-name overrides merged over the built-in table.",
        alias="customResourceTypes",
    )
    name_suffixes: List[str] = Field(
        default_factory=list,
        description="Suffixes used to produce name variants per resource type.",
        alias="nameSuffixes",
    )
    created_on: str | None = Field(
        default=None,
        description="Timestamp for the CreatedOn tag. Defaults to the current UTC time.",
        alias="createdOn",
    )
    tags: Dict[str, str] = Field(default_factory=dict, description="Caller tags merged with CreatedOn.")


class NamingComponentsModel(BaseModel):
    prefix: str | None = None
    suffix: str | None = None
    environment: str | None = None
    region: str | None = None


class NamingResponse(BaseModel):
    """Every derived name for a request."""

    components: NamingComponentsModel
    resourceTypes: Dict[str, str]
    composed: Dict[str, str] = Field(..., description="Names before sanitization.")
    names: Dict[str, Dict[str, str]] = Field(..., description="Sanitization class to resource type to name.")
    nameSuffixes: List[str] = Field(default_factory=list)
    variants: Dict[str, Dict[str, str]] = Field(..., description="Resource type to suffix to name.")
    tags: Dict[str, str] = Field(default_factory=dict)


class NameLookupResponse(BaseModel):
    resourceType: str
    shortName: str
    class_: str = Field(..., alias="class")
    composed: str
    name: str
    variants: Dict[str, str] = Field(default_factory=dict)
    tags: Dict[str, str] = Field(default_factory=dict)


class SanitizeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Name to sanitize.")
    class_: str = Field(default="general", alias="class", description="Sanitization class (general, storage, ...).")


class SanitizeResponse(BaseModel):
    name: str
    class_: str = Field(..., alias="class")
    sanitized: str


class SanitizationRuleResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    class_: str = Field(..., alias="class")
    allowedCharacters: str
    maxLength: int
    lowercase: bool
    outputPattern: str
    description: str | None = None
