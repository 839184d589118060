"""Pydantic models for the Sentry organization integration endpoints."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

log = logging.getLogger(__name__)


class SentryBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "Sentry %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class IntegrationProviderPayload(SentryBaseModel):
    key: str
    slug: str | None = None
    name: str | None = None
    can_add: bool | None = Field(default=None, alias="canAdd")
    can_disable: bool | None = Field(default=None, alias="canDisable")
    features: list[str] = Field(default_factory=list)


class OrganizationIntegrationPayload(SentryBaseModel):
    id: str
    name: str
    provider: IntegrationProviderPayload
    status: str | None = None
    icon: str | None = None
    domain_name: str | None = Field(default=None, alias="domainName")
    account_type: str | None = Field(default=None, alias="accountType")
    scopes: list[str] | None = None
    external_id: str | None = Field(default=None, alias="externalId")
    organization_id: int | None = Field(default=None, alias="organizationId")
    organization_integration_status: str | None = Field(
        default=None, alias="organizationIntegrationStatus"
    )
    grace_period_end: str | None = Field(default=None, alias="gracePeriodEnd")
    config_data: dict[str, Any] = Field(default_factory=dict, alias="configData")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        return str(value) if isinstance(value, int) else value

    @field_validator("config_data", mode="before")
    @classmethod
    def _empty_config(cls, value: object) -> object:
        return {} if value is None else value


class SentryErrorPayload(BaseModel):
    """Error body. ``detail`` is a string, or an object such as
    ``{"code": "sso-required", "message": ...}`` for organization-level refusals.
    """

    model_config = ConfigDict(extra="ignore")

    detail: str | dict[str, Any] | list[Any] | None = None

    def message(self) -> str | None:
        detail = self.detail
        if isinstance(detail, dict):
            message = detail.get("message") or detail.get("code")
            return str(message) if message else str(detail)
        if isinstance(detail, list):
            return "; ".join(str(item) for item in detail) or None
        return detail or None
