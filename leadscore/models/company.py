"""Company record models consumed from the directory."""

from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CompanySize(str, Enum):
    """Company size bucket."""

    SMALL = "S"
    MEDIUM = "M"
    LARGE = "L"


class VerificationStatus(str, Enum):
    """Directory verification state of a company."""

    NEW = "New"
    NEEDS_VERIFICATION = "NeedsVerification"
    ACTIVE = "Active"
    INVALID = "Invalid"
    ARCHIVED = "Archived"


def coerce_verification_status(value):
    """Map UI labels such as "Needs Verification" onto enum values."""
    if isinstance(value, str):
        compact = value.replace(" ", "").lower()
        for status in VerificationStatus:
            if status.value.lower() == compact:
                return status
    return value


class CompanyRecord(BaseModel):
    """A read-only company record from the directory."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: Optional[str] = Field(default=None, description="Directory identifier")
    name: str = Field(description="Company display name")
    registration_number: Optional[str] = Field(default=None, description="Registry number")

    # Attributes matched by scoring criteria
    industry: Optional[Union[str, list[str]]] = Field(
        default=None,
        description="Industry name or list of industry tags",
    )
    province: Optional[str] = None
    company_size: Optional[CompanySize] = None
    verification_status: Optional[VerificationStatus] = None

    # Contactability, derived from contacts
    has_phone: bool = False
    has_email: bool = False
    has_decision_maker: bool = False

    # Data quality
    data_completeness_percent: int = Field(default=0, ge=0, le=100)
    last_updated_at: Optional[datetime] = None

    @field_validator("verification_status", mode="before")
    @classmethod
    def _accept_status_label(cls, value):
        return coerce_verification_status(value)

    @property
    def industries(self) -> list[str]:
        """Industry tags as a list."""
        if self.industry is None:
            return []
        if isinstance(self.industry, str):
            return [self.industry]
        return list(self.industry)

    @property
    def search_text(self) -> list[str]:
        """Searchable text fields for keyword matching."""
        return [t for t in (self.name, self.registration_number) if t]
