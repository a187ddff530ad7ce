"""
Base models for IP-XACT metadata.

Provides shared base models with centralized configuration for all
schema classes, plus the VLNV identifier used as the universal
cross-reference key between documents.

Architecture Decision:
    Entities never hold direct references to one another. Every link
    (bus type, abstraction type, component reference, ...) is a
    ``LibraryRef`` that is converted to a ``VLNV`` explicitly and looked
    up in the definition registry. The object graph therefore has no
    cycles, and all entity models are frozen.
"""

from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class IpxactBaseModel(BaseModel):
    """Base model with shared configuration for all IP-XACT schema models.

    Provides camelCase aliasing and allows field population by either
    alias or Python name. Parsed metadata is immutable.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }


class StrictModel(IpxactBaseModel):
    """Base model that forbids unknown fields.

    Use for every schema entity: an unknown keyword here is a parser bug,
    not a vendor extension.
    """

    model_config = {
        **IpxactBaseModel.model_config,
        "extra": "forbid",
    }


class VLNV(BaseModel):
    """
    Vendor-Library-Name-Version identifier.

    Key of the definition registry. All four parts take part in equality
    and hashing, so two versions of a bus are distinct definitions.
    """

    vendor: str = Field(..., description="e.g. 'xilinx.com'")
    library: str = Field(..., description="e.g. 'interface' or 'interface.param'")
    name: str = Field(..., description="e.g. 'aximm_rtl'")
    version: str = Field(..., description="e.g. '1.0'")

    model_config = {"frozen": True}

    @field_validator("vendor", "library", "name", "version")
    @classmethod
    def validate_part(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"VLNV {info.field_name} is blank")
        return value

    @classmethod
    def from_string(cls, text: str) -> "VLNV":
        """Build an identifier from ``vendor:library:name:version``.

        >>> VLNV.from_string("xilinx.com:signal:clock_rtl:1.0").library
        'signal'
        """
        parts = text.split(":")
        if len(parts) != 4:
            raise ValueError(
                f"'{text}' is not a VLNV: expected 4 colon-separated parts, got {len(parts)}"
            )
        vendor, library, name, version = parts
        return cls(vendor=vendor, library=library, name=name, version=version)

    @property
    def full_name(self) -> str:
        return ":".join((self.vendor, self.library, self.name, self.version))

    def matches(self, vendor: str, library: str, name: str, version: Optional[str] = None) -> bool:
        """Check identity on vendor/library/name, and on version when given."""
        if (self.vendor, self.library, self.name) != (vendor, library, name):
            return False
        return version is None or self.version == version

    def __str__(self) -> str:
        return self.full_name


class LibraryRef(VLNV):
    """
    Reference to another definition by VLNV.

    Appears in documents as four namespace-qualified attributes
    (``spirit:vendor``, ``spirit:library``, ...). Convert with
    ``to_vlnv()`` before looking it up in the registry.
    """

    def to_vlnv(self) -> VLNV:
        """Return the plain identifier this reference points to."""
        return VLNV(
            vendor=self.vendor, library=self.library, name=self.name, version=self.version
        )
