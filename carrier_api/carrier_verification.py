# carrier_api/carrier_verification.py
"""
MC number cleanup, FMCSA record mapping and the eligibility rule.

Everything here is pure; the network call lives in carrier_api/fmcsa_client.py.
"""
from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_NON_DIGITS = re.compile(r"\D")

AUTHORIZED = "AUTHORIZED"
ACTIVE = "ACTIVE"


# --- Errors ---

class CarrierVerificationError(Exception):
    """Base class for everything the verify pipeline raises on purpose."""


class InvalidMcNumber(CarrierVerificationError):
    """Caller sent something we can't look up. Maps to a 400."""
    error = "Invalid MC number"
    message = "MC number must contain at least one digit"

    def __init__(self, message: Optional[str] = None):
        if message:
            self.message = message
        super().__init__(self.message)


class MissingIdentifier(InvalidMcNumber):
    error = "MC number is required"
    message = "Please provide mc_number as parameter"


class InvalidIdentifier(InvalidMcNumber):
    pass


class RegistryUnavailable(CarrierVerificationError):
    """FMCSA answered with a non-2xx status, bad JSON, or not at all."""


# --- Models ---

class CarrierRecord(BaseModel):
    """The `carrier` object from QCMobile. Every field may be missing."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    legal_name: Optional[str] = Field(default=None, alias="legalName")
    dba_name: Optional[str] = Field(default=None, alias="dbaName")
    carrier_operation_status: Optional[str] = Field(default=None, alias="carrierOperationStatus")
    common_authority_status: Optional[str] = Field(default=None, alias="commonAuthorityStatus")
    safety_rating: Optional[str] = Field(default=None, alias="safetyRating")
    phy_phone: Optional[str] = Field(default=None, alias="phyPhone")
    phy_street: Optional[str] = Field(default=None, alias="phyStreet")
    phy_city: Optional[str] = Field(default=None, alias="phyCity")
    phy_state: Optional[str] = Field(default=None, alias="phyState")
    phy_zipcode: Optional[str] = Field(default=None, alias="phyZipcode")

    @field_validator("*", mode="before")
    @classmethod
    def _scalar_to_str(cls, v: Any) -> Any:
        # FMCSA occasionally sends numbers (zip codes, phones)
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (int, float)):
            return str(v)
        return None


class Address(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None


class VerificationResult(BaseModel):
    verified: bool = True
    mc_number: str
    company_name: str = "Unknown"
    dba_name: Optional[str] = None
    status: str = "Unknown"
    authority_status: str = "Unknown"
    safety_rating: str = "Not Rated"
    phone: Optional[str] = None
    address: Address = Field(default_factory=Address)
    eligibility_summary: str
    raw_data: Any = None


# --- Pipeline pieces ---

def normalize_mc_number(raw: Any) -> str:
    """
    Strip everything that isn't a digit ("MC-317740" -> "317740").
    Raises MissingIdentifier for empty input, InvalidIdentifier when no digits remain.
    """
    if not raw:
        raise MissingIdentifier()

    # an object has no usable digits, whatever its repr contains
    if isinstance(raw, dict):
        raise InvalidIdentifier()

    if isinstance(raw, float) and raw.is_integer():
        raw = int(raw)

    cleaned = _NON_DIGITS.sub("", str(raw))
    if not cleaned:
        raise InvalidIdentifier()
    return cleaned


def classify_eligibility(status: Optional[str], authority: Optional[str], safety_rating: Optional[str]) -> str:
    """Eligibility text for a carrier that exists. Exact, case-sensitive matches only."""
    if status == AUTHORIZED and authority == ACTIVE:
        return f"Eligible carrier with {safety_rating or 'no'} safety rating"
    elif status != AUTHORIZED:
        return "Not authorized for operations"
    elif authority != ACTIVE:
        return "Authority status inactive"
    else:
        return "Verification incomplete - manual review needed"


def generate_eligibility_summary(carrier: Optional[CarrierRecord]) -> str:
    if carrier is None:
        return "Carrier not found"
    return classify_eligibility(
        carrier.carrier_operation_status,
        carrier.common_authority_status,
        carrier.safety_rating,
    )


def extract_carrier(fmcsa_data: Any) -> Optional[CarrierRecord]:
    """Pull the `carrier` object out of a QCMobile body; None means no match."""
    if not isinstance(fmcsa_data, dict):
        return None
    carrier = fmcsa_data.get("carrier")
    if not isinstance(carrier, dict):
        return None
    return CarrierRecord.model_validate(carrier)


def build_verification_result(fmcsa_data: Any, mc_number: str) -> VerificationResult:
    """Reshape a QCMobile response. A missing carrier still comes back verified=True."""
    carrier = extract_carrier(fmcsa_data)
    c = carrier or CarrierRecord()

    return VerificationResult(
        verified=True,
        mc_number=mc_number,
        company_name=c.legal_name or "Unknown",
        dba_name=c.dba_name or None,
        status=c.carrier_operation_status or "Unknown",
        authority_status=c.common_authority_status or "Unknown",
        safety_rating=c.safety_rating or "Not Rated",
        phone=c.phy_phone or None,
        address=Address(
            street=c.phy_street or None,
            city=c.phy_city or None,
            state=c.phy_state or None,
            zip=c.phy_zipcode or None,
        ),
        eligibility_summary=generate_eligibility_summary(carrier),
        raw_data=fmcsa_data,
    )
