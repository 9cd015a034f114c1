"""
Contact record model.

File: models/contact.py
Created: 2026-10-12
Last Modified: 2026-10-15
"""

import uuid
from typing import Any, Dict

import phonenumbers
from pydantic import BaseModel, ConfigDict, Field

from ..errors import ValidationError


def normalize_phone(raw: str) -> str:
    """
    Canonicalize a phone number for display.

    Only the decimal digits of the input are considered. When exactly ten
    remain they are formatted as (AAA) BBB-CCCC; anything else is returned
    exactly as given, punctuation included.

    Examples:
        >>> normalize_phone("555.123.4567")
        '(555) 123-4567'
        >>> normalize_phone("+44 20 7123 4567")
        '+44 20 7123 4567'
    """
    digits = phonenumbers.normalize_digits_only(raw)
    if len(digits) != 10:
        return raw
    return f"({digits[0:3]}) {digits[3:6]}-{digits[6:10]}"


def _new_id() -> str:
    return str(uuid.uuid4())


class Contact(BaseModel):
    """One person's entry in the phone book."""
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        extra='ignore'
    )

    id: str = Field(default_factory=_new_id, description="Opaque unique token assigned at creation", min_length=1)
    first_name: str = Field(..., description="Given name (required)", min_length=1)
    last_name: str = Field("", description="Family name")
    email: str = Field("", description="Email address")
    address: str = Field("", description="Postal address")
    phone_number: str = Field(..., description="Normalized phone number (required)", min_length=1)

    @classmethod
    def create(
        cls,
        first_name: str,
        last_name: str = "",
        email: str = "",
        address: str = "",
        phone_number: str = "",
    ) -> "Contact":
        """
        Build a new contact with a fresh id.

        Raises:
            ValidationError: if the first name or phone number is empty
        """
        first_name = (first_name or "").strip()
        phone_number = (phone_number or "").strip()

        if not first_name:
            raise ValidationError("First name is required")
        if not phone_number:
            raise ValidationError("Phone number is required")

        return cls(
            first_name=first_name,
            last_name=(last_name or "").strip(),
            email=(email or "").strip(),
            address=(address or "").strip(),
            phone_number=normalize_phone(phone_number),
        )

    def replace_fields(
        self,
        first_name: str,
        last_name: str = "",
        email: str = "",
        address: str = "",
        phone_number: str = "",
    ) -> "Contact":
        """Build the full replacement for this contact, keeping its id."""
        replacement = Contact.create(first_name, last_name, email, address, phone_number)
        return replacement.model_copy(update={"id": self.id})

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match over every text field."""
        needle = query.lower()
        return any(needle in value.lower() for value in self.searchable_fields())

    def searchable_fields(self) -> tuple:
        return (
            self.first_name,
            self.last_name,
            self.email,
            self.address,
            self.phone_number,
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_db_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for database insertion"""
        return {
            "uuid": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "address": self.address,
            "phone_number": self.phone_number,
        }

    @classmethod
    def from_db_dict(cls, data: Dict[str, Any]) -> "Contact":
        """Create a Contact from a database row dictionary"""
        data = dict(data)
        if "uuid" in data:
            data["id"] = data.pop("uuid")

        # NULL columns come back as None
        for text_field in ["last_name", "email", "address"]:
            if data.get(text_field) is None:
                data[text_field] = ""

        return cls(**data)
