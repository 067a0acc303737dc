import re
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from event_registration.domain import Registrant

PHONE_SEPARATORS = re.compile(r"[-\s]")
PHONE_PATTERN = re.compile(r"^\d{10}$")


class RegistrationRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    phone: str = Field(min_length=1, max_length=32)
    location: str = Field(min_length=1, max_length=200)

    @field_validator("name", "location")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("phone")
    @classmethod
    def ten_digit_phone(cls, value: str) -> str:
        value = value.strip()
        if not PHONE_PATTERN.match(PHONE_SEPARATORS.sub("", value)):
            raise ValueError("Please enter a valid 10-digit phone number")
        return value

    def to_registrant(self) -> Registrant:
        return Registrant(name=self.name, phone=self.phone, location=self.location)


class RegistrationOut(BaseModel):
    id: str
    event_id: str
    name: str
    phone: str
    location: str
    registration_date: datetime

    class Config:
        from_attributes = True
