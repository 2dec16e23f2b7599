"""Student profile models.

Profile fields are stored as a single JSON document. Field content is not
validated beyond basic types.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from mentor.core.ids import canonical_id
from mentor.core.model import StrictModel


class FullName(StrictModel):
    first_name: str | None = Field(default=None, alias="firstName")
    middle_name: str | None = Field(default=None, alias="middleName")
    last_name: str | None = Field(default=None, alias="lastName")


class StudentProfileData(StrictModel):
    """Editable profile fields."""

    full_name: FullName | None = Field(default=None, alias="fullName")
    department: str | None = None
    sem: int | str | None = None
    personal_email: str | None = Field(default=None, alias="personalEmail")
    email: str | None = None
    usn: str | None = None
    date_of_birth: str | None = Field(default=None, alias="dateOfBirth")
    blood_group: str | None = Field(default=None, alias="bloodGroup")
    mobile_number: str | None = Field(default=None, alias="mobileNumber")
    alternate_phone_number: str | None = Field(default=None, alias="alternatePhoneNumber")
    nationality: str | None = None
    domicile: str | None = None
    religion: str | None = None
    category: str | None = None
    caste: str | None = None
    hostelite: bool | None = None
    sub_caste: str | None = Field(default=None, alias="subCaste")
    aadhar_card_number: str | None = Field(default=None, alias="aadharCardNumber")
    physically_challenged: bool | None = Field(default=None, alias="physicallyChallenged")
    admission_date: str | None = Field(default=None, alias="admissionDate")
    sports_level: str | None = Field(default=None, alias="sportsLevel")
    defence_or_ex_serviceman: bool | None = Field(default=None, alias="defenceOrExServiceman")
    photo: str | None = None


class StudentProfileRequest(StudentProfileData):
    """Body of ``POST /students/profile``."""

    user_id: str = Field(..., alias="userId")

    @field_validator("user_id")
    @classmethod
    def _canonical_user(cls, value: str) -> str:
        return canonical_id(value)


class StudentProfile(StudentProfileData):
    """Stored profile as returned to clients."""

    id: str
    user_id: str = Field(..., alias="userId")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class StudentListItem(StrictModel):
    """A student user joined with the contact fields of their profile."""

    id: str
    name: str
    email: str | None = None
    phone: str | None = None
    role_name: str | None = Field(default=None, alias="roleName")
    department: str | None = None
    sem: int | str | None = None
    usn: str | None = None
