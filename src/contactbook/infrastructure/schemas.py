"""Wire models for the backend's camelCase JSON."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from contactbook.domain import Contact, ContactSubmission


class ContactItem(BaseModel):
    """A contact as returned by GET /api/contacts/ and POST /api/contacts."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | str
    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")
    email: str | None = None
    category: str | None = None
    subcategory: str | None = None
    phone_number: str | None = Field(None, alias="phoneNumber")
    date_of_birth: datetime | None = Field(None, alias="dateOfBirth")

    def to_contact(self) -> Contact:
        return Contact(
            id=str(self.id),
            first_name=self.first_name or "",
            last_name=self.last_name or "",
            email=self.email or "",
            category=self.category or "",
            subcategory=self.subcategory,
            phone_number=self.phone_number or "",
            date_of_birth=self.date_of_birth,
        )


class ContactBody(BaseModel):
    """Create/update request body. Has no id field, so an id can never be sent."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    category: str
    subcategory: str | None = None
    phone_number: str = Field(alias="phoneNumber")
    date_of_birth: str | None = Field(None, alias="dateOfBirth")
    password: str | None = None

    @classmethod
    def from_submission(cls, record: ContactSubmission) -> "ContactBody":
        return cls(
            first_name=record.first_name,
            last_name=record.last_name,
            email=record.email,
            category=record.category,
            subcategory=record.subcategory,
            phone_number=record.phone_number,
            date_of_birth=record.date_of_birth,
            password=record.password,
        )

    def to_json(self) -> dict:
        """camelCase dict; password left out entirely when not set."""
        exclude = {"password"} if self.password is None else set()
        return self.model_dump(by_alias=True, exclude=exclude)


class Credentials(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(alias="Username")
    password: str = Field(alias="Password")


class TokenResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    access_token: str = Field(alias="accessToken")


class ErrorDetail(BaseModel):
    message: str
    field: str | None = None


class ErrorBody(BaseModel):
    """Structured 400 body: {"error": {"message": ..., "field": ...}}."""

    error: ErrorDetail
