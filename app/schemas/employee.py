from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Dict, List, Optional
from enum import Enum


class EmployeeCreateRequest(BaseModel):
    """Schema for creating a new employee. The id is always assigned by the database."""
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    role: Optional[str] = Field(None, max_length=200)

    class Config:
        extra = "forbid"


class EmployeeUpdateRequest(BaseModel):
    """
    Schema for replacing an employee's fields.

    Only fields present in the payload are written; omitted fields keep
    their stored value.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    role: Optional[str] = Field(None, max_length=200)

    @field_validator('name', 'email')
    @classmethod
    def reject_null(cls, v):
        """name and email are non-null columns."""
        if v is None:
            raise ValueError('Field may not be null')
        return v

    class Config:
        extra = "forbid"


class EmployeeDTO(BaseModel):
    """Transfer projection of an Employee row"""
    id: int
    name: str
    email: str
    role: Optional[str] = None

    class Config:
        from_attributes = True  # Allows conversion from SQLAlchemy models


class Link(BaseModel):
    """Hypermedia link"""
    href: str


class EmployeeModel(EmployeeDTO):
    """Employee representation with its hypermedia links"""
    links: Dict[str, Link] = Field(default_factory=dict, alias="_links")

    class Config:
        from_attributes = True
        populate_by_name = True


class EmbeddedEmployees(BaseModel):
    employees: List[EmployeeModel] = Field(default_factory=list)


class EmployeeCollection(BaseModel):
    """HAL-style collection envelope"""
    embedded: EmbeddedEmployees = Field(default_factory=EmbeddedEmployees, alias="_embedded")
    links: Dict[str, Link] = Field(default_factory=dict, alias="_links")

    class Config:
        populate_by_name = True


class ServiceStatus(str, Enum):
    """
    Outcome of a single-resource service call.

    - FOUND: resource returned
    - CREATED: new resource stored, `location` points at it
    - UPDATED: existing resource overwritten
    - DELETED: resource removed
    - NOT_FOUND: no resource for the identifier, nothing changed
    """
    FOUND = "FOUND"
    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"
    NOT_FOUND = "NOT_FOUND"


class ServiceResponse(BaseModel):
    """Structured result the HTTP layer renders into a status code and body"""
    status: ServiceStatus
    body: Optional[EmployeeModel] = None
    location: Optional[str] = None

    @property
    def is_absent(self) -> bool:
        return self.status == ServiceStatus.NOT_FOUND
