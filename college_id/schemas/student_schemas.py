from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import Field

from college_id.schemas.camel_base_model import CamelCaseBaseModel as BaseModel


class CreateStudentRequest(BaseModel):
    """Request body for admitting a student.

    Every key is optional at the schema level; the admission service decides
    what is required so that a missing name is reported the same way as a
    blank one.
    """

    name: Optional[str] = Field(None, description="Student's full name")
    father_name: Optional[str] = Field(None, description="Father's name")
    dob: Optional[str] = Field(None, description="Date of birth as free text")
    address: Optional[str] = Field(None, description="Postal address")
    join_year: Optional[Union[int, str]] = Field(
        None, description="Year of joining, defaults to the current year"
    )
    roll: Optional[str] = Field(None, description="Roll number, generated if blank")


class StudentRecord(BaseModel):
    """A persisted student record"""

    id: Optional[str] = Field(None, description="Document ID")
    college_name: str = Field(..., description="Institution name")
    college_location: str = Field(..., description="Institution location")
    name: str = Field(..., description="Student's full name")
    roll: str = Field(..., description="Roll number, unique")
    father_name: Optional[str] = Field(None, description="Father's name")
    dob: Optional[str] = Field(None, description="Date of birth")
    join_year: int = Field(..., description="Year of joining")
    expiry_year: int = Field(..., description="Card expiry year, join year + 4")
    address: Optional[str] = Field(None, description="Postal address")
    unique_code: str = Field(..., description="Generated unique code")
    created_at: datetime = Field(..., description="Creation timestamp")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "StudentRecord":
        data = {k: v for k, v in document.items() if k != "_id"}
        if "_id" in document:
            data["id"] = str(document["_id"])
        return cls.model_validate(data)

    def to_document(self) -> Dict[str, Any]:
        """camelCase mapping ready for insertion, without the ID"""
        return self.model_dump(by_alias=True, exclude={"id"})


class StudentCreatedResponse(BaseModel):
    """Body returned after a successful admission"""

    success: bool = True
    student: StudentRecord
