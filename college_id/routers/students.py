from typing import List

from fastapi import APIRouter, Depends, status

from college_id.schemas.student_schemas import (
    CreateStudentRequest,
    StudentCreatedResponse,
    StudentRecord,
)
from college_id.services.student_service import StudentService, get_student_service
from college_id.utils.responses import ResponseBuilder

students_router = APIRouter()


@students_router.post(
    "",
    response_model=StudentCreatedResponse,
    status_code=status.HTTP_200_OK,
    summary="Admit a student",
    description="Validate the request, generate the roll (if blank) and unique code, and store the record.",
)
async def create_student(
    data: CreateStudentRequest,
    student_service: StudentService = Depends(get_student_service),
):
    """
    Create a student record

    - ``name`` is required
    - ``joinYear`` defaults to the current year, ``expiryYear`` is always joinYear + 4
    - ``roll`` is generated as ``YY-NNNN`` when blank
    - Duplicate roll or unique code answers 409
    """
    student = await student_service.admit(data)
    response = StudentCreatedResponse(student=student)
    return ResponseBuilder.success(
        data=response.model_dump(mode="json", by_alias=True, exclude={"success"}),
    )


@students_router.get(
    "",
    response_model=List[StudentRecord],
    status_code=status.HTTP_200_OK,
    summary="List students",
    description="Every student record, most recently created first.",
)
async def list_students(
    student_service: StudentService = Depends(get_student_service),
):
    students = await student_service.list_students()
    return ResponseBuilder.collection(
        [student.model_dump(mode="json", by_alias=True) for student in students]
    )
