from datetime import datetime, timezone
from typing import Callable, List, Optional, Union

from fastapi import Depends, Request
from starlette.concurrency import run_in_threadpool

from college_id.config.settings import settings
from college_id.db.student_store import StudentStore
from college_id.schemas.student_schemas import CreateStudentRequest, StudentRecord
from college_id.services.identifier_service import IdentifierGenerator
from college_id.utils.errors import ConflictError, ValidationError
from college_id.utils.logging import get_logger

logger = get_logger()

VALIDITY_YEARS = 4
MIN_JOIN_YEAR = 1
MAX_JOIN_YEAR = 9999


def utc_now() -> datetime:
    """Current UTC time truncated to the millisecond precision BSON stores"""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class StudentService:
    """Admission and listing of student records"""

    def __init__(
        self,
        store: StudentStore,
        generator: Optional[IdentifierGenerator] = None,
        clock: Callable[[], datetime] = utc_now,
        college_name: str = settings.COLLEGE_NAME,
        college_location: str = settings.COLLEGE_LOCATION,
        max_attempts: int = settings.ADMISSION_MAX_ATTEMPTS,
    ):
        self.store = store
        self.generator = generator or IdentifierGenerator(
            prefix=settings.UNIQUE_CODE_PREFIX
        )
        self.clock = clock
        self.college_name = college_name
        self.college_location = college_location
        self.max_attempts = max(1, max_attempts)

    async def admit(self, request: CreateStudentRequest) -> StudentRecord:
        """
        Validate ``request``, fill in the derived fields and persist the record.

        A generated roll that collides with an existing one is regenerated, as
        is the unique code, up to ``max_attempts`` inserts. A collision on a
        roll supplied by the caller is raised straight away.

        Raises:
            ValidationError: name missing or joinYear not an integer
            ConflictError: roll or unique code already taken
            StorageError: any other database failure
        """
        name = (request.name or "").strip()
        if not name:
            raise ValidationError("name is required")

        created_at = self.clock()
        join_year = self._resolve_join_year(request.join_year, created_at)
        supplied_roll = (request.roll or "").strip()
        roll = supplied_roll or self.generator.roll(join_year)

        attempt = 1
        while True:
            record = StudentRecord(
                college_name=self.college_name,
                college_location=self.college_location,
                name=name,
                roll=roll,
                father_name=request.father_name,
                dob=request.dob,
                join_year=join_year,
                expiry_year=join_year + VALIDITY_YEARS,
                address=request.address,
                unique_code=self.generator.unique_code(name or roll),
                created_at=created_at,
            )

            try:
                document = await run_in_threadpool(
                    self.store.insert, record.to_document()
                )
            except ConflictError as e:
                if (supplied_roll and e.field == "roll") or attempt >= self.max_attempts:
                    logger.warning(
                        f"Admission of '{name}' rejected after {attempt} attempt(s): {e.message}"
                    )
                    raise
                logger.info(
                    f"Identifier collision on {e.field or 'unique index'} for roll {roll}, "
                    f"regenerating (attempt {attempt}/{self.max_attempts})"
                )
                attempt += 1
                if not supplied_roll:
                    roll = self.generator.roll(join_year)
                continue

            logger.info(f"Admitted student roll={roll} uniqueCode={record.unique_code}")
            return StudentRecord.from_document(document)

    async def list_students(self) -> List[StudentRecord]:
        """All records, most recently created first"""
        documents = await run_in_threadpool(self.store.find_recent)
        logger.info(f"Retrieved {len(documents)} students")
        return [StudentRecord.from_document(document) for document in documents]

    @staticmethod
    def _resolve_join_year(value: Optional[Union[int, str]], now: datetime) -> int:
        if not value:
            return now.year
        if isinstance(value, bool):
            raise ValidationError("joinYear must be an integer")
        if isinstance(value, int):
            join_year = value
        else:
            try:
                join_year = int(str(value).strip())
            except ValueError:
                raise ValidationError("joinYear must be an integer")
        if not MIN_JOIN_YEAR <= join_year <= MAX_JOIN_YEAR:
            raise ValidationError("joinYear must be a valid year")
        return join_year


def get_student_store(request: Request) -> StudentStore:
    return request.app.state.student_store


def get_student_service(
    store: StudentStore = Depends(get_student_store),
) -> StudentService:
    return StudentService(store)
