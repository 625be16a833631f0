from datetime import datetime, date
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel


class CamelCaseBaseModel(BaseModel):
    """
    Base model with camelCase field aliases.

    Stored documents and client payloads both use camelCase keys
    (``fatherName``, ``joinYear``) while Python code uses snake_case:

    - Input: camelCase keys are accepted, as are the snake_case field names.
    - Output: ``model_dump(by_alias=True)`` gives camelCase back. In the
      default python mode datetimes stay datetimes so the dump can be written
      to MongoDB as-is; ``mode="json"`` turns them into ISO strings.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_serializer("*", when_used="json")
    def serialize_any(self, value):
        if isinstance(value, Enum):
            return value.value

        # datetime must come before date
        if isinstance(value, datetime):
            return value.isoformat()

        if isinstance(value, date):
            return value.isoformat()

        return value
