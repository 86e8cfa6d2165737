"""Shared pydantic base for wire models.

The browser client speaks camelCase (``isCorrect``, ``patientInfo``); the SDK
uses snake_case attributes.  ``CamelModel`` accepts both on input and emits
camelCase when dumped with ``by_alias=True`` (FastAPI's default).
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
