"""Shared base model for camelCase wire payloads"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model whose fields travel as camelCase JSON and are read as snake_case"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict:
        """Dump to the JSON-compatible camelCase shape the API expects"""
        return self.model_dump(mode="json", by_alias=True)
