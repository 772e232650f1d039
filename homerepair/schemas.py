"""Base model for documents and payloads exchanged with the web client."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Pydantic model serialised with camelCase keys.

    Accepts both camelCase and snake_case on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict:
        """Dump with wire (camelCase) names, as stored in the document store."""
        return self.model_dump(by_alias=True, mode="json")
