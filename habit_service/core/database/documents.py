"""Collection names and the base model for stored entities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from habit_service.core.exceptions import InternalServerException

if TYPE_CHECKING:
    from habit_service.infra.firestore.protocols import Document

HABITS = "habits"
BUNDLES = "bundles"
USERS = "users"
COMPLETION_LOG = "completion_log"


def completion_log_path(user_id: str) -> str:
    """Path of the completion log subcollection owned by ``user_id``."""
    return f"{USERS}/{user_id}/{COMPLETION_LOG}"


class DocumentModel(BaseModel):
    """Entity decoded from a stored document.

    Stored field names are camelCase; attributes are snake_case. Decoding
    goes through ``from_document`` so corrupt documents surface as an
    internal error instead of a half-populated object.
    """

    id: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @classmethod
    def from_document(cls, document: Document, **context: Any) -> Self:
        """Decode a stored document.

        Args:
            document: The stored document.
            **context: Fields not held in the document body (e.g. the owning
                user id of a subcollection entry).

        Raises:
            InternalServerException: If the document does not match the model.
        """
        try:
            return cls.model_validate({**document.data, **context, "id": document.id})
        except ValidationError as e:
            raise InternalServerException(
                f"Stored {cls.__name__} document is malformed",
                extra={
                    "document_id": document.id,
                    "errors": e.errors(include_url=False, include_input=False),
                },
            ) from e

    def to_api(self) -> dict[str, Any]:
        """JSON-ready representation with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)

    def to_document(self) -> dict[str, Any]:
        """Stored field data: camelCase keys, native datetimes, no id."""
        return self.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)
