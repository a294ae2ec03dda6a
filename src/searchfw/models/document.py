"""Document models — Source-side builder and the engine-ready document.

The indexing pipeline fills an ``IndexDocument`` per source record; the
engine adapter turns it into a frozen ``NormalizedDocument`` which is
buffered until the end of the run.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from searchfw.models.schema import Collection, FieldType

BOOST_KEY = "_boost"


class Normalizer(Protocol):
    """Transforms a raw field value into the form the engine expects."""

    def normalize(self, value: Any) -> Any: ...


class IndexDocument:
    """Per-record document being built by the indexing pipeline.

    Values set through ``set_field()`` are run through the normalizer
    attached for the field's type, so iteration yields normalized values.

    Args:
        collection: The collection the source record belongs to.
        normalizers: Normalizers keyed by field type.
    """

    def __init__(self, collection: Collection, normalizers: dict[FieldType, Normalizer] | None = None) -> None:
        self.collection = collection
        self.boost: float | None = None
        self.doc_id: str | None = None
        self._normalizers = normalizers or {}
        self._values: dict[str, Any] = {}

    def set_boost(self, boost: float | None) -> IndexDocument:
        self.boost = boost
        return self

    def set_id(self, doc_id: str | None) -> IndexDocument:
        """Set an explicit identifier; without one the engine assigns its own."""
        self.doc_id = doc_id
        return self

    def set_field(self, field_id: str, value: Any) -> IndexDocument:
        field = self.collection.schema.get_field(field_id)
        if field is not None:
            normalizer = self._normalizers.get(field.type)  # type: ignore[arg-type]
            if normalizer is not None:
                value = normalizer.normalize(value)
        self._values[field_id] = value
        return self

    def get_field_name(self, field_id: str) -> str:
        return self.collection.schema.get_field_name(field_id)

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(self._values.items())

    def __len__(self) -> int:
        return len(self._values)


class NormalizedDocument(BaseModel):
    """Engine-ready document with its routing information.

    Immutable once built; consumed exactly once by a buffer flush.
    """

    model_config = ConfigDict(frozen=True)

    index: str = Field(description="Target index name")
    doc_type: str = Field(description="Target document category (collection type)")
    doc_id: str | None = Field(default=None, description="Explicit identifier (None = engine assigned)")
    boost: float | None = Field(default=None, description="Document-level boost, if set upstream")
    fields: dict[str, Any] = Field(default_factory=dict, description="Output field name to normalized value")

    @classmethod
    def from_index_document(
        cls,
        document: IndexDocument,
        index: str,
        doc_type: str | None = None,
    ) -> NormalizedDocument:
        """Build the engine document from a filled ``IndexDocument``.

        The boost is stored under ``_boost`` only when one was set.  Later
        values for the same output name overwrite earlier ones.
        """
        fields: dict[str, Any] = {}
        if document.boost is not None:
            fields[BOOST_KEY] = document.boost

        for field_id, normalized_value in document:
            fields[document.get_field_name(field_id)] = normalized_value

        return cls(
            index=index,
            doc_type=doc_type or document.collection.type,
            doc_id=document.doc_id,
            boost=document.boost,
            fields=fields,
        )

    def to_bulk_action(self) -> dict[str, Any]:
        """Render as an ``elasticsearch.helpers`` bulk action."""
        action: dict[str, Any] = {"_index": self.index, "_source": dict(self.fields)}
        if self.doc_id is not None:
            action["_id"] = self.doc_id
        return action
