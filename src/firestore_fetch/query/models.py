"""
Structured query request model.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LIMIT = 10
CREATED_AT_FIELD = "created_at"


class QueryRequest(BaseModel):
    """Which collection to read, how many documents, and in what order.

    The limit is passed through as given, including zero or negative values;
    None drops the limit clause entirely.
    """
    model_config = ConfigDict(frozen=True)

    collection: str = Field(min_length=1)
    limit: Optional[int] = DEFAULT_LIMIT
    recent: bool = False

    def to_body(self) -> Dict[str, Any]:
        """Build the runQuery request body."""
        structured_query: Dict[str, Any] = {
            "from": [{"collectionId": self.collection, "allDescendants": False}],
        }
        if self.limit is not None:
            structured_query["limit"] = self.limit
        if self.recent:
            structured_query["orderBy"] = [
                {"field": {"fieldPath": CREATED_AT_FIELD}, "direction": "DESCENDING"}
            ]
        return {"structuredQuery": structured_query}
