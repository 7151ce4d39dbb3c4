# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging
from typing import Iterable, List, Optional

from .models.schema_types import SchemaDocument, SchemaType

logger = logging.getLogger(__name__)


class Context:
    """Registry of schema documents available to a validation run.

    Documents are kept in insertion order. Lookups and default selection favour
    the most recent insertion, so a later document shadows an earlier one with
    the same URI. References are not checked on insert; they are resolved when
    the validator reaches them.
    """

    def __init__(self, documents: Optional[Iterable[SchemaDocument]] = None):
        self._documents: List[SchemaDocument] = []
        for document in documents or ():
            self.insert(document)

    @classmethod
    def from_documents(cls, documents: Iterable[SchemaDocument]) -> "Context":
        return cls(documents)

    def insert(self, document: SchemaDocument) -> None:
        """Append a schema document without resolving the references it contains."""
        if document.uri is not None and document.uri in self:
            logger.debug(f"Schema '{document.uri}' shadows an earlier schema with the same uri")
        self._documents.append(document)
        logger.debug(f"Registered schema uri={document.uri!r} ({len(self._documents)} in context)")

    def resolve(self, uri: str) -> Optional[SchemaType]:
        """Return the root of the most recently inserted schema registered under ``uri``."""
        for document in reversed(self._documents):
            if document.uri == uri:
                return document.schema
        return None

    def default_schema(self) -> Optional[SchemaType]:
        """Return the root of the most recently inserted schema, or None if empty."""
        if not self._documents:
            return None
        return self._documents[-1].schema

    def uris(self) -> List[str]:
        """Distinct registered URIs, in order of first insertion."""
        seen: List[str] = []
        for document in self._documents:
            if document.uri is not None and document.uri not in seen:
                seen.append(document.uri)
        return seen

    def __contains__(self, uri: object) -> bool:
        return any(document.uri == uri for document in self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __repr__(self) -> str:
        return f"Context(uris={self.uris()!r}, documents={len(self._documents)})"
