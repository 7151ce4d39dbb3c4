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

"""Custom exceptions for the YAML validator.

Document violations are never raised; they are returned as data by the
validator. The exceptions below cover the cases where validation cannot run at
all: a broken schema setup or an unreadable input.
"""

from typing import Iterator, List, Optional

from .models.path import ROOT, YamlPath


class YamlValidatorError(Exception):
    """Base exception for yaml_validator related errors."""
    pass


class SchemaError(YamlValidatorError):
    """Exception raised when a schema document cannot be turned into a schema.

    ``path`` locates the offending node inside the schema document. When several
    independent problems are found while loading one node, they are collected in
    ``errors`` and this exception acts as their container.
    """

    def __init__(
        self,
        message: str,
        path: Optional[YamlPath] = None,
        errors: Optional[List["SchemaError"]] = None,
    ):
        self.message = message
        self.path = path if path is not None else ROOT
        self.errors: List[SchemaError] = list(errors or [])
        super().__init__(str(self))

    @classmethod
    def combine(cls, errors: List["SchemaError"]) -> "SchemaError":
        """Condense a list of errors into a single exception."""
        if len(errors) == 1:
            return errors[0]
        return cls("multiple errors were encountered", errors=errors)

    def flatten(self) -> Iterator["SchemaError"]:
        """Yield the leaf errors contained in this exception."""
        if not self.errors:
            yield self
            return
        for error in self.errors:
            yield from error.flatten()

    def __str__(self) -> str:
        lines = []
        for error in self.flatten():
            location = str(error.path)
            lines.append(f"{location}: {error.message}" if location else error.message)
        return "\n".join(lines)


class SchemaResolutionError(YamlValidatorError):
    """Exception raised when the starting schema for a validation run cannot be found."""

    def __init__(self, message: str, uri: Optional[str] = None):
        self.uri = uri
        super().__init__(message)


class DocumentLoadError(YamlValidatorError):
    """Exception raised when a YAML file or string cannot be read or parsed."""
    pass
