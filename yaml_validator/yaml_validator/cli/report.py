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

"""Violation reporting for the validator CLI."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..file_io.source_location import SourceLocation, format_file, format_source, lookup_source
from ..models.violation import Violation


class ValidationResult:
    """Container for the violations found in a single YAML document."""

    def __init__(self, file_path: Path, document_index: int = 0, document_count: int = 1):
        """Initialize validation result.

        Args:
            file_path: Path to the file holding the document
            document_index: Zero-based position of the document in the file
            document_count: Number of documents in the file
        """
        self.file_path = file_path
        self.document_index = document_index
        self.document_count = document_count
        self.errors: List[Dict[str, Any]] = []

    @property
    def name(self) -> str:
        file_name = format_file(SourceLocation(file_path=self.file_path))
        if self.document_count > 1:
            return f"{file_name}#{self.document_index + 1}"
        return file_name

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_violation(self, violation: Violation, source_map: Optional[Dict[str, Dict[str, int]]] = None):
        """Add a violation, locating it in the source when a source map is available.

        Args:
            violation: Violation reported by the validator
            source_map: JSON pointer -> line/column map of the document
        """
        loc = lookup_source(source_map, violation.path.to_pointer())
        error: Dict[str, Any] = {
            'message': violation.message,
            'kind': violation.kind.value,
            'path': str(violation.path),
            'yaml_path': loc.yaml_path,
        }
        if loc.line is not None:
            error['line'] = loc.line
        if loc.column is not None:
            error['column'] = loc.column
        self.errors.append(error)


def _render_error_line(error: Dict[str, Any]) -> str:
    loc = SourceLocation(line=error.get('line'), column=error.get('column'))
    prefix = f"{error['path']}: " if error['path'] else ""
    return f"{prefix}{error['message']}{format_source(loc)}"


def render_human(results: List[ValidationResult]) -> str:
    lines: List[str] = []
    for result in results:
        if result.is_valid:
            continue
        lines.append(f"{result.name}:")
        for error in result.errors:
            lines.append(f"  {_render_error_line(error)}")
    if not lines:
        lines.append("all files validated successfully!")
    return "\n".join(lines)


def render_json(results: List[ValidationResult]) -> str:
    output = {
        'documents': len(results),
        'valid': sum(1 for r in results if r.is_valid),
        'invalid': sum(1 for r in results if not r.is_valid),
        'violations': sum(len(r.errors) for r in results),
        'results': [
            {
                'file': str(r.file_path),
                'document': r.document_index,
                'valid': r.is_valid,
                'violations': r.errors,
            }
            for r in results
        ],
    }
    return json.dumps(output, indent=2)


def _escape_data(text: str) -> str:
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(text: str) -> str:
    return _escape_data(text).replace(":", "%3A").replace(",", "%2C")


def render_github_actions(results: List[ValidationResult]) -> str:
    lines: List[str] = []
    for result in results:
        file_name = _escape_property(str(result.file_path))
        for error in result.errors:
            lines.append(
                f"::error file={file_name},line={error.get('line', 1)}::{_escape_data(_render_error_line(error))}"
            )
    return "\n".join(lines)


RENDERERS = {
    'human': render_human,
    'json': render_json,
    'github-actions': render_github_actions,
}
