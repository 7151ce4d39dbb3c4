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

"""Multi-document YAML parser with caching and source location support."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from ..config import validator_config
from ..exceptions import DocumentLoadError
from ..models.path import jp_escape

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader that leaves date-like scalars as strings."""


DocumentLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class YamlParser:
    """YAML parser returning every document of a stream."""

    def __init__(self, cache_enabled: Optional[bool] = None):
        """Initialize YAML parser.

        Args:
            cache_enabled: Whether to enable caching. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else validator_config.cache_enabled
        self._cache: Dict[Path, List[Any]] = {}
        self._source_cache: Dict[Path, List[SourceMap]] = {}

    @staticmethod
    def _build_source_maps(content: str) -> List[SourceMap]:
        """Build one JSON-pointer -> 1-based line/column map per document.

        This walks PyYAML's node tree (yaml.compose_all) so locations can be
        tracked without changing the data returned by the loader.
        """
        source_maps: List[SourceMap] = []
        # keys are constructed so that `true` or `0x10` map to the same token as the loaded key
        key_loader = DocumentLoader("")

        def _walk(node: yaml.Node, path: str, source_map: SourceMap) -> None:
            mark = node.start_mark
            # PyYAML uses 0-based line/column
            source_map[path] = {"line": mark.line + 1, "column": mark.column + 1}

            if isinstance(node, yaml.MappingNode):
                for key_node, value_node in node.value:
                    if not isinstance(key_node, yaml.ScalarNode):
                        continue
                    try:
                        key = key_loader.construct_object(key_node)
                    except yaml.constructor.ConstructorError:
                        # merge keys (`<<`) have no value of their own
                        continue
                    _walk(value_node, f"{path}/{jp_escape(str(key))}", source_map)
            elif isinstance(node, yaml.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, f"{path}/{idx}", source_map)

        for root in yaml.compose_all(content, Loader=DocumentLoader):
            source_map: SourceMap = {}
            if root is not None:
                _walk(root, "", source_map)
            source_maps.append(source_map)
        return source_maps

    @staticmethod
    def _read(path: Path) -> str:
        if not path.exists():
            raise DocumentLoadError(f"could not read file {path}: file not found")
        if not path.is_file():
            raise DocumentLoadError(f"could not read file {path}: not a regular file")
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise DocumentLoadError(f"file {path} did not contain valid utf8: {exc}")
        except OSError as exc:
            raise DocumentLoadError(f"could not read file {path}: {exc}")

    def load_documents_from_string(self, content: str) -> List[Any]:
        """Parse every YAML document in ``content``.

        Raises:
            DocumentLoadError: If the content is not valid YAML
        """
        try:
            return list(yaml.load_all(content, Loader=DocumentLoader))
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"Failed to parse YAML content: {exc}")

    def load_documents_from_string_with_source(self, content: str) -> Tuple[List[Any], List[SourceMap]]:
        """Parse YAML content and return (documents, source_maps)."""
        documents = self.load_documents_from_string(content)
        try:
            source_maps = self._build_source_maps(content)
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"Failed to parse YAML content: {exc}")
        return documents, source_maps

    def load_documents_with_source(self, file_path: Union[str, Path]) -> Tuple[List[Any], List[SourceMap]]:
        """Load a YAML file and return (documents, source_maps).

        source_map keys are JSON-pointer-like paths (e.g. "/customers/0/name").
        Values contain 1-based line/column.

        Raises:
            DocumentLoadError: If the file cannot be read or parsed
        """
        path = Path(file_path)

        if self.cache_enabled and path in self._cache and path in self._source_cache:
            logger.debug(f"Loading documents (with source) from cache: {path}")
            return self._cache[path], self._source_cache[path]

        logger.debug(f"Loading YAML file (with source): {path}")
        content = self._read(path)
        try:
            documents = list(yaml.load_all(content, Loader=DocumentLoader))
            source_maps = self._build_source_maps(content)
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"Failed to parse YAML file {path}: {exc}")

        if self.cache_enabled:
            self._cache[path] = documents
            self._source_cache[path] = source_maps

        return documents, source_maps

    def load_documents(self, file_path: Union[str, Path]) -> List[Any]:
        """Load every YAML document of a file.

        Raises:
            DocumentLoadError: If the file cannot be read or parsed
        """
        path = Path(file_path)

        if self.cache_enabled and path in self._cache:
            logger.debug(f"Loading documents from cache: {path}")
            return self._cache[path]

        logger.debug(f"Loading YAML file: {path}")
        content = self._read(path)
        try:
            documents = list(yaml.load_all(content, Loader=DocumentLoader))
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"Failed to parse YAML file {path}: {exc}")

        if self.cache_enabled:
            self._cache[path] = documents
        return documents

    def clear_cache(self) -> None:
        """Clear the document cache."""
        self._cache.clear()
        self._source_cache.clear()
        logger.debug("Document cache cleared")


# Global parser instance
yaml_parser = YamlParser()
