#!/usr/bin/env python3
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

"""CLI entry point for validating YAML files against YAML schemas."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..config import validator_config
from ..context import Context
from ..exceptions import DocumentLoadError, SchemaError, SchemaResolutionError
from ..parsers.schema_parser import load_schema_documents
from ..parsers.yaml_parser import yaml_parser
from ..validator import validate_document
from .report import RENDERERS, ValidationResult

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_SETUP_FAILURE = 2


def load_context(schema_files: List[str]) -> Context:
    """Build a Context from every document of every schema file, in order.

    Raises:
        DocumentLoadError: If a schema file cannot be read or parsed
        SchemaError: If a schema document is malformed; the message is prefixed
            with the offending file name
    """
    context = Context()
    for schema_file in schema_files:
        nodes = yaml_parser.load_documents(schema_file)
        try:
            documents = load_schema_documents(nodes)
        except SchemaError as exc:
            raise SchemaError(f"{schema_file}:\n{exc}") from exc
        for document in documents:
            context.insert(document)
        logger.info(f"Loaded {len(documents)} schema(s) from {schema_file}")
    return context


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='yaml-validator',
        description='Validate YAML files against YAML schemas',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'files',
        nargs='*',
        help='YAML files to validate',
    )
    parser.add_argument(
        '-s', '--schema',
        action='append',
        default=[],
        metavar='FILE',
        help='Schema file to load; may be given several times, later schemas shadow earlier ones',
    )
    parser.add_argument(
        '-u', '--uri',
        default=None,
        help='URI of the schema to validate against (default: the last loaded schema)',
    )
    parser.add_argument(
        '--format',
        choices=sorted(RENDERERS),
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging',
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the validator CLI."""
    args = _build_parser().parse_args(argv)
    validator_config.set_logging(verbose=args.verbose)

    if not args.schema:
        print("no schemas supplied, see the --schema option for information", file=sys.stderr)
        sys.exit(EXIT_SETUP_FAILURE)
    if not args.files:
        print("no files to validate were supplied, use --help for more information", file=sys.stderr)
        sys.exit(EXIT_SETUP_FAILURE)

    try:
        context = load_context(args.schema)
    except (DocumentLoadError, SchemaError) as exc:
        print(exc, file=sys.stderr)
        sys.exit(EXIT_SETUP_FAILURE)

    if args.uri is not None and args.uri not in context:
        print(f"schema referenced by uri `{args.uri}` not found in context", file=sys.stderr)
        sys.exit(EXIT_SETUP_FAILURE)

    # Unreadable inputs are reported together, before any validation
    loaded = []
    load_errors = []
    for file_name in args.files:
        try:
            loaded.append((Path(file_name), *yaml_parser.load_documents_with_source(file_name)))
        except DocumentLoadError as exc:
            load_errors.append(str(exc))
    if load_errors:
        print("\n".join(load_errors), file=sys.stderr)
        sys.exit(EXIT_SETUP_FAILURE)

    results: List[ValidationResult] = []
    for file_path, documents, source_maps in loaded:
        if not documents:
            logger.warning(f"{file_path} contains no YAML documents")
            continue
        for index, document in enumerate(documents):
            result = ValidationResult(file_path, index, len(documents))
            try:
                violations = validate_document(context, document, args.uri)
            except SchemaResolutionError as exc:
                print(exc, file=sys.stderr)
                sys.exit(EXIT_SETUP_FAILURE)
            source_map = source_maps[index] if index < len(source_maps) else None
            for violation in violations:
                result.add_violation(violation, source_map)
            results.append(result)

    output = RENDERERS[args.format](results)
    if output:
        print(output)

    if any(not r.is_valid for r in results):
        sys.exit(EXIT_VIOLATIONS)
    sys.exit(EXIT_OK)


if __name__ == '__main__':
    main()
