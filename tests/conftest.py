from __future__ import annotations

import logging
from pathlib import Path

import pytest
import yaml

from yaml_validator.context import Context
from yaml_validator.parsers.schema_parser import load_schema_documents

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def examples_dir() -> Path:
    return EXAMPLES_DIR


def context_from(text: str) -> Context:
    return Context.from_documents(load_schema_documents(yaml.safe_load_all(text)))
