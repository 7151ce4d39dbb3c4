from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pytest

from yaml_validator.cli.run_validate import EXIT_OK, EXIT_SETUP_FAILURE, EXIT_VIOLATIONS, main


def _run(argv: List[str]) -> int:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


def test_all_types_example(examples_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = _run(
        [
            "--schema", str(examples_dir / "all-types" / "schema.yaml"),
            "--uri", "customer-list",
            str(examples_dir / "all-types" / "customers.yaml"),
        ]
    )
    assert code == EXIT_OK
    assert capsys.readouterr().out.strip() == "all files validated successfully!"


def test_multiple_schema_files(examples_dir: Path) -> None:
    code = _run(
        [
            "-s", str(examples_dir / "multiple-schemas" / "person-schema.yaml"),
            "-s", str(examples_dir / "multiple-schemas" / "phonebook-schema.yaml"),
            "-u", "phonebook",
            str(examples_dir / "multiple-schemas" / "mybook.yaml"),
        ]
    )
    assert code == EXIT_OK


def test_nesting_example_uses_last_schema_by_default(examples_dir: Path) -> None:
    code = _run(
        [
            "-s", str(examples_dir / "nesting" / "schema.yaml"),
            str(examples_dir / "nesting" / "mybook.yaml"),
        ]
    )
    assert code == EXIT_OK


def test_locating_errors_example(examples_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    phonebook = examples_dir / "locating-errors" / "phonebook.yaml"
    code = _run(["-s", str(examples_dir / "locating-errors" / "schema.yaml"), "-u", "phonebook", str(phonebook)])

    assert code == EXIT_VIOLATIONS
    assert capsys.readouterr().out.splitlines() == [
        f"{phonebook}:",
        "  [1].age: wrong type, expected integer got real (line 5, column 8)",
        "  [2].name: wrong type, expected string got integer (line 6, column 9)",
        "  [2].age: wrong type, expected integer got string (line 7, column 8)",
    ]


def test_json_format(examples_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = _run(
        [
            "--format", "json",
            "-s", str(examples_dir / "locating-errors" / "schema.yaml"),
            "-u", "phonebook",
            str(examples_dir / "locating-errors" / "phonebook.yaml"),
        ]
    )
    assert code == EXIT_VIOLATIONS

    report = json.loads(capsys.readouterr().out)
    assert report["documents"] == 1
    assert report["invalid"] == 1
    assert report["violations"] == 3
    first = report["results"][0]["violations"][0]
    assert first["kind"] == "type-mismatch"
    assert first["path"] == "[1].age"
    assert first["yaml_path"] == "/1/age"
    assert (first["line"], first["column"]) == (5, 8)


def test_github_actions_format(examples_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    phonebook = examples_dir / "locating-errors" / "phonebook.yaml"
    _run(["--format", "github-actions", "-s", str(examples_dir / "locating-errors" / "schema.yaml"), str(phonebook)])

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert lines[0] == (
        f"::error file={phonebook},line=5::[1].age: wrong type, expected integer got real (line 5, column 8)"
    )


def test_multi_document_files_are_validated_separately(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    schema = tmp_path / "schema.yaml"
    schema.write_text("schema:\n  type: integer\n", encoding="utf-8")
    data = tmp_path / "data.yaml"
    data.write_text("--- 1\n--- two\n--- 3\n", encoding="utf-8")

    assert _run(["-s", str(schema), str(data)]) == EXIT_VIOLATIONS
    assert capsys.readouterr().out.splitlines() == [
        f"{data}#2:",
        "  wrong type, expected integer got string (line 2, column 5)",
    ]


def test_non_existent_schema_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    missing = tmp_path / "not_found.yaml"
    data = tmp_path / "data.yaml"
    data.write_text("1\n", encoding="utf-8")

    assert _run(["-s", str(missing), str(data)]) == EXIT_SETUP_FAILURE
    assert capsys.readouterr().err.strip() == f"could not read file {missing}: file not found"


def test_non_existent_files_are_all_reported(examples_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = _run(["-s", str(examples_dir / "nesting" / "schema.yaml"), "first.yaml", "second.yaml"])

    assert code == EXIT_SETUP_FAILURE
    assert capsys.readouterr().err.splitlines() == [
        "could not read file first.yaml: file not found",
        "could not read file second.yaml: file not found",
    ]


def test_unknown_schema_uri(examples_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = _run(
        [
            "-s", str(examples_dir / "nesting" / "schema.yaml"),
            "-u", "not-found",
            str(examples_dir / "nesting" / "mybook.yaml"),
        ]
    )
    assert code == EXIT_SETUP_FAILURE
    assert capsys.readouterr().err.strip() == "schema referenced by uri `not-found` not found in context"


def test_malformed_schema_names_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    schema = tmp_path / "schema.yaml"
    schema.write_text("schema:\n  type: number\n", encoding="utf-8")
    data = tmp_path / "data.yaml"
    data.write_text("1\n", encoding="utf-8")

    assert _run(["-s", str(schema), str(data)]) == EXIT_SETUP_FAILURE
    assert capsys.readouterr().err.splitlines() == [
        f"{schema}:",
        "[0].schema.type: unknown type specified: number",
    ]


def test_missing_arguments(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(["data.yaml"]) == EXIT_SETUP_FAILURE
    assert "no schemas supplied" in capsys.readouterr().err

    assert _run(["-s", "schema.yaml"]) == EXIT_SETUP_FAILURE
    assert "no files to validate were supplied" in capsys.readouterr().err


def test_non_string_keys_keep_their_location(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    schema = tmp_path / "schema.yaml"
    schema.write_text("schema:\n  type: hash\n  items:\n    type: integer\n", encoding="utf-8")
    data = tmp_path / "flags.yaml"
    data.write_text("true: on\n0x10: 3\n", encoding="utf-8")

    assert _run(["-s", str(schema), str(data)]) == EXIT_VIOLATIONS
    assert capsys.readouterr().out.splitlines() == [
        f"{data}:",
        "  .True: wrong type, expected integer got boolean (line 1, column 7)",
    ]


def test_github_actions_escapes_workflow_commands(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    schema = tmp_path / "schema.yaml"
    schema.write_text("schema:\n  type: string\n  pattern: '^100%'\n", encoding="utf-8")
    data = tmp_path / "rate, final.yaml"
    data.write_text("'50%'\n", encoding="utf-8")

    assert _run(["--format", "github-actions", "-s", str(schema), str(data)]) == EXIT_VIOLATIONS
    escaped_file = str(data).replace(",", "%2C")
    assert capsys.readouterr().out.splitlines() == [
        f"::error file={escaped_file},line=1::string '50%25' does not match pattern '^100%25' (line 1, column 1)",
    ]
