from __future__ import annotations

from pathlib import Path

import pytest

from contract.validation import (
    ValidationMessage,
    ValidationResult,
    href_problem,
    validate_xref_map,
)
from contract.xrefmap import YAML_MIME_HEADER

FIXTURES = Path(__file__).parent / "fixtures"

API_URL = "https://docs.unity3d.com/6000.0/Documentation/ScriptReference/"


def _write_map(path: Path, references: str, header: bool = True) -> Path:
    text = "sorted: true\nreferences:\n" + references
    if header:
        text = f"{YAML_MIME_HEADER}\n{text}"
    path.write_text(text, encoding="utf-8")
    return path


def test_valid_map_passes(tmp_path: Path) -> None:
    path = _write_map(
        tmp_path / "xrefmap.yml",
        f"- uid: UnityEngine.GameObject\n"
        f"  commentId: T:UnityEngine.GameObject\n"
        f"  href: {API_URL}GameObject.html\n"
        f"- uid: UnityEngine.GameObject.transform\n"
        f"  commentId: P:UnityEngine.GameObject.transform\n"
        f"  href: {API_URL}GameObject-transform.html\n",
    )

    result = validate_xref_map(path)

    assert result.ok
    assert result.errors == []
    assert result.warnings == []


def test_missing_file_reports_error(tmp_path: Path) -> None:
    result = validate_xref_map(tmp_path / "missing.yml")

    assert not result.ok
    assert result.errors[0].message == "Xref map file does not exist."


def test_unparseable_document_reports_error(tmp_path: Path) -> None:
    path = tmp_path / "xrefmap.yml"
    path.write_text(f"{YAML_MIME_HEADER}\nreferences: [unclosed\n", encoding="utf-8")

    result = validate_xref_map(path)

    assert not result.ok
    assert "Invalid YAML" in result.errors[0].message


def test_missing_header_is_a_warning(tmp_path: Path) -> None:
    path = _write_map(
        tmp_path / "xrefmap.yml",
        f"- uid: UnityEngine\n  commentId: N:UnityEngine\n  href: {API_URL}index.html\n",
        header=False,
    )

    result = validate_xref_map(path)

    assert result.ok
    assert len(result.warnings) == 1
    assert YAML_MIME_HEADER in result.warnings[0].message


def test_unfixed_generator_output_is_rejected() -> None:
    result = validate_xref_map(FIXTURES / "editor_xrefmap.yml")

    assert not result.ok
    messages = {error.index: error.message for error in result.errors}
    assert messages[1] == "Href is not an absolute URL: UnityEngine.html."
    assert messages[5] == "Overload entries must be removed from fixed xref maps."
    assert len(result.errors) == 8


def test_reference_errors_carry_index_and_uid(tmp_path: Path) -> None:
    path = _write_map(
        tmp_path / "xrefmap.yml",
        f"- uid: A\n  commentId: T:A\n  href: {API_URL}A.html\n"
        "- uid: B\n  href: https://example.org/B.html\n"
        "- uid: C\n  commentId: T:C\n",
    )

    result = validate_xref_map(path)

    assert [(error.index, error.uid) for error in result.errors] == [(2, "B"), (3, "C")]
    assert "Malformed comment ID" in result.errors[0].message
    assert result.errors[1].message == "Missing href."
    assert result.errors[1].location() == f"{path}:references[3]"


@pytest.mark.parametrize(
    ("href", "expected"),
    [
        (f"{API_URL}GameObject.html", None),
        (
            "https://docs.unity3d.com/Packages/com.unity.inputsystem@1.17/api/"
            "UnityEngine.InputSystem.InputSystem.html#UnityEngine_InputSystem_InputSystem_remoting",
            None,
        ),
        (None, "Missing href."),
        ("GameObject.html", "Href is not an absolute URL: GameObject.html."),
        (f"{API_URL}GameObject.html?v=1", f"Href has a query string: {API_URL}GameObject.html?v=1."),
        (f"{API_URL}GameObject", f"Href does not point at an .html page: {API_URL}GameObject."),
    ],
)
def test_href_problem(href: str | None, expected: str | None) -> None:
    assert href_problem(href) == expected


def test_validation_message_location_and_dict() -> None:
    path = Path("xrefmap.yml")
    message = ValidationMessage(path=path, message="Missing href.", index=4, uid="A")

    assert message.location() == "xrefmap.yml:references[4]"
    assert ValidationMessage(path=path, message="x").location() == "xrefmap.yml"
    assert message.to_dict() == {
        "path": "xrefmap.yml",
        "index": 4,
        "uid": "A",
        "message": "Missing href.",
    }


def test_validation_result_ok() -> None:
    result = ValidationResult()
    assert result.ok
    result.warnings.append(ValidationMessage(path=Path("x"), message="w"))
    assert result.ok
    result.errors.append(ValidationMessage(path=Path("x"), message="e"))
    assert not result.ok
