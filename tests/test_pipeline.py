from __future__ import annotations

import logging

import pytest

from xref.errors import MalformedIdentifierError, ResolutionError
from xref.models import ReferenceMap, ReferenceRecord
from xref.pipeline import fix_xref_map, process_references
from xref.resolve import SiteMode

EDITOR_URL = "https://docs.unity3d.com/6000.0/Documentation/ScriptReference/"
PACKAGE_URL = "https://docs.unity3d.com/Packages/com.unity.inputsystem@1.17/api/"


def _records() -> list[ReferenceRecord]:
    return [
        ReferenceRecord(
            uid="UnityEngine.InputSystem",
            name="UnityEngine.InputSystem",
            comment_id="N:UnityEngine.InputSystem",
        ),
        ReferenceRecord(
            uid="UnityEngine.InputSystem.InputSystem.AddDevice*",
            name="AddDevice",
            comment_id="Overload:UnityEngine.InputSystem.InputSystem.AddDevice",
        ),
        ReferenceRecord(
            uid="UnityEngine.InputSystem.InputActionAsset.Broken",
            name="Unrelated()",
            comment_id="M:UnityEngine.InputSystem.InputActionAsset.Broken",
        ),
        ReferenceRecord(
            uid="UnityEngine.InputSystem.InputActionAsset",
            name="InputActionAsset",
            comment_id="T:UnityEngine.InputSystem.InputActionAsset",
        ),
        ReferenceRecord(
            uid="UnityEngine.InputSystem.InputSystem.remoting",
            name="remoting",
            comment_id="P:UnityEngine.InputSystem.InputSystem.remoting",
        ),
    ]


@pytest.mark.parametrize("site_mode", list(SiteMode))
def test_overloads_never_reach_the_output(site_mode: SiteMode) -> None:
    report = process_references(EDITOR_URL, _records(), [], site_mode)

    assert report.overloads_skipped == 1
    assert all(
        not (record.comment_id or "").startswith("Overload:") for record in report.references
    )


def test_surviving_records_keep_input_order() -> None:
    report = process_references(PACKAGE_URL, _records(), [], SiteMode.PACKAGE)

    assert [record.uid for record in report.references] == [
        "UnityEngine.InputSystem",
        "UnityEngine.InputSystem.InputActionAsset",
        "UnityEngine.InputSystem.InputSystem.remoting",
    ]
    assert [record.href for record in report.references] == [
        PACKAGE_URL + "UnityEngine.InputSystem.html",
        PACKAGE_URL + "UnityEngine.InputSystem.InputActionAsset.html",
        PACKAGE_URL
        + "UnityEngine.InputSystem.InputSystem.html#UnityEngine_InputSystem_InputSystem_remoting",
    ]


def test_unresolvable_records_are_reported_and_logged(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="xref.pipeline"):
        report = process_references(PACKAGE_URL, _records(), [], SiteMode.PACKAGE)

    assert not report.ok
    assert report.dropped_uids == ["UnityEngine.InputSystem.InputActionAsset.Broken"]
    assert isinstance(report.dropped[0].error, ResolutionError)
    assert "Error fixing href: UnityEngine.InputSystem.InputActionAsset.Broken" in caplog.text


def test_malformed_comment_ids_are_dropped_not_fatal() -> None:
    records = [
        ReferenceRecord(uid="Broken", name="Broken", comment_id="Broken"),
        ReferenceRecord(uid="NoId", name="NoId"),
        ReferenceRecord(uid="UnityEngine.GameObject", comment_id="T:UnityEngine.GameObject"),
    ]

    report = process_references(EDITOR_URL, records, ["UnityEngine"], SiteMode.EDITOR)

    assert report.dropped_uids == ["Broken", "NoId"]
    assert all(isinstance(item.error, MalformedIdentifierError) for item in report.dropped)
    assert [record.href for record in report.references] == [EDITOR_URL + "GameObject.html"]


def test_input_records_are_not_mutated() -> None:
    records = _records()

    report = process_references(EDITOR_URL, records, ["UnityEngine"], SiteMode.EDITOR)

    assert all(record.href is None for record in records)
    assert all(record.href is not None for record in report.references)


def test_trim_namespaces_may_be_a_one_shot_iterable() -> None:
    records = [
        ReferenceRecord(comment_id="T:UnityEngine.GameObject"),
        ReferenceRecord(comment_id="T:UnityEngine.Transform"),
    ]

    report = process_references(
        EDITOR_URL, records, (ns for ns in ["UnityEngine"]), SiteMode.EDITOR
    )

    assert [record.href for record in report.references] == [
        EDITOR_URL + "GameObject.html",
        EDITOR_URL + "Transform.html",
    ]


def test_report_to_dict() -> None:
    report = process_references(PACKAGE_URL, _records(), [], SiteMode.PACKAGE)

    payload = report.to_dict()

    assert payload["resolved"] == 3
    assert payload["overloads_skipped"] == 1
    assert payload["dropped"] == [
        {
            "uid": "UnityEngine.InputSystem.InputActionAsset.Broken",
            "comment_id": "M:UnityEngine.InputSystem.InputActionAsset.Broken",
            "message": str(report.dropped[0].error),
        }
    ]


def test_fix_xref_map_preserves_sorted_flag_and_extras() -> None:
    record = ReferenceRecord.model_validate(
        {
            "uid": "UnityEngine.GameObject",
            "name": "GameObject",
            "commentId": "T:UnityEngine.GameObject",
            "href": "UnityEngine.GameObject.html",
            "fullName": "UnityEngine.GameObject",
            "customField": "kept",
        }
    )
    xref_map = ReferenceMap(sorted=True, references=[record])

    fixed, report = fix_xref_map(xref_map, EDITOR_URL, ["UnityEngine"], SiteMode.EDITOR)

    assert report.ok
    assert fixed.sorted is True
    assert fixed.references[0].href == EDITOR_URL + "GameObject.html"
    assert fixed.references[0].full_name == "UnityEngine.GameObject"
    assert fixed.references[0].to_yaml_dict()["customField"] == "kept"
    assert xref_map.references[0].href == "UnityEngine.GameObject.html"
