"""Plan file reading and writing tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from plan_metadata_engine.plan_records import (
    PlanRecordError,
    plan_to_dict,
    read_plan_records,
    write_plan_records,
)


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_reads_json_plan_list(tmp_path: Path) -> None:
    plans_path = _write_file(
        tmp_path / "plans.json",
        json.dumps(
            [
                {
                    "id": "P1",
                    "name": "Value Plus",
                    "carrier": "Aetna",
                    "plan_year": "2026",
                    "metadata": {"premium_monthly": 30, "old_rate": 1},
                },
                {"plan_id": 7, "name": " "},
            ]
        ),
    )

    plans = read_plan_records(plans_path)

    assert [plan.plan_id for plan in plans] == ["P1", "7"]
    assert plans[0].plan_year == 2026
    assert plans[0].carrier == "Aetna"
    assert plans[0].metadata.value("premium_monthly") == 30
    assert plans[1].name == "Unnamed Plan"
    assert plans[1].carrier is None
    assert len(plans[1].metadata) == 0


def test_reads_yaml_mapping_with_plans_key(tmp_path: Path) -> None:
    plans_path = _write_file(
        tmp_path / "plans.yaml",
        """
plans:
  - plan_id: P1
    name: Value Plus
    plan_year: 2026
    type_network: HMO
    metadata:
      effective_start: 2026-01-01
""",
    )

    plans = read_plan_records(plans_path)

    assert plans[0].type_network == "HMO"
    assert plans[0].metadata.date("effective_start") == "2026-01-01"


@pytest.mark.parametrize(
    ("contents", "message"),
    [
        ('{"plans": 3}', "must contain a list of plans"),
        ('[{"name": "no id"}]', "missing a plan id"),
        ('[{"id": "P1"}, {"id": "P1"}]', "Duplicate plan id 'P1'"),
        ('["text"]', "must be a mapping"),
        ('[{"id": "P1", "metadata": [1]}]', "metadata must be a mapping"),
        ('[{"id": "P1", "plan_year": "next"}]', "plan_year must be an integer"),
        ("plans: [unclosed", "Failed to parse plans file"),
    ],
)
def test_invalid_plan_files_are_rejected(tmp_path: Path, contents: str, message: str) -> None:
    plans_path = _write_file(tmp_path / "plans.json", contents)

    with pytest.raises(PlanRecordError, match=message):
        read_plan_records(plans_path)


def test_missing_plan_file_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(PlanRecordError, match="Plans file not found"):
        read_plan_records(tmp_path / "missing.json")


def test_unreadable_plan_files_are_rejected(tmp_path: Path) -> None:
    binary_path = tmp_path / "plans.bin"
    binary_path.write_bytes(b"\xff\xfe\x00plans")

    with pytest.raises(PlanRecordError, match="Unable to read plans file"):
        read_plan_records(tmp_path)
    with pytest.raises(PlanRecordError, match="Unable to read plans file"):
        read_plan_records(binary_path)


def test_written_plans_can_be_read_back(tmp_path: Path) -> None:
    source = _write_file(
        tmp_path / "plans.json",
        json.dumps([{"id": "P1", "name": "A", "metadata": {"premium_monthly": 30}}]),
    )
    plans = read_plan_records(source)

    output = write_plan_records(plans, tmp_path / "out" / "plans.json")

    assert read_plan_records(output) == plans
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["plans"][0] == plan_to_dict(plans[0])
    assert payload["plans"][0]["metadata"] == {"premium_monthly": 30}
