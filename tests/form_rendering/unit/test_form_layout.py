"""Form layout tests."""

from __future__ import annotations

import json

from plan_metadata_engine.form_rendering import (
    FormMode,
    WidgetKind,
    build_form_layout,
    layout_to_dict,
)
from plan_metadata_engine.schema_definition import PLANS_METADATA_SCHEMA
from plan_metadata_engine.schema_management import ParsedSchema, get_parsed_schema, parse_schema


def _schema() -> ParsedSchema:
    return get_parsed_schema(PLANS_METADATA_SCHEMA)


def _section(layout, key: str):
    return next(section for section in layout.sections if section.key == key)


def test_layout_nests_variants_under_base_controls() -> None:
    layout = build_form_layout(_schema(), {"premium_monthly": 30}, FormMode.EDIT)

    financials = _section(layout, "financials")
    premium = next(control for control in financials.controls if control.key == "premium_monthly")
    assert [control.key for control in financials.controls] == [
        "giveback_monthly",
        "moop_annual",
        "premium_monthly",
    ]
    assert [variant.key for variant in premium.variants] == [
        "premium_monthly_with_extra_help",
        "premium_monthly_medicaid_qmb",
    ]
    assert premium.value == 30
    assert premium.widget == WidgetKind.NUMBER
    assert premium.minimum == 0
    assert premium.variants[0].value == ""
    assert financials.orphan_variants == ()


def test_layout_sections_follow_schema_order() -> None:
    layout = build_form_layout(_schema(), None)

    assert [section.key for section in layout.sections] == [
        section.key for section in _schema().sections
    ]
    assert layout.mode == FormMode.EDIT


def test_compare_mode_marks_every_control_read_only() -> None:
    layout = build_form_layout(_schema(), {"premium_monthly": 30, "legacy_key": "x"}, "compare")

    controls = [
        control
        for section in layout.sections
        for base in section.controls
        for control in (base, *base.variants)
    ]
    assert controls
    assert all(control.read_only for control in controls)
    assert all(control.read_only for control in layout.legacy_fields)


def test_section_filter_turns_variants_without_base_into_orphans() -> None:
    schema = parse_schema(
        {
            "sections": {"a": {"title": "A"}, "b": {"title": "B"}},
            "properties": {
                "base_field": {"type": "number", "section": "a"},
                "base_field_variant_a": {"type": "number", "section": "b", "baseKey": "base_field"},
            },
        }
    )

    layout = build_form_layout(schema, {}, sections={"b"})

    assert [section.key for section in layout.sections] == ["b"]
    assert layout.sections[0].controls == ()
    assert [control.key for control in layout.sections[0].orphan_variants] == [
        "base_field_variant_a"
    ]


def test_field_filter_restricts_the_working_set_and_skips_empty_sections() -> None:
    layout = build_form_layout(
        _schema(),
        {},
        fields={"premium_monthly_with_extra_help", "effective_start"},
    )

    assert [section.key for section in layout.sections] == ["financials", "dates"]
    assert [control.key for control in layout.sections[0].orphan_variants] == [
        "premium_monthly_with_extra_help"
    ]


def test_uncategorized_fields_render_last() -> None:
    schema = parse_schema(
        {
            "sections": {"a": {"title": "A"}},
            "properties": {
                "known": {"type": "string", "section": "a"},
                "stray": {"type": "string", "section": "gone"},
            },
        }
    )

    layout = build_form_layout(schema, {})

    assert [section.title for section in layout.sections] == ["A", "Uncategorized"]


def test_legacy_fields_render_as_text_with_literal_keys() -> None:
    layout = build_form_layout(
        _schema(),
        {"premium_monthly": 30, "old_rate": 1.5, "extras": {"gym": True}, "flag": False},
    )

    legacy = {control.key: control for control in layout.legacy_fields}
    assert list(legacy) == ["old_rate", "extras", "flag"]
    assert legacy["old_rate"].label == "old_rate"
    assert legacy["old_rate"].value == "1.5"
    assert legacy["extras"].value == '{"gym": true}'
    assert legacy["flag"].value == "false"
    assert all(control.widget == WidgetKind.TEXT for control in legacy.values())


def test_date_values_render_without_time_of_day() -> None:
    layout = build_form_layout(_schema(), {"effective_start": "2026-01-01T10:30:00"})

    values = {control.key: control.value for control in _section(layout, "dates").controls}
    assert values == {"effective_start": "2026-01-01", "effective_end": ""}


def test_layout_to_dict_is_json_serializable() -> None:
    layout = build_form_layout(_schema(), {"premium_monthly": 30, "old": "x"}, FormMode.CREATE)

    payload = json.loads(json.dumps(layout_to_dict(layout)))

    assert payload["mode"] == "create"
    assert payload["legacy_fields"]["title"] == "Legacy Fields"
    assert payload["legacy_fields"]["controls"][0]["key"] == "old"
    financials = payload["sections"][0]
    premium = next(item for item in financials["controls"] if item["key"] == "premium_monthly")
    assert premium["widget"] == "number"
    assert len(premium["variants"]) == 2
