from __future__ import annotations

import pytest

from pdf_acroforms.types import AcroField, CrossReference


def test_field_id_cannot_be_reassigned():
    field = AcroField(3)
    field.name = "a"

    with pytest.raises(AttributeError):
        field.id = 4
    assert field.id == 3


@pytest.mark.parametrize(
    ("field_type", "flags", "predicate"),
    [
        ("Btn", 1 << 16, "is_push_button"),
        ("Btn", 1 << 15, "is_radio"),
        ("Btn", 0, "is_checkbox"),
        ("Ch", 1 << 17, "is_combo"),
        ("Ch", 1 << 21, "is_multi_select"),
        ("Tx", 1 << 12, "is_multiline"),
        ("Tx", 1 << 13, "is_password"),
        ("Tx", 1, "is_read_only"),
        ("Sig", 2, "is_required"),
        ("Sig", 0, "is_signature"),
    ],
)
def test_flag_predicates(field_type, flags, predicate):
    assert getattr(AcroField(1, type=field_type, flags=flags), predicate)


def test_flag_predicates_depend_on_type():
    text = AcroField(1, type="Tx", flags=1 << 16)

    assert not text.is_push_button
    assert not text.is_checkbox
    assert not AcroField(1, type="Btn", flags=1 << 16).is_checkbox


def test_to_dict_copies_collections():
    field = AcroField(2, type="Ch", name="c", options={"1": "One"}, selecteds=[0])
    payload = field.to_dict()
    payload["options"]["2"] = "Two"
    payload["selecteds"].append(1)

    assert field.options == {"1": "One"}
    assert field.selecteds == [0]
    assert payload["id"] == 2


def test_cross_reference_entries():
    cross_reference = CrossReference(line=10, count=2)
    cross_reference.add_entry("0000000009 00000 n ")
    cross_reference.add_entry("0000000074 00000 n ")

    assert len(cross_reference) == 2
    assert cross_reference.get_entry(1) == "0000000074 00000 n "
    assert cross_reference.to_dict()["start_value"] is None
