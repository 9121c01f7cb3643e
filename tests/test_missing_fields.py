from __future__ import annotations

from wizard.missing_fields import is_blank, is_value_present, missing_fields


def test_blank_values() -> None:
    assert is_blank(None)
    assert is_blank("")
    assert is_blank([])
    assert is_blank(())
    assert not is_blank(" ")
    assert not is_blank(["A"])
    assert not is_blank("No")
    assert is_value_present("0")


def test_missing_fields_order() -> None:
    responses = {"1": "yes", "2": "", "4": []}

    assert missing_fields(responses, ["1", "2", "3", "4"]) == ["2", "3", "4"]
