import pytest
from core.state import BindKind, BindingSpec


def test_spec_kind_must_match_target():
    with pytest.raises(ValueError):
        BindingSpec(BindKind.DIGITAL, "Jump", axis="joy0.axis.0")
    with pytest.raises(ValueError):
        BindingSpec(BindKind.ANALOG, "Steer", control="key.a")
    with pytest.raises(ValueError):
        BindingSpec(BindKind.DIGITAL, "Both", control="key.a", axis="joy0.axis.0")
    with pytest.raises(ValueError):
        BindingSpec.digital("", "key.a")


def test_spec_from_dict_infers_kind():
    jump = BindingSpec.from_dict({"handle": "Jump", "control": "key.space"})
    steer = BindingSpec.from_dict({"handle": "Steer", "axis": "joy0.axis.0"})
    trigger = BindingSpec.from_dict({"handle": "Fire", "kind": "Analog", "axis": "joy0.axis.5"})

    assert jump == BindingSpec.digital("Jump", "key.space")
    assert steer.kind is BindKind.ANALOG and steer.axis == "joy0.axis.0"
    assert trigger.kind is BindKind.ANALOG


def test_spec_from_dict_rejects_bad_entries():
    with pytest.raises(ValueError):
        BindingSpec.from_dict({"handle": "Jump"})
    with pytest.raises(ValueError):
        BindingSpec.from_dict({"handle": "Jump", "kind": "wobbly", "control": "key.space"})
    with pytest.raises(ValueError):
        BindingSpec.from_dict("Jump")
