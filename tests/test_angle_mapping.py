import pytest

from cpb.core.angle_mapping import (
    DEFAULT_MAPPING,
    AngleProvider,
    CustomAngleMapping,
    coerce_mapping,
    is_angle_provider,
)
from cpb.utils.errors import CpbValidationError


class Provider:
    def progress_angle(self, percent):
        return percent * 90

    def start_angle(self, percent):
        return 45


def test_custom_mapping_wraps_plain_functions():
    m = CustomAngleMapping(progress_angle=lambda p: p * 180, start_angle=lambda p: 0)
    assert m.progress_angle(0.5) == 90.0
    assert m.start_angle(0.5) == 0.0
    assert isinstance(m, AngleProvider)


def test_custom_mapping_rejects_non_callables():
    with pytest.raises(CpbValidationError):
        CustomAngleMapping(progress_angle=90, start_angle=lambda p: 0)


def test_from_provider():
    m = CustomAngleMapping.from_provider(Provider())
    assert m.progress_angle(1.0) == 90.0
    assert m.start_angle(0.0) == 45.0


def test_from_provider_rejects_incomplete_objects():
    class Half:
        def progress_angle(self, percent):
            return 0

    with pytest.raises(CpbValidationError):
        CustomAngleMapping.from_provider(Half())


def test_is_angle_provider():
    assert is_angle_provider(Provider())
    assert not is_angle_provider(None)
    assert not is_angle_provider(object())


def test_coerce_mapping():
    assert coerce_mapping(None) is DEFAULT_MAPPING is None
    p = Provider()
    assert coerce_mapping(p) is p
    with pytest.raises(CpbValidationError):
        coerce_mapping("linear")
