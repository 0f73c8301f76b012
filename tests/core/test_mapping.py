import math

import pytest

from noisedrift.core.lattice import SamplingLattice
from noisedrift.core.mapping import (
    AlphaMapping,
    CircleCommand,
    HueMapping,
    MappingSource,
    RadiusMapping,
    RectCommand,
    normalized_value,
)
from noisedrift.core.surface import RecordingSurface

_LATTICE = SamplingLattice(stride=10.0, tile_size=5.0)


def test_normalized_value_maps_unit_range() -> None:
    assert normalized_value(-1.0) == 0.0
    assert normalized_value(0.0) == 0.5
    assert normalized_value(1.0) == 1.0


def test_alpha_mapping_produces_translucent_white_tile() -> None:
    mapping = AlphaMapping()
    assert mapping.source is MappingSource.FIELD

    cmd = mapping.command(20.0, 30.0, 0.0, _LATTICE)
    assert cmd == RectCommand(20.0, 30.0, 5.0, 5.0, "rgb(255 255 255 / 50%)")
    assert mapping.style_for(-1.0) == "rgb(255 255 255 / 0%)"
    assert mapping.style_for(1.0) == "rgb(255 255 255 / 100%)"


def test_hue_mapping_produces_hsl_tile() -> None:
    mapping = HueMapping()
    centered = SamplingLattice(stride=9.0, origin=4.5, tile_size=9.0, centered=True)

    cmd = mapping.command(13.5, 4.5, 0.5, centered)
    assert cmd == RectCommand(9.0, 0.0, 9.0, 9.0, "hsl(75deg 50% 50%)")


def test_radius_mapping_uses_raw_node_vector() -> None:
    mapping = RadiusMapping(max_radius=20.0, color="white")
    assert mapping.source is MappingSource.NODES

    assert mapping.command(0.0, 0.0, (1.0, 0.0)) == CircleCommand(0.0, 0.0, 20.0, "white")
    assert mapping.command(50.0, 100.0, (-1.0, 0.0)).radius == pytest.approx(0.0)
    assert mapping.command(50.0, 100.0, (0.0, 1.0)).radius == pytest.approx(10.0)


def test_radius_mapping_rejects_non_positive_radius() -> None:
    with pytest.raises(ValueError):
        RadiusMapping(max_radius=0.0)


def test_commands_issue_expected_surface_calls() -> None:
    surface = RecordingSurface((100, 100))
    RectCommand(1.0, 2.0, 3.0, 4.0, "white").issue(surface)
    CircleCommand(5.0, 6.0, 7.0, "white").issue(surface)

    names = [call.name for call in surface.calls]
    assert names == ["fill_rect", "begin_path", "arc", "fill"]
    assert surface.calls[0].args == (1.0, 2.0, 3.0, 4.0)
    assert surface.calls[2].args == (5.0, 6.0, 7.0, 0.0, 2.0 * math.pi)
