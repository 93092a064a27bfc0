"""Tests for the cutting-list NestingEngine.

Tests cover:
- Material filtering and grouping
- Grain-driven rotation
- Shelf placement, row wrap and sheet overflow
- Efficiency, sheet count and area metrics
- Result and part identifiers
"""

from __future__ import annotations

import logging

import pytest

from cabinet_wms.domain import CuttingListItem, NestingEngine, NestingError, compute_nesting
from cabinet_wms.domain.services.nesting import (
    GUTTER,
    filter_by_material,
    group_by_material,
    parse_cutting_list,
)

SHEET_AREA = 2440 * 1220


def make_item(
    item_id: str = "part",
    material_type: str = "Plywood",
    thickness: float = 18,
    length: float = 600,
    width: float = 300,
    quantity: int = 1,
    grain: str | None = None,
) -> CuttingListItem:
    return CuttingListItem(
        id=item_id,
        material_type=material_type,
        thickness=thickness,
        length=length,
        width=width,
        quantity=quantity,
        grain=grain,
    )


@pytest.fixture
def engine() -> NestingEngine:
    return NestingEngine()


# =============================================================================
# Filtering and grouping
# =============================================================================


class TestFilterAndGroup:
    """Tests for material filtering and material/thickness grouping."""

    def test_filter_is_case_insensitive(self) -> None:
        items = [
            make_item("a", material_type="Plywood"),
            make_item("b", material_type="PLYWOOD"),
            make_item("c", material_type="MDF"),
        ]

        kept = filter_by_material(items, "plywood")

        assert [item.id for item in kept] == ["a", "b"]

    @pytest.mark.parametrize("material_type", [None, "", "all"])
    def test_filter_disabled(self, material_type: str | None) -> None:
        items = [make_item("a"), make_item("b", material_type="MDF")]

        assert filter_by_material(items, material_type) == items

    def test_group_key_includes_thickness(self) -> None:
        items = [
            make_item("a", thickness=18),
            make_item("b", thickness=12),
            make_item("c", thickness=18),
        ]

        groups = group_by_material(items)

        assert list(groups) == ["Plywood-18", "Plywood-12"]
        assert [item.id for item in groups["Plywood-18"]] == ["a", "c"]

    def test_group_key_keeps_fractional_thickness(self) -> None:
        groups = group_by_material([make_item(thickness=18.5)])

        assert list(groups) == ["Plywood-18.5"]

    def test_grouping_is_case_sensitive(self, engine: NestingEngine) -> None:
        items = [make_item("a", material_type="Plywood"), make_item("b", material_type="plywood")]

        results = engine.compute(items)

        assert [r.material_type for r in results] == ["Plywood", "plywood"]

    def test_filter_then_group(self, engine: NestingEngine) -> None:
        items = [
            make_item("a", material_type="Plywood"),
            make_item("b", material_type="MDF", thickness=6),
            make_item("c", material_type="plywood", thickness=12),
        ]

        results = engine.compute(items, material_type="PLYWOOD")

        assert [(r.material_type, r.thickness) for r in results] == [
            ("Plywood", 18),
            ("plywood", 12),
        ]

    def test_one_result_per_group_in_first_seen_order(self, engine: NestingEngine) -> None:
        items = [
            make_item("a", material_type="MDF", thickness=6),
            make_item("b", material_type="Plywood"),
            make_item("c", material_type="MDF", thickness=6),
        ]

        results = engine.compute(items)

        assert [r.material_type for r in results] == ["MDF", "Plywood"]
        assert [p.part_id for p in results[0].parts] == ["a", "c"]

    def test_empty_cutting_list(self, engine: NestingEngine) -> None:
        assert engine.compute([]) == []

    def test_filter_matching_nothing(self, engine: NestingEngine) -> None:
        assert engine.compute([make_item()], material_type="Oak") == []


# =============================================================================
# Placement
# =============================================================================


class TestPlacement:
    """Tests for rotation and shelf placement."""

    def test_every_unit_is_placed(self, engine: NestingEngine) -> None:
        items = [
            make_item("a", quantity=3),
            make_item("b", quantity=2, material_type="MDF"),
            make_item("c", quantity=1),
        ]

        results = engine.compute(items)

        assert sum(r.part_count for r in results) == 6
        assert [p.part_id for p in results[0].parts] == ["a", "a", "a", "c"]

    def test_grain_width_rotates(self, engine: NestingEngine) -> None:
        result = engine.compute([make_item(length=720, width=560, grain="width")])[0]
        part = result.parts[0]

        assert part.rotation == 90
        assert part.rotated
        assert (part.length, part.width) == (560, 720)
        assert part.grain == "width"

    @pytest.mark.parametrize("grain", [None, "none", "length", "diagonal"])
    def test_other_grains_do_not_rotate(self, engine: NestingEngine, grain: str | None) -> None:
        part = engine.compute([make_item(length=720, width=560, grain=grain)])[0].parts[0]

        assert part.rotation == 0
        assert (part.length, part.width) == (720, 560)
        assert part.grain == grain

    def test_parts_advance_along_row(self, engine: NestingEngine) -> None:
        parts = engine.compute([make_item(length=600, width=300, quantity=3)])[0].parts

        assert [(p.x, p.y) for p in parts] == [(0, 0), (610, 0), (1220, 0)]

    def test_row_wraps_at_sheet_length(self, engine: NestingEngine) -> None:
        parts = engine.compute(
            [make_item(length=600, width=300, quantity=2)],
            sheet_size={"length": 1000, "width": 1220},
        )[0].parts

        assert (parts[0].x, parts[0].y) == (0, 0)
        assert (parts[1].x, parts[1].y) == (0, 300 + GUTTER)

    def test_row_height_is_tallest_part(self, engine: NestingEngine) -> None:
        items = [
            make_item("short", length=400, width=200),
            make_item("tall", length=400, width=500),
            make_item("next", length=400, width=100),
        ]

        parts = engine.compute(items, sheet_size="1000x2000")[0].parts

        assert (parts[2].x, parts[2].y) == (0, 500 + GUTTER)

    def test_overflow_restarts_at_origin(self, engine: NestingEngine) -> None:
        result = engine.compute(
            [make_item(length=600, width=300, quantity=3)],
            sheet_size="1000x500",
        )[0]

        assert [(p.x, p.y) for p in result.parts] == [(0, 0), (0, 0), (0, 0)]
        assert result.overflow_resets == 2

    def test_overflow_logs_one_warning_per_group(
        self, engine: NestingEngine, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="cabinet_wms.domain.services.nesting"):
            engine.compute([make_item(length=600, width=300, quantity=3)], sheet_size="1000x500")

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        debugs = [r for r in caplog.records if "overflowed sheet width" in r.getMessage()]
        assert len(warnings) == 1
        assert len(debugs) == 2

    def test_no_overflow_on_roomy_sheet(self, engine: NestingEngine) -> None:
        result = engine.compute([make_item(quantity=4)])[0]

        assert result.overflow_resets == 0


# =============================================================================
# Metrics
# =============================================================================


class TestMetrics:
    """Tests for efficiency, sheet count and area figures."""

    def test_single_part_scenario(self) -> None:
        item = make_item("p1", length=720, width=560)

        results = compute_nesting([item], sheet_size="not-a-size")

        assert len(results) == 1
        result = results[0]
        assert result.sheet_size.length == 2440
        assert result.sheet_size.width == 1220
        assert (result.parts[0].x, result.parts[0].y) == (0, 0)
        assert result.parts[0].part_id == "p1"
        assert result.sheet_count == 1
        assert result.efficiency == pytest.approx(
            min(85, 720 * 560 / SHEET_AREA * 100)
        )

    def test_efficiency_capped_at_85(self, engine: NestingEngine) -> None:
        result = engine.compute(
            [make_item(length=1000, width=600, quantity=2)],
            sheet_size="1000x1000",
        )[0]

        assert result.efficiency == pytest.approx(85)
        # ceil(1_200_000 / 850_000)
        assert result.sheet_count == 2

    def test_efficiency_in_range(self, engine: NestingEngine) -> None:
        items = [
            make_item("a", length=100, width=50),
            make_item("b", length=2400, width=1200, quantity=5, material_type="MDF"),
        ]

        for result in engine.compute(items):
            assert 0 < result.efficiency <= 85

    def test_exact_quotient_is_one_sheet(self, engine: NestingEngine) -> None:
        items = [make_item(length=333.3, width=777.7, quantity=3)]

        assert engine.compute(items)[0].sheet_count == 1

    def test_area_uses_unrotated_dimensions(self, engine: NestingEngine) -> None:
        plain = engine.compute([make_item(length=720, width=560)])[0]
        rotated = engine.compute([make_item(length=720, width=560, grain="width")])[0]

        assert rotated.required_area == pytest.approx(720 * 560)
        assert rotated.efficiency == pytest.approx(plain.efficiency)

    def test_total_and_waste_area(self, engine: NestingEngine) -> None:
        result = engine.compute(
            [make_item(length=1000, width=600, quantity=2)],
            sheet_size="1000x1000",
        )[0]

        assert result.total_area == pytest.approx(2 * 1_000_000)
        assert result.waste_area == pytest.approx(2 * 1_000_000 - 1_200_000)


# =============================================================================
# Identifiers
# =============================================================================


class TestIdentifiers:
    """Tests for result and part identifiers."""

    def test_ids_unique_within_response(self, engine: NestingEngine) -> None:
        items = [
            make_item("a", quantity=3),
            make_item("b", quantity=2, material_type="MDF"),
        ]

        results = engine.compute(items)

        result_ids = [r.id for r in results]
        part_ids = [p.id for r in results for p in r.parts]
        assert len(set(result_ids)) == len(result_ids)
        assert len(set(part_ids)) == len(part_ids)

    def test_ids_differ_between_calls(self, engine: NestingEngine) -> None:
        first = engine.compute([make_item()])[0]
        second = engine.compute([make_item()])[0]

        assert first.id != second.id

    def test_overflow_counter_not_serialized(self, engine: NestingEngine) -> None:
        result = engine.compute([make_item()])[0]

        assert "overflowResets" not in result.to_dict()


# =============================================================================
# Stored cutting lists
# =============================================================================


class TestParseCuttingList:
    """Tests for building items from unvalidated camelCase mappings."""

    def test_parses_camel_case_items(self) -> None:
        items = parse_cutting_list(
            [{"id": 7, "materialType": "MDF", "thickness": 6, "length": 720, "width": 600}]
        )

        assert items == [
            CuttingListItem(
                id=7, material_type="MDF", thickness=6, length=720, width=600, quantity=1
            )
        ]

    def test_collects_every_error(self) -> None:
        raw = [
            {"materialType": "MDF", "thickness": 6, "length": "long", "width": 600},
            "not an item",
            {"materialType": "MDF", "thickness": 6, "length": 100, "width": 100, "quantity": 0},
        ]

        with pytest.raises(NestingError) as exc_info:
            parse_cutting_list(raw)

        errors = exc_info.value.errors
        assert len(errors) == 3
        assert errors[0].startswith("cuttingList[0]:")
        assert errors[1] == "cuttingList[1]: expected an object"
        assert errors[2].startswith("cuttingList[2]:")

    def test_rejects_fractional_quantity(self) -> None:
        raw = [{"materialType": "MDF", "thickness": 6, "length": 1, "width": 1, "quantity": 1.5}]

        with pytest.raises(NestingError):
            parse_cutting_list(raw)


class TestNonFiniteInput:
    """Tests for dimensions that cannot produce a finite area."""

    def test_item_rejects_infinite_length(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            make_item(length=float("inf"))

    def test_item_rejects_nan_width(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            make_item(width=float("nan"))

    def test_overflowing_area_is_a_nesting_error(self, engine: NestingEngine) -> None:
        with pytest.raises(NestingError) as exc_info:
            engine.compute([make_item(length=1e200, width=1e200)])

        assert "too large" in exc_info.value.errors[0]

    def test_stored_infinite_length(self) -> None:
        raw = [{"materialType": "MDF", "thickness": 6, "length": float("inf"), "width": 1}]

        with pytest.raises(NestingError) as exc_info:
            parse_cutting_list(raw)

        assert exc_info.value.errors == ["cuttingList[0]: 'length' must be finite"]
