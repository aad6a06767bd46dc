"""
Tests for the stateful palette session.
"""

import random

import pytest
from pydantic import ValidationError

from palettekit.services.colors.conversions import InvalidColorFormat
from palettekit.services.colors.harmony import HarmonyMode
from palettekit.services.colors.naming import name_for
from palettekit.services.orchestrator import PaletteSession


@pytest.fixture
def session():
    return PaletteSession(size=5, rng=random.Random(1))


class TestSessionSetup:

    def test_defaults(self, session):
        assert session.size == 5
        assert session.mode is HarmonyMode.RANDOM
        assert len(session.history) == 1
        assert len({c.id for c in session.colors}) == 5
        assert all(c.name == name_for(c.hex) for c in session.colors)
        assert not any(c.locked for c in session.colors)

    @pytest.mark.parametrize("size", [2, 9, 0])
    def test_size_out_of_range(self, size):
        with pytest.raises(ValueError):
            PaletteSession(size=size)

    def test_mode_by_name(self):
        session = PaletteSession(mode="analogous", rng=random.Random(0))
        assert session.mode is HarmonyMode.ANALOGOUS
        assert session.set_mode("Triadic") is HarmonyMode.TRIADIC

    def test_unknown_id(self, session):
        with pytest.raises(ValueError):
            session.get("col-missing")


class TestGenerate:

    def test_locked_slots_untouched(self, session):
        keep = session.colors[1]
        session.toggle_lock(keep.id)

        assert session.generate() is True
        assert session.colors[1].hex == keep.hex
        assert session.colors[1].locked
        assert len(session.history) == 2

    def test_all_locked_is_noop(self, session):
        for c in session.colors:
            session.toggle_lock(c.id)
        before = session.hexes

        assert session.generate() is False
        assert session.hexes == before
        assert len(session.history) == 1

    def test_harmony_uses_first_locked_color_as_base(self, session):
        session.update_color(session.colors[2].id, "#FF0000")
        session.toggle_lock(session.colors[2].id)
        session.set_mode(HarmonyMode.TRIADIC)

        session.generate()

        assert session.colors[2].hex == "#FF0000"
        assert set(session.hexes) <= {"#FF0000", "#00FF00", "#0000FF"}
        assert all(c.name == name_for(c.hex) for c in session.colors)

    def test_harmony_without_locks(self, session):
        session.set_mode(HarmonyMode.COMPLEMENTARY)
        assert session.generate() is True
        assert session.size == 5


class TestResize:

    def test_shrink_keeps_prefix(self, session):
        ids = [c.id for c in session.colors]
        session.resize(3)
        assert [c.id for c in session.colors] == ids[:3]

    def test_grow_appends_unlocked(self, session):
        hexes = session.hexes
        session.resize(7)
        assert session.size == 7
        assert session.hexes[:5] == hexes
        assert not any(c.locked for c in session.colors[5:])

    def test_same_size_records_nothing(self, session):
        session.resize(5)
        assert len(session.history) == 1

    def test_out_of_range(self, session):
        with pytest.raises(ValueError):
            session.resize(10)


class TestFineTuning:

    def test_toggle_lock_is_not_recorded(self, session):
        cid = session.colors[0].id
        assert session.toggle_lock(cid) is True
        assert session.toggle_lock(cid) is False
        assert len(session.history) == 1

    def test_update_color_normalizes_and_renames(self, session):
        state = session.update_color(session.colors[0].id, "#0f0")
        assert state.hex == "#00FF00"
        assert state.name == "Forest Green"

    def test_update_color_rejects_bad_hex(self, session):
        with pytest.raises(InvalidColorFormat):
            session.update_color(session.colors[0].id, "green")

    def test_adjust_hsl(self, session):
        cid = session.colors[0].id
        session.update_color(cid, "#FF0000")
        assert session.adjust_hsl(cid, h=120).hex == "#00FF00"
        assert session.adjust_hsl(cid, l=100).hex == "#FFFFFF"

    def test_move(self, session):
        a, b, c, d, e = [s.id for s in session.colors]
        session.move(0, 2)
        assert [s.id for s in session.colors] == [b, c, a, d, e]

    def test_move_out_of_range(self, session):
        with pytest.raises(ValueError):
            session.move(0, 5)


class TestHistory:

    def test_undo_restores_previous(self, session):
        before = session.hexes
        session.update_color(session.colors[0].id, "#123456")
        assert session.undo() is True
        assert session.hexes == before

    def test_undo_with_single_snapshot(self, session):
        assert session.undo() is False

    def test_history_is_bounded(self):
        session = PaletteSession(rng=random.Random(2), history_limit=3)
        for value in ("#111111", "#222222", "#333333", "#444444"):
            session.update_color(session.colors[0].id, value)
        assert len(session.history) == 3
        assert session.history[-1].colors[0].hex == "#444444"

    def test_snapshots_are_copies(self, session):
        original = session.hexes[0]
        session.update_color(session.colors[0].id, "#ABCDEF")
        assert session.history[0].colors[0].hex == original
        assert session.history[1].colors[0].hex == "#ABCDEF"

    def test_restore(self, session):
        original = session.history[0].colors
        session.update_color(session.colors[0].id, "#ABCDEF")
        session.restore(original)
        assert session.hexes == [c.hex for c in original]
        assert len(session.history) == 3


class TestImports:

    def test_apply_image_palette(self, session):
        session.apply_image_palette(["#000000", "#ffffff"])
        assert session.hexes == ["#000000", "#FFFFFF"]
        assert all(c.id.startswith("col-img-") for c in session.colors)
        assert [c.name for c in session.colors] == ["Void Black", "Pure White"]

    def test_apply_empty_image_palette(self, session):
        with pytest.raises(ValueError):
            session.apply_image_palette([])

    def test_apply_generated_palette_keeps_names(self, session):
        payload = {
            "palette_name": "Dusk",
            "colors": [
                {"hex": "#ff5733", "name": "Ember", "description": "warm glow"},
                {"hex": "#1F4E79"},
            ],
        }
        assert session.apply_generated_palette(payload) == "Dusk"
        assert session.hexes == ["#FF5733", "#1F4E79"]
        assert [c.name for c in session.colors] == ["Ember", name_for("#1F4E79")]
        assert all(c.id.startswith("col-ai-") for c in session.colors)

    def test_apply_generated_palette_rename(self, session):
        payload = {"palette_name": "Dusk", "colors": [{"hex": "#FF5733", "name": "Ember"}]}
        session.apply_generated_palette(payload, rename=True)
        assert session.colors[0].name == name_for("#FF5733")

    def test_apply_generated_palette_validates_hex(self, session):
        before = session.hexes
        with pytest.raises(InvalidColorFormat):
            session.apply_generated_palette({"colors": [{"hex": "orange"}]})
        assert session.hexes == before

    def test_apply_generated_palette_requires_colors(self, session):
        with pytest.raises(ValidationError):
            session.apply_generated_palette({"palette_name": "Empty", "colors": []})


class TestViews:

    def test_analyze_and_css(self, session):
        assert session.analyze()["count"] == 5
        css = session.to_css()
        assert css.startswith(":root {")
        assert "--color-5:" in css
