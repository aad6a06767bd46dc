"""
palettekit Palette Orchestrator
Owns an ordered palette with lock flags and undo history, and drives the
color engine for regeneration, fine-tuning and imports.
"""
import random
import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Union

from loguru import logger

from palettekit.config import config
from palettekit.schemas import GeneratedPalette
from palettekit.services.colors.conversions import HSL, hex_to_hsl, hsl_to_hex, normalize_hex
from palettekit.services.colors.harmony import (
    HarmonyMode, generate as generate_harmony, initial_palette, pad_palette, random_hex
)
from palettekit.services.colors.naming import name_for
from palettekit.services.colors.perception import analyze_palette
from palettekit.services.export import to_css_variables
from palettekit.utils.ids import generate_color_id


@dataclass
class ColorState:
    """One palette slot. The engine computes ``hex`` and ``name`` only."""
    id: str
    hex: str
    locked: bool = False
    name: str = ""


@dataclass
class PaletteHistory:
    """Snapshot of a palette at a point in time."""
    colors: List[ColorState]
    timestamp: float = field(default_factory=time.time)


def _copy_states(colors: List[ColorState]) -> List[ColorState]:
    return [replace(c) for c in colors]


class PaletteSession:
    """
    Stateful palette: ordered colors, locks, harmony mode and bounded history.

    Every mutating operation except ``toggle_lock`` appends a snapshot to the
    history; ``undo`` steps back one snapshot.
    """

    def __init__(self, size: Optional[int] = None,
                 mode: Union[HarmonyMode, str] = HarmonyMode.RANDOM,
                 rng: Optional[random.Random] = None,
                 history_limit: Optional[int] = None):
        size = config.DEFAULT_PALETTE_SIZE if size is None else size
        self._check_size(size)

        self.rng = rng or random.Random()
        self.mode = HarmonyMode.parse(mode)
        self.history_limit = history_limit or config.HISTORY_LIMIT
        self.colors: List[ColorState] = self._random_states(size, "col")
        self.history: List[PaletteHistory] = []
        self._record()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self.colors)

    @property
    def hexes(self) -> List[str]:
        return [c.hex for c in self.colors]

    def get(self, color_id: str) -> ColorState:
        return self.colors[self._index_of(color_id)]

    def set_mode(self, mode: Union[HarmonyMode, str]) -> HarmonyMode:
        self.mode = HarmonyMode.parse(mode)
        return self.mode

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _check_size(size: int) -> None:
        if not config.validate_palette_size(size):
            raise ValueError(
                f"Palette size {size} out of range "
                f"[{config.MIN_PALETTE_SIZE}, {config.MAX_PALETTE_SIZE}]"
            )

    def _random_states(self, count: int, source: str) -> List[ColorState]:
        return [
            ColorState(id=generate_color_id(source), hex=entry["hex"], name=entry["name"])
            for entry in initial_palette(count, self.rng)
        ]

    def _index_of(self, color_id: str) -> int:
        for i, state in enumerate(self.colors):
            if state.id == color_id:
                return i
        raise ValueError(f"Unknown color id: {color_id}")

    def _record(self) -> None:
        self.history.append(PaletteHistory(colors=_copy_states(self.colors)))
        if len(self.history) > self.history_limit:
            self.history = self.history[-self.history_limit:]

    def _replace_all(self, states: List[ColorState]) -> None:
        self.colors = states
        self._record()

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate(self) -> bool:
        """
        Regenerate every unlocked slot using the current mode.

        Returns:
            False when all slots are locked and nothing changed
        """
        unlocked = [i for i, c in enumerate(self.colors) if not c.locked]
        if not unlocked:
            logger.debug("All colors locked; generate is a no-op")
            return False

        if self.mode is HarmonyMode.RANDOM:
            new_hexes = [random_hex(self.rng) for _ in unlocked]
        else:
            locked = [c for c in self.colors if c.locked]
            base = locked[0].hex if locked else random_hex(self.rng)
            harmonized = generate_harmony(
                base, self.mode, self.size + config.HARMONY_OVERSAMPLE, rng=self.rng
            )
            new_hexes = pad_palette(harmonized[:len(unlocked)], len(unlocked), rng=self.rng)

        for index, hex_color in zip(unlocked, new_hexes):
            self.colors[index] = replace(self.colors[index], hex=hex_color, name=name_for(hex_color))

        self._record()
        logger.info(f"Regenerated {len(unlocked)} of {self.size} colors in {self.mode.value} mode")
        return True

    def resize(self, size: int) -> None:
        """Shrink from the end or grow with fresh random unlocked colors."""
        self._check_size(size)
        if size == self.size:
            return

        if size < self.size:
            states = _copy_states(self.colors[:size])
        else:
            states = _copy_states(self.colors) + self._random_states(size - self.size, "col")
        self._replace_all(states)

    # ------------------------------------------------------------------
    # Fine-tuning
    # ------------------------------------------------------------------

    def toggle_lock(self, color_id: str) -> bool:
        """Flip a slot's lock flag and return the new value."""
        index = self._index_of(color_id)
        state = self.colors[index]
        self.colors[index] = replace(state, locked=not state.locked)
        return self.colors[index].locked

    def update_color(self, color_id: str, hex_color: str) -> ColorState:
        """Set a slot's color and rename it."""
        index = self._index_of(color_id)
        canonical = normalize_hex(hex_color)
        self.colors[index] = replace(self.colors[index], hex=canonical, name=name_for(canonical))
        self._record()
        return self.colors[index]

    def adjust_hsl(self, color_id: str, h: Optional[float] = None,
                   s: Optional[float] = None, l: Optional[float] = None) -> ColorState:  # noqa: E741
        """Change any of a slot's hue/saturation/lightness components."""
        current = hex_to_hsl(self.get(color_id).hex)
        adjusted = HSL(
            h=current.h if h is None else h,
            s=current.s if s is None else s,
            l=current.l if l is None else l,
        )
        return self.update_color(color_id, hsl_to_hex(adjusted))

    def move(self, from_index: int, to_index: int) -> None:
        """Move the slot at ``from_index`` so it ends up at ``to_index``."""
        for index in (from_index, to_index):
            if not 0 <= index < self.size:
                raise ValueError(f"Index {index} out of range [0, {self.size})")
        if from_index == to_index:
            return

        states = _copy_states(self.colors)
        states.insert(to_index, states.pop(from_index))
        self._replace_all(states)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        """Restore the previous snapshot. Returns False when there is none."""
        if len(self.history) <= 1:
            return False

        previous = self.history[-2]
        self.colors = _copy_states(previous.colors)
        self.history.pop()
        return True

    def restore(self, colors: List[ColorState]) -> None:
        """Make a past snapshot current again, recording it as a new entry."""
        if not colors:
            raise ValueError("Cannot restore an empty palette")
        self._replace_all(_copy_states(colors))

    # ------------------------------------------------------------------
    # Imports
    # ------------------------------------------------------------------

    def apply_image_palette(self, hex_colors: List[str]) -> None:
        """Replace the palette with extracted colors, named by the namer."""
        if not hex_colors:
            raise ValueError("No colors to apply")

        states = []
        for hex_color in hex_colors:
            canonical = normalize_hex(hex_color)
            states.append(ColorState(id=generate_color_id("col-img"), hex=canonical,
                                     name=name_for(canonical)))
        self._replace_all(states)

    def apply_generated_palette(self, payload: Union[GeneratedPalette, Mapping[str, Any]],
                                rename: bool = False) -> str:
        """
        Replace the palette with a prompt-generated one.

        Hex codes are always validated and normalized; supplied names are kept
        unless ``rename`` is set or the name is blank.

        Returns:
            The palette name from the payload
        """
        palette = GeneratedPalette.model_validate(payload)

        states = []
        for color in palette.colors:
            canonical = normalize_hex(color.hex)
            name = color.name if color.name and not rename else name_for(canonical)
            states.append(ColorState(id=generate_color_id("col-ai"), hex=canonical, name=name))
        self._replace_all(states)

        logger.info(f"Applied generated palette {palette.palette_name!r} with {len(states)} colors")
        return palette.palette_name

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def analyze(self) -> Dict[str, Any]:
        return analyze_palette(self.hexes)

    def to_css(self) -> str:
        return to_css_variables(self.hexes)
