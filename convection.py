# convection.py

import math
import logging
from collections import namedtuple
from decimal import Decimal, ROUND_HALF_UP

import numba
import numpy as np

import constants
from primitives import FlowIndicator, Particle

logger = logging.getLogger("convection_viz")

# Left cells circulate clockwise (angle negated), right cells counter-clockwise.
_DIRECTIONS = {'left': -1.0, 'right': 1.0}


# --- JIT-Compiled Geometry ---
# Kept outside the model class and restricted to NumPy arrays and scalars, as
# required by Numba's nopython mode. No fastmath: positions must match the
# plain trigonometric formula bit for bit.

@numba.jit(nopython=True)
def _orbit_jit(phase, count, anchor_x, anchor_y, radius, direction):
    """
    Places `count` evenly spaced points on a circle, offset by the phase.
    Returns (positions[count, 2], angles[count]) with angles in radians,
    before the direction is applied.
    """
    positions = np.empty((count, 2))
    angles = np.empty(count)
    step = 360.0 / count
    for i in range(count):
        angle = ((phase + i * step) % 360.0) * (np.pi / 180.0)
        effective = direction * angle
        angles[i] = angle
        positions[i, 0] = anchor_x + np.cos(effective) * radius
        positions[i, 1] = anchor_y + np.sin(effective) * radius
    return positions, angles


def _round_half_up(value, places=0):
    """Rounds on the exact binary value, halves away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(float(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _check_phase(phase):
    if not 0 <= phase < constants.PHASE_PERIOD:
        raise ValueError(f"phase must be in [0, {constants.PHASE_PERIOD}), got {phase}")


def _check_side(side):
    if side not in constants.CELL_ANCHORS:
        raise ValueError(f"Unknown cell side '{side}', expected one of {constants.CELL_ORDER}")


def temperature_at(y):
    """Normalized temperature for a vertical position: 1 at y=30, 0 at y=70."""
    return 1.0 - (y - constants.TEMP_NORM_TOP) / constants.TEMP_NORM_SPAN


def size_class(y):
    if y > constants.SIZE_DENSE_ABOVE_Y:
        return constants.SIZE_DENSE
    if y > constants.SIZE_MEDIUM_ABOVE_Y:
        return constants.SIZE_MEDIUM
    return constants.SIZE_LIGHT


def orbit_angles(phase, count):
    """Angles in radians of `count` points spaced around the circle at this phase."""
    _check_phase(phase)
    _, angles = _orbit_jit(phase, count, 0.0, 0.0, 0.0, 1.0)
    return angles


def generate_flow_indicators(phase, side):
    """
    Builds the ring of flow indicator arrows for one convection cell.

    Data Contract:
    - Inputs:
        - phase (int): Current clock phase in [0, 360).
        - side (str): 'left' or 'right'.
    - Outputs: list[FlowIndicator] of length FLOW_INDICATOR_COUNT.
    - Invariants: Pure. Positions lie on a circle of FLOW_INDICATOR_RADIUS
      around the cell anchor.
    """
    _check_phase(phase)
    _check_side(side)
    anchor_x, anchor_y = constants.CELL_ANCHORS[side]
    positions, angles = _orbit_jit(
        phase, constants.FLOW_INDICATOR_COUNT, anchor_x, anchor_y,
        constants.FLOW_INDICATOR_RADIUS, _DIRECTIONS[side]
    )

    arrows = []
    for (x, y), angle in zip(positions, angles):
        # Keep the glyph tangent to the direction of travel.
        if side == 'left':
            rotation = (-angle * 180 / math.pi) + 90
        else:
            rotation = (angle * 180 / math.pi) - 90

        temp = temperature_at(y)
        color = (
            _round_half_up(255 * temp, 2),
            _round_half_up(100 * temp, 2),
            _round_half_up(255 * (1 - temp), 2),
            _round_half_up(constants.FLOW_INDICATOR_ALPHA, 2),
        )
        arrows.append(FlowIndicator(
            x=_round_half_up(x, 2),
            y=_round_half_up(y, 2),
            rotation=math.floor(rotation + 0.5),
            color=color,
        ))
    return arrows


def generate_particles(phase, side, band):
    """
    Builds the particles of one band of one convection cell.

    Particles moving toward the spreading center (the boundary between the two
    cells) are rising and get the warm color; the rest get the cool color.
    Color channels follow the formula as-is, including values outside [0, 255].
    """
    _check_phase(phase)
    _check_side(side)
    if band not in constants.PARTICLE_BANDS:
        raise ValueError(f"Unknown particle band '{band}', expected one of {constants.BAND_ORDER}")

    count, density = constants.PARTICLE_BANDS[band]
    actual_count = math.floor(count * density)
    anchor_x, _ = constants.CELL_ANCHORS[side]
    positions, _ = _orbit_jit(
        phase, actual_count, anchor_x, constants.BAND_CENTER_Y[band],
        constants.BAND_RADIUS[band], _DIRECTIONS[side]
    )

    particles = []
    for x, y in positions:
        x, y = float(x), float(y)
        temp = temperature_at(y)
        is_rising = (side == 'left' and x > anchor_x) or (side == 'right' and x < anchor_x)
        if is_rising:
            color = (255, math.floor(temp * 100), 0, constants.PARTICLE_ALPHA)
        else:
            color = (math.floor((1 - temp) * 100), 0, 255, constants.PARTICLE_ALPHA)
        particles.append(Particle(x=x, y=y, color=color, size=size_class(y)))
    return particles


def generate_all_flow_indicators(phase):
    indicators = []
    for side in constants.CELL_ORDER:
        indicators.extend(generate_flow_indicators(phase, side))
    return indicators


def generate_all_particles(phase):
    """All six (cell x band) groups, left cell first, bands bottom to top."""
    particles = []
    for side in constants.CELL_ORDER:
        for band in constants.BAND_ORDER:
            particles.extend(generate_particles(phase, side, band))
    return particles


def plate_offset(phase):
    """Horizontal displacement in pixels of each plate half at the ridge."""
    _check_phase(phase)
    return math.floor(math.sin(phase * math.pi / 180) * constants.PLATE_OFFSET_AMPLITUDE + 0.5)


def subduction_offset(phase):
    """Vertical jitter in pixels of the subducting slabs."""
    _check_phase(phase)
    return phase % 2


Frame = namedtuple('Frame', ['phase', 'flow_indicators', 'particles', 'plate_offset', 'subduction_offset'])


def build_frame(phase):
    return Frame(
        phase=phase,
        flow_indicators=generate_all_flow_indicators(phase),
        particles=generate_all_particles(phase),
        plate_offset=plate_offset(phase),
        subduction_offset=subduction_offset(phase),
    )


class ConvectionModel:
    """
    The single animation instance: owns the current phase and frame.

    Data Contract:
    - Inputs: log_every_ticks (int) - Throttle for the per-tick debug log.
    - Outputs: `frame` always holds the primitives for `phase`.
    - Side Effects: None beyond replacing `frame` on every tick.
    - Invariants: The frame is rebuilt from scratch on every tick, never
      patched. `recompute_count` counts every rebuild, including the first.
    """
    def __init__(self, log_every_ticks: int = constants.PHASE_PERIOD):
        self.log_every_ticks = max(1, int(log_every_ticks))
        self.phase = 0
        self.recompute_count = 0
        self.frame = None
        self._rebuild(0)

        logger.info(
            f"ConvectionModel created: {len(self.frame.flow_indicators)} flow indicators, "
            f"{len(self.frame.particles)} particles per frame."
        )

    def _rebuild(self, phase):
        self.frame = build_frame(phase)
        self.phase = phase
        self.recompute_count += 1

    def on_tick(self, phase: int):
        """Clock listener: regenerate every primitive for the new phase."""
        self._rebuild(phase)

        if self.recompute_count % self.log_every_ticks == 0:
            logger.debug(
                f"Recompute={self.recompute_count}, "
                f"Phase={phase}, "
                f"PlateOffset={self.frame.plate_offset:+d}, "
                f"Particles={len(self.frame.particles)}, "
                f"FlowIndicators={len(self.frame.flow_indicators)}"
            )
