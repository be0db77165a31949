# constants.py

"""
Application Constants

This module defines the fixed geometry, timing and palette of the convection
diagram. None of these values are read from the config file; they are the
diagram itself.

Data Contract:
- All values are immutable constants.
- Positions of animated primitives are percentages of the outer core field.
- Units are specified in comments where applicable.
"""

import pygame

# Screen dimensions
TITLE_HEIGHT = 48  # Pixels
DIAGRAM_WIDTH = 896  # Pixels
DIAGRAM_HEIGHT = 384  # Pixels
LEGEND_HEIGHT = 128  # Pixels
WIDTH = DIAGRAM_WIDTH
HEIGHT = TITLE_HEIGHT + DIAGRAM_HEIGHT + LEGEND_HEIGHT

# Framerate of the render loop. The phase clock runs independently of it.
FPS = 60  # Frames per second

# Window Title
TITLE = "Earth's Interior Structure and Divergent Plate Boundary Model"

# Phase clock
TICK_INTERVAL_MS = 50  # Milliseconds between phase advances
PHASE_PERIOD = 360  # Phase wraps to 0 at this value (degrees)
TICK_EVENT = pygame.USEREVENT + 1

# Convection cells: anchor point of each loop, in percent (x, y).
CELL_ANCHORS = {
    'left': (25.0, 50.0),
    'right': (75.0, 50.0),
}
CELL_ORDER = ('left', 'right')

# Flow indicators
FLOW_INDICATOR_COUNT = 12  # Arrows per cell
FLOW_INDICATOR_RADIUS = 20.0  # Percent
FLOW_INDICATOR_ALPHA = 0.6

# Particle bands: (base count, density multiplier). Drawn count is floor(count * multiplier).
PARTICLE_BANDS = {
    'bottom': (20, 2),
    'middle': (25, 1.5),
    'top': (20, 1),
}
BAND_ORDER = ('bottom', 'middle', 'top')
BAND_CENTER_Y = {
    'top': 35.0,
    'middle': 50.0,
    'bottom': 65.0,
}
BAND_RADIUS = {
    'top': 15.0,
    'middle': 20.0,
    'bottom': 15.0,
}
PARTICLE_ALPHA = 0.8

# Temperature normalization: t = (y - TEMP_NORM_TOP) / TEMP_NORM_SPAN, temp = 1 - t
TEMP_NORM_TOP = 30.0  # Percent
TEMP_NORM_SPAN = 40.0  # Percent

# Particle diameter classes by vertical position
SIZE_DENSE_ABOVE_Y = 60.0  # y above this -> SIZE_DENSE
SIZE_MEDIUM_ABOVE_Y = 45.0  # y above this (and not dense) -> SIZE_MEDIUM
SIZE_DENSE = 8  # Pixels
SIZE_MEDIUM = 6  # Pixels
SIZE_LIGHT = 4  # Pixels

# Plate spreading
PLATE_OFFSET_AMPLITUDE = 8  # Pixels

# Colors (RGB)
BACKGROUND = (17, 24, 39)
CARD = (255, 255, 255)
TEXT_DARK = (15, 23, 42)
WHITE = (255, 255, 255)
RED_900 = (127, 29, 29)
RED_800 = (153, 27, 27)
RED_700 = (185, 28, 28)
RED_500 = (239, 68, 68)
ORANGE_800 = (154, 52, 18)
ORANGE_700 = (194, 65, 12)
ORANGE_600 = (234, 88, 12)
ORANGE_500 = (249, 115, 22)
STONE_700 = (68, 64, 60)
STONE_600 = (87, 83, 78)
STONE_500 = (120, 113, 108)

# Backdrop layer gradients.
# Each keyframe is a tuple: (normalized_position from top, (R, G, B) color).
INNER_CORE_GRADIENT = [
    (0.0, RED_700),
    (0.5, RED_800),
    (1.0, RED_900),
]
OUTER_CORE_GRADIENT = [
    (0.0, ORANGE_600),
    (0.5, ORANGE_700),
    (1.0, ORANGE_800),
]
LOWER_MANTLE_GRADIENT = [
    (0.0, ORANGE_500),
    (1.0, ORANGE_600),
]
UPPER_MANTLE_GRADIENT = [
    (0.0, STONE_700),
    (1.0, ORANGE_500),
]
TEMPERATURE_SCALE_GRADIENT = [
    (0.0, STONE_600),
    (1.0, RED_900),
]

# Ridge and subduction zones
RIDGE_WIDTH = 32  # Pixels
RIDGE_SEAM_WIDTH = 4  # Pixels
RIDGE_SEAM_ALPHA = 128  # 0-255
SUBDUCTION_WIDTH = 16  # Pixels
SUBDUCTION_ALPHA = 204  # 0-255

# Flow indicator glyph
ARROW_LENGTH = 24  # Pixels
ARROW_WIDTH = 8  # Pixels

# Temperature scale and legend text
SCALE_WIDTH = 16  # Pixels
SCALE_MARGIN = 16  # Pixels
SCALE_TOP_LABEL = "Surface (200°C)"
SCALE_BOTTOM_LABEL = "Core (5400°C)"
LEGEND_ENTRIES = [
    (STONE_500, "Continental Crust - Granite (200-400°C)"),
    (STONE_600, "Oceanic Crust - Basalt (0-900°C)"),
    (ORANGE_500, "Mantle - Silicate rocks, Peridotite (900-3700°C)"),
    (ORANGE_700, "Core (Heat Source) - Liquid Iron-Nickel alloy (4000-5000°C)"),
]
FONT_SIZE = 18
TITLE_FONT_SIZE = 24
