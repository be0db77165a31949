# primitives.py

"""
Visual primitives handed to the renderer each tick.

Both types are immutable and carry no identity across frames: a new list is
built for every phase and the previous one is discarded.
"""

from collections import namedtuple


class Particle(namedtuple('Particle', ['x', 'y', 'color', 'size'])):
    """
    A convecting fluid parcel.

    - x, y (float): Position in percent of the outer core field, unrounded.
    - color (tuple): (R, G, B, A). Channels follow the color formula literally
      and may leave [0, 255]; the renderer clamps them.
    - size (int): Diameter class in pixels, one of 4, 6 or 8.
    """
    __slots__ = ()

    @property
    def left(self):
        return f"{self.x}%"

    @property
    def top(self):
        return f"{self.y}%"

    @property
    def css_color(self):
        r, g, b, a = self.color
        return f"rgba({r}, {g}, {b}, {a})"


class FlowIndicator(namedtuple('FlowIndicator', ['x', 'y', 'rotation', 'color'])):
    """
    A directional arrow tangent to a cell's circulation.

    - x, y (float): Position in percent, rounded to 2 decimals.
    - rotation (int): Facing angle in degrees.
    - color (tuple): (R, G, B, A), every channel rounded to 2 decimals.
    """
    __slots__ = ()

    @property
    def left(self):
        return f"{self.x:.2f}%"

    @property
    def top(self):
        return f"{self.y:.2f}%"

    @property
    def transform(self):
        return f"rotate({self.rotation}deg)"

    @property
    def css_color(self):
        return "rgba(" + ", ".join(f"{float(c):.2f}" for c in self.color) + ")"
