# renderer.py

import math
import logging

import pygame

import constants

logger = logging.getLogger("convection_viz")


def interpolate_color(keyframes, t: float):
    """
    Calculates a smooth color by linearly interpolating between keyframes.
    Keyframes are (position, (R, G, B)) tuples sorted by position in [0, 1].
    """
    for i in range(len(keyframes) - 1):
        pos1, color1 = keyframes[i]
        pos2, color2 = keyframes[i + 1]

        if pos1 <= t <= pos2:
            local_t = (t - pos1) / (pos2 - pos1)
            r = int(color1[0] * (1 - local_t) + color2[0] * local_t)
            g = int(color1[1] * (1 - local_t) + color2[1] * local_t)
            b = int(color1[2] * (1 - local_t) + color2[2] * local_t)
            return (r, g, b)

    # Outside the range: snap to the nearest end.
    return keyframes[0][1] if t < keyframes[0][0] else keyframes[-1][1]


def draw_vertical_gradient(surface: pygame.Surface, rect: pygame.Rect, keyframes):
    """Fills `rect` row by row, top of the rect at keyframe position 0."""
    span = max(1, rect.height - 1)
    for row in range(rect.height):
        color = interpolate_color(keyframes, row / span)
        pygame.draw.line(surface, color, (rect.left, rect.top + row), (rect.right - 1, rect.top + row))


def to_rgba(color):
    """
    Converts a primitive's (R, G, B, A) color, with A in [0, 1], to a pygame
    color. Channels outside [0, 255] are clamped here and only here.
    """
    r, g, b, a = color
    return (
        min(255, max(0, int(r))),
        min(255, max(0, int(g))),
        min(255, max(0, int(b))),
        min(255, max(0, int(round(a * 255)))),
    )


def arrow_points(center, rotation_deg: float, length: int = constants.ARROW_LENGTH, width: int = constants.ARROW_WIDTH):
    """
    Triangle pointing along +x before rotation, rotated clockwise on screen by
    `rotation_deg` around `center`.
    """
    cx, cy = center
    half_l, half_w = length / 2, width / 2
    theta = math.radians(rotation_deg)
    cos_t, sin_t = math.cos(theta), math.sin(theta)
    points = []
    for px, py in ((-half_l, -half_w), (half_l, 0.0), (-half_l, half_w)):
        points.append((cx + px * cos_t - py * sin_t, cy + px * sin_t + py * cos_t))
    return points


class Renderer:
    """
    Draws the diagram: title, layered backdrop, animated primitives,
    temperature scale and legend.

    Data Contract:
    - Inputs: screen (pygame.Surface) - Target of at least WIDTH x HEIGHT.
    - Outputs: None. `draw(frame)` paints one complete frame onto the screen.
    - Invariants: The backdrop, chrome and temperature scale are rendered once;
      only the crust features and the primitives change between frames.
    """
    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        if not pygame.font.get_init():
            pygame.font.init()
        self.font = pygame.font.Font(None, constants.FONT_SIZE)
        self.title_font = pygame.font.Font(None, constants.TITLE_FONT_SIZE)

        self.diagram_rect = pygame.Rect(0, constants.TITLE_HEIGHT, constants.DIAGRAM_WIDTH, constants.DIAGRAM_HEIGHT)
        w, h = self.diagram_rect.size
        quarter = h // 4
        # Local coordinates inside the diagram surface.
        self.inner_core_rect = pygame.Rect(0, h - quarter, w, quarter)
        self.outer_core_rect = pygame.Rect(0, quarter, w, h - 2 * quarter)
        self.upper_rect = pygame.Rect(0, 0, w, quarter)
        third = quarter // 3
        self.crust_rect = pygame.Rect(0, 0, w, third)

        self._static_layers = self._build_static_layers()
        self._mask = self._build_rounded_mask()
        self._static_chrome = self._build_chrome()
        self.scale_rect = pygame.Rect(
            self.diagram_rect.right - constants.SCALE_MARGIN - constants.SCALE_WIDTH,
            self.diagram_rect.top + constants.SCALE_MARGIN,
            constants.SCALE_WIDTH,
            self.diagram_rect.height - 2 * constants.SCALE_MARGIN,
        )
        self._temperature_scale = self._build_temperature_scale()
        logger.info(f"Renderer initialized: diagram {w}x{h}, outer core field {self.outer_core_rect}")

    # --- Static content, rendered once ---

    def _build_static_layers(self):
        surface = pygame.Surface(self.diagram_rect.size, pygame.SRCALPHA)
        draw_vertical_gradient(surface, self.inner_core_rect, constants.INNER_CORE_GRADIENT)
        draw_vertical_gradient(surface, self.outer_core_rect, constants.OUTER_CORE_GRADIENT)

        upper = self.upper_rect
        third = upper.height // 3
        lower_mantle = pygame.Rect(0, upper.top + third, upper.width, upper.height - third)
        upper_mantle = pygame.Rect(0, upper.top + third, upper.width, third)
        draw_vertical_gradient(surface, lower_mantle, constants.LOWER_MANTLE_GRADIENT)
        draw_vertical_gradient(surface, upper_mantle, constants.UPPER_MANTLE_GRADIENT)
        return surface

    def _build_rounded_mask(self):
        """Opaque over the top half and the lower half-ellipse, clear elsewhere."""
        w, h = self.diagram_rect.size
        mask = pygame.Surface((w, h), pygame.SRCALPHA)
        mask.fill((0, 0, 0, 0))
        pygame.draw.rect(mask, (255, 255, 255, 255), pygame.Rect(0, 0, w, h // 2))
        pygame.draw.ellipse(mask, (255, 255, 255, 255), pygame.Rect(0, 0, w, h))
        return mask

    def _build_chrome(self):
        """Title, diagram frame and legend."""
        surface = pygame.Surface((constants.WIDTH, constants.HEIGHT))
        surface.fill(constants.CARD)

        title = self.title_font.render(constants.TITLE, True, constants.TEXT_DARK)
        surface.blit(title, (16, (constants.TITLE_HEIGHT - title.get_height()) // 2))

        pygame.draw.rect(surface, constants.BACKGROUND, self.diagram_rect, border_radius=8)

        legend_top = self.diagram_rect.bottom + 16
        for i, (swatch, caption) in enumerate(constants.LEGEND_ENTRIES):
            y = legend_top + i * 26
            pygame.draw.rect(surface, swatch, pygame.Rect(16, y, 16, 16))
            text = self.font.render(caption, True, constants.TEXT_DARK)
            surface.blit(text, (40, y + (16 - text.get_height()) // 2))
        return surface

    def _build_temperature_scale(self):
        """Gradient strip and its labels, on a clear overlay the size of the diagram."""
        d = self.diagram_rect
        overlay = pygame.Surface(d.size, pygame.SRCALPHA)
        scale = self.scale_rect.move(-d.left, -d.top)
        draw_vertical_gradient(overlay, scale, constants.TEMPERATURE_SCALE_GRADIENT)

        top_label = self.font.render(constants.SCALE_TOP_LABEL, True, constants.WHITE)
        bottom_label = self.font.render(constants.SCALE_BOTTOM_LABEL, True, constants.WHITE)
        overlay.blit(top_label, (scale.left - 8 - top_label.get_width(), scale.top))
        overlay.blit(bottom_label, (scale.left - 8 - bottom_label.get_width(), scale.bottom - bottom_label.get_height()))
        return overlay

    # --- Per-frame content ---

    def field_to_local(self, x_percent: float, y_percent: float):
        """Maps a primitive's percentage position into the outer core field, in diagram pixels."""
        field = self.outer_core_rect
        return (
            field.left + x_percent / 100 * field.width,
            field.top + y_percent / 100 * field.height,
        )

    def _draw_crust(self, surface, plate_offset: int, subduction_offset: int):
        crust = self.crust_rect

        # Spreading ridge: two halves pushed apart by the plate offset.
        ridge_left = crust.centerx - constants.RIDGE_WIDTH // 2
        half = constants.RIDGE_WIDTH // 2
        left_half = pygame.Rect(ridge_left - plate_offset, crust.top, half, crust.height)
        right_half = pygame.Rect(ridge_left + half + plate_offset, crust.top, half, crust.height)
        pygame.draw.rect(surface, constants.STONE_600, left_half)
        pygame.draw.rect(surface, constants.STONE_600, right_half)
        seam_color = (*constants.RED_500, constants.RIDGE_SEAM_ALPHA)
        seam = pygame.Surface((constants.RIDGE_SEAM_WIDTH, crust.height), pygame.SRCALPHA)
        seam.fill(seam_color)
        surface.blit(seam, (left_half.right - constants.RIDGE_SEAM_WIDTH, crust.top))
        surface.blit(seam, (right_half.left, crust.top))

        # Subduction zones, skewed outward, with the slab jittering by one pixel.
        for anchor_x, skew in ((crust.width / 6, -1), (crust.width * 5 / 6 - constants.SUBDUCTION_WIDTH, 1)):
            self._draw_subduction_zone(surface, anchor_x, skew, subduction_offset)

        # Continental plates over the outer thirds.
        plate_width = crust.width // 3
        pygame.draw.rect(surface, constants.STONE_500, pygame.Rect(0, crust.top, plate_width, crust.height))
        pygame.draw.rect(surface, constants.STONE_500, pygame.Rect(crust.right - plate_width, crust.top, plate_width, crust.height))

    def _draw_subduction_zone(self, surface, left: float, skew: int, offset: int):
        crust = self.crust_rect
        shift = skew * crust.height / 2
        top, bottom = crust.top, crust.bottom
        zone = [
            (left - shift, top), (left + constants.SUBDUCTION_WIDTH - shift, top),
            (left + constants.SUBDUCTION_WIDTH + shift, bottom), (left + shift, bottom),
        ]
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        pygame.draw.polygon(overlay, (*constants.STONE_700, constants.SUBDUCTION_ALPHA), zone)
        slab_bottom = top + crust.height / 2 + offset
        slab_shift = skew * (slab_bottom - crust.centery)
        slab = [
            (left - shift, top + offset), (left + constants.SUBDUCTION_WIDTH - shift, top + offset),
            (left + constants.SUBDUCTION_WIDTH + slab_shift, slab_bottom), (left + slab_shift, slab_bottom),
        ]
        pygame.draw.polygon(overlay, (*constants.STONE_600, constants.SUBDUCTION_ALPHA), slab)
        surface.blit(overlay, (0, 0))

    def _draw_primitives(self, surface, frame):
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        for arrow in frame.flow_indicators:
            center = self.field_to_local(arrow.x, arrow.y)
            pygame.draw.polygon(overlay, to_rgba(arrow.color), arrow_points(center, arrow.rotation))
        for particle in frame.particles:
            center = self.field_to_local(particle.x, particle.y)
            pygame.draw.circle(overlay, to_rgba(particle.color), center, particle.size / 2)
        surface.blit(overlay, (0, 0))

    def draw(self, frame):
        """Paints one full frame onto the screen."""
        self.screen.blit(self._static_chrome, (0, 0))

        diagram = self._static_layers.copy()
        self._draw_primitives(diagram, frame)
        self._draw_crust(diagram, frame.plate_offset, frame.subduction_offset)
        diagram.blit(self._mask, (0, 0), special_flags=pygame.BLEND_RGBA_MULT)
        self.screen.blit(diagram, self.diagram_rect.topleft)

        self.screen.blit(self._temperature_scale, self.diagram_rect.topleft)
