import os

# Headless SDL for any test touching pygame surfaces or fonts.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest


@pytest.fixture
def timer_calls(monkeypatch):
    """Records pygame.time.set_timer calls instead of touching SDL timers."""
    calls = []
    monkeypatch.setattr(pygame.time, "set_timer", lambda event, millis: calls.append((event, millis)))
    return calls
