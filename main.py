# main.py

import logging

import pygame

import constants
import logger_setup
from convection import ConvectionModel
from phase_clock import PhaseClock
from renderer import Renderer

# Get the application's dedicated logger
logger = logging.getLogger("convection_viz")


def run_animation_loop(model, clock, renderer, frame_clock, max_ticks=0):
    """
    Pumps events into the phase clock and redraws at FPS until the window is
    closed or `max_ticks` phase ticks have been applied (0 means no limit).
    """
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif clock.handle_event(event) and max_ticks and clock.tick_count >= max_ticks:
                logger.info(f"Reached max_ticks={max_ticks}.")
                running = False

        renderer.draw(model.frame)
        pygame.display.flip()
        frame_clock.tick(constants.FPS)


def main(config_path='config.json'):
    """
    Main function to initialize and run the convection diagram.
    """
    logger_setup.setup_logging(config_path)
    config = logger_setup.load_config(config_path)
    anim_config = config['animation']

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    pygame.init()
    try:
        screen = pygame.display.set_mode((constants.WIDTH, constants.HEIGHT))
        pygame.display.set_caption(constants.TITLE)
        frame_clock = pygame.time.Clock()

        model = ConvectionModel(log_every_ticks=anim_config['log_every_ticks'])
        renderer = Renderer(screen)

        with PhaseClock() as clock:
            clock.subscribe(model.on_tick)
            run_animation_loop(model, clock, renderer, frame_clock, max_ticks=anim_config['max_ticks'])
    finally:
        logger.info("Application shutting down.")
        pygame.quit()


if __name__ == "__main__":
    main()
