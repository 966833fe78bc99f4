import logging
import os

import pygame
from lib_puzzle import LoggingNarrator, Scheduler
from lib_shell import (
    JsonFileStorage,
    PersistentProfileStore,
    SessionOrchestrator,
    ShellConfig,
    build_manager,
)

"""App entrypoint: loads the saved session and runs the pygame loop."""


def main():
    config = ShellConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = PersistentProfileStore(JsonFileStorage(config.save_path))
    session = SessionOrchestrator(store, Scheduler(), narrator=LoggingNarrator())
    manager = build_manager(session, window_size=config.window_size)

    if config.window_pos is not None:
        os.environ["SDL_VIDEO_WINDOW_POS"] = "%d,%d" % config.window_pos

    pygame.init()
    pygame.display.set_caption("Şifre Kahramanları")
    screen = pygame.display.set_mode(config.window_size)
    clock = pygame.time.Clock()

    # scenes are entered after the display exists
    manager.initialize()

    running = True
    while running and manager.running:
        dt = clock.tick(config.fps) / 1000.0
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            manager.handle_event(event)

        manager.update(dt)
        manager.render(screen)
        pygame.display.flip()

    manager.shutdown()
    pygame.quit()


if __name__ == "__main__":
    main()
