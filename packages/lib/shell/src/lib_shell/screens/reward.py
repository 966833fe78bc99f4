import logging
from typing import Optional

import pygame

from ..models import RewardStage
from ..sequence import SceneInterface
from .widgets import Button, click_pos, draw_text, key_pressed

logger = logging.getLogger(__name__)

_CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_SPACE, pygame.K_KP_ENTER)


class RewardOverlay(SceneInterface):
    """Gift box dialog drawn over whatever screen is active.

    While the box is closed a tap opens it early; once open, "Tamam"
    closes the dialog. The screen underneath keeps running.
    """

    def _layout(self):
        width, height = self.manager.window_size
        panel = pygame.Rect(0, 0, 420, 400)
        panel.center = (width // 2, height // 2)
        box = pygame.Rect(0, 0, 192, 192)
        box.center = (panel.centerx, panel.top + 190)
        ok = Button(pygame.Rect(0, 0, 180, 60), "Tamam", "success")
        ok.rect.center = (panel.centerx, panel.bottom - 50)
        return panel, box, ok

    def render(self, surface: Optional[pygame.Surface]) -> None:
        reward = self.session.reward
        if surface is None or reward is None:
            return

        veil = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        veil.fill((0, 0, 0, 204))
        surface.blit(veil, (0, 0))

        panel, box, ok = self._layout()
        pygame.draw.rect(surface, (255, 255, 255), panel, border_radius=24)
        pygame.draw.rect(surface, (250, 204, 21), panel, 8, border_radius=24)

        if reward.stage is RewardStage.BOXED:
            draw_text(surface, "Sürpriz!", (panel.centerx, panel.top + 50), 48, (202, 138, 4))
            draw_text(surface, "🎁", box.center, 140, emoji=True)
        else:
            draw_text(surface, "Tebrikler!", (panel.centerx, panel.top + 50), 48, (202, 138, 4))
            draw_text(surface, reward.token, box.center, 140, emoji=True)
            ok.draw(surface, 32)

    def handle_event(self, event) -> None:
        reward = self.session.reward
        if event is None or reward is None:
            return

        _panel, box, ok = self._layout()
        pos = click_pos(event, self.manager.window_size)
        confirm = key_pressed(event, _CONFIRM_KEYS)

        if reward.stage is RewardStage.BOXED:
            if confirm or (pos is not None and box.collidepoint(pos)):
                self.session.reveal_reward()
        elif confirm or (pos is not None and ok.hit(pos)):
            self.session.dismiss_reward()
