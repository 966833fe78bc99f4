"""Session orchestrator: current screen, current character, reward dialog.

The orchestrator is the single writer of the session state. Screens call
its action methods; every mutation of the snapshot is written through to
the profile store before the method returns.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

import numpy as np
from lib_puzzle import LoggingNarrator, NarrationPort, Scheduler, allocate

from .catalog import CHARACTER_IDS, REWARD_CATALOG, Theme, character_info, theme_for
from .models import (
    ACTIVITY_SCREENS,
    CHARACTER_SCREENS,
    GameSnapshot,
    Profile,
    RewardPresentation,
    RewardStage,
    Screen,
)
from .storage import PersistentProfileStore

logger = logging.getLogger(__name__)

REWARD_REVEAL_DELAY = 2.0


class SessionOrchestrator:
    def __init__(
        self,
        store: PersistentProfileStore,
        scheduler: Optional[Scheduler] = None,
        *,
        narrator: Optional[NarrationPort] = None,
        rng: Optional[np.random.Generator] = None,
        reward_catalog: Sequence[str] = REWARD_CATALOG,
    ) -> None:
        self._store = store
        self.scheduler = scheduler or Scheduler()
        self.narrator = narrator or LoggingNarrator()
        self.rng = rng or np.random.default_rng()
        self.reward_catalog = tuple(reward_catalog)
        self._snapshot = store.load_snapshot()
        self.reward: Optional[RewardPresentation] = None
        self.preview_character_id: Optional[str] = None
        self._reward_serial = 0

    # -------- State access --------
    @property
    def current_screen(self) -> Screen:
        return self._snapshot.current_screen

    @property
    def current_character_id(self) -> Optional[str]:
        return self._snapshot.current_character_id

    @property
    def profiles(self) -> Dict[str, Profile]:
        return self._snapshot.characters

    @property
    def current_profile(self) -> Optional[Profile]:
        character_id = self._snapshot.current_character_id
        if character_id is None:
            return None
        return self._snapshot.characters.get(character_id)

    def snapshot(self) -> GameSnapshot:
        return self._snapshot.model_copy(deep=True)

    def speak(self, text: str, interrupt: bool = False) -> None:
        self.narrator.speak(text, interrupt)

    def _persist(self) -> None:
        self._store.save(self._snapshot)

    def _go(self, screen: Screen) -> None:
        logger.debug("Session: %s -> %s", self._snapshot.current_screen.value, screen.value)
        self._snapshot.current_screen = screen
        self._persist()

    def _ignored(self, action: str) -> None:
        logger.debug("Session: %s ignored on %s", action, self._snapshot.current_screen.value)

    # -------- Navigation --------
    def start(self) -> None:
        if self.current_screen is not Screen.INTRO:
            return self._ignored("start")
        self._go(Screen.CHARACTER_SELECT)

    def select_character(self, character_id: str) -> None:
        if self.current_screen is not Screen.CHARACTER_SELECT:
            return self._ignored("select")
        if character_id not in CHARACTER_IDS:
            return self._ignored(f"select({character_id!r})")
        self._snapshot.current_character_id = character_id
        self.preview_character_id = None
        self._go(Screen.MAIN_MENU)

    def choose(self, screen: Screen) -> None:
        if self.current_screen is not Screen.MAIN_MENU or screen not in ACTIVITY_SCREENS:
            return self._ignored(f"choose({screen.value})")
        self._go(screen)

    def back(self) -> None:
        screen = self.current_screen
        if screen is Screen.MAIN_MENU:
            self._go(Screen.CHARACTER_SELECT)
        elif screen in ACTIVITY_SCREENS:
            self._go(Screen.MAIN_MENU)
        else:
            self._ignored("back")

    def ensure_character(self) -> bool:
        """Send the player back to character select when none is chosen."""
        if self.current_profile is not None:
            return True
        if self.current_screen in CHARACTER_SCREENS:
            self._go(Screen.CHARACTER_SELECT)
        return False

    def preview(self, character_id: Optional[str]) -> None:
        """Hover/touch preview on the character select screen."""
        self.preview_character_id = character_id if character_id in CHARACTER_IDS else None

    # -------- Rewards --------
    def handle_win(self, character_id: Optional[str] = None) -> None:
        """Grant a reward for a solved puzzle and open the reward dialog.

        `character_id` names the solver; delayed wins can land after the
        player has switched heroes. Defaults to the current character.
        """
        if character_id is None:
            profile = self.current_profile
        else:
            profile = self._snapshot.characters.get(character_id)
        if profile is None:
            logger.debug("Session: win without a character; ignored")
            return

        token = allocate(set(profile.unlocked_rewards), self.reward_catalog, self.rng)
        profile.level += 1
        is_new = profile.add_reward(token)
        self._persist()
        logger.info(
            "Session: %s reached level %d, reward %s (%s)",
            profile.id, profile.level, token, "new" if is_new else "repeat",
        )

        self._reward_serial += 1
        presentation = RewardPresentation(token, RewardStage.BOXED, self._reward_serial)
        self.reward = presentation
        self.speak("Harika! Bir hediye kazandın!")
        self.scheduler.call_later(
            REWARD_REVEAL_DELAY, lambda: self._reveal(presentation.serial)
        )

    def _reveal(self, serial: int) -> None:
        reward = self.reward
        if reward is None or reward.serial != serial or reward.stage is RewardStage.REVEALED:
            return
        self.reward = reward.revealed()
        self.speak(
            f"Yaşasın! {reward.token} çıkartması senin oldu. "
            "Devam etmek için tamam düğmesine bas."
        )

    def reveal_reward(self) -> None:
        """Open the gift box early; the reveal timer then does nothing."""
        if self.reward is not None:
            self._reveal(self.reward.serial)

    def dismiss_reward(self) -> bool:
        if self.reward is None or self.reward.stage is not RewardStage.REVEALED:
            return False
        self.reward = None
        return True

    # -------- Sticker room --------
    def save_drawing(self, blob: str) -> None:
        profile = self.current_profile
        if profile is None:
            return
        profile.add_image(blob)
        self._persist()

    # -------- Presentation --------
    def active_theme(self) -> Theme:
        """Theme for the current frame; derived fresh on every call."""
        if self.current_screen is Screen.CHARACTER_SELECT and self.preview_character_id:
            info = character_info(self.preview_character_id)
            return theme_for(info.theme_id if info is not None else None)
        profile = self.current_profile
        if profile is not None and self.current_screen in CHARACTER_SCREENS:
            return profile.theme
        return theme_for(None)
