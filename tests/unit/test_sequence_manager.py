from __future__ import annotations

import numpy as np
import pygame
import pytest

from lib_puzzle import CipherEngine, MemoryEngine
from lib_puzzle.cipher import CIPHER_RESET_DELAY, CIPHER_WIN_DELAY
from lib_puzzle.memory import MEMORY_RESET_DELAY, MEMORY_WIN_DELAY
from lib_puzzle.tile_swap import TILE_WIN_DELAY
from lib_shell import build_manager
from lib_shell.models import RewardStage, Screen
from lib_shell.screens import CipherScreen, MemoryScreen
from lib_shell.session import REWARD_REVEAL_DELAY, SessionOrchestrator
from lib_shell.storage import MemoryStorage, PersistentProfileStore

DIGIT_KEYS = {1: pygame.K_1, 2: pygame.K_2, 3: pygame.K_3}


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def click(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=1)


@pytest.fixture
def manager(scheduler, narrator):
    session = SessionOrchestrator(
        PersistentProfileStore(MemoryStorage()),
        scheduler,
        narrator=narrator,
        rng=np.random.default_rng(99),
    )
    manager = build_manager(session)
    manager.initialize()
    return manager


def go_to(manager, game_key):
    manager.handle_event(key(pygame.K_RETURN))
    manager.handle_event(key(pygame.K_1))
    manager.handle_event(key(game_key))


def test_initialize_enters_restored_screen(manager, narrator):
    assert manager.running
    assert manager.current_screen is Screen.INTRO
    assert narrator.lines[-1][1] is True


def test_keyboard_navigation_switches_scenes(manager):
    manager.handle_event(key(pygame.K_RETURN))
    assert manager.current_screen is Screen.CHARACTER_SELECT

    manager.handle_event(key(pygame.K_2))
    assert manager.session.current_character_id == "kedi"
    assert manager.current_screen is Screen.MAIN_MENU

    manager.handle_event(key(pygame.K_1))
    assert isinstance(manager.current_scene, CipherScreen)
    assert isinstance(manager.current_scene.engine, CipherEngine)

    manager.handle_event(key(pygame.K_ESCAPE))
    assert manager.current_screen is Screen.MAIN_MENU


def test_clicking_the_back_button_leaves_a_game(manager):
    go_to(manager, pygame.K_2)
    assert isinstance(manager.current_scene, MemoryScreen)

    manager.handle_event(click((30, 30)))
    assert manager.current_screen is Screen.MAIN_MENU


def test_cipher_win_runs_reward_and_reset_independently(manager):
    go_to(manager, pygame.K_1)
    engine = manager.current_scene.engine
    for value in engine.target_sequence:
        manager.handle_event(key(DIGIT_KEYS[value]))

    session = manager.session
    assert engine.solved
    assert session.reward is None

    manager.update(CIPHER_WIN_DELAY)
    assert session.current_profile.level == 2
    assert session.reward.stage is RewardStage.BOXED

    # input goes to the dialog now, not the puzzle
    manager.handle_event(key(pygame.K_1))
    assert engine.user_sequence == list(engine.target_sequence)

    manager.update(CIPHER_RESET_DELAY + 0.1)
    assert not engine.solved
    assert session.reward.stage is RewardStage.BOXED

    manager.update(REWARD_REVEAL_DELAY - CIPHER_RESET_DELAY)
    assert session.reward.stage is RewardStage.REVEALED

    manager.handle_event(key(pygame.K_RETURN))
    assert session.reward is None
    assert manager.current_screen is Screen.CIPHER_GAME
    assert manager.current_scene.engine is engine


def test_tapping_the_box_reveals_early(manager):
    go_to(manager, pygame.K_1)
    manager.session.handle_win()

    width, height = manager.window_size
    manager.handle_event(click((width // 2, height // 2)))
    assert manager.session.reward.stage is RewardStage.REVEALED


def test_leaving_a_game_disposes_its_engine(manager):
    go_to(manager, pygame.K_2)
    engine = manager.current_scene.engine
    assert isinstance(engine, MemoryEngine)

    positions = {}
    for index, card in enumerate(engine.cards):
        positions.setdefault(card, []).append(index)
    for first, second in positions.values():
        engine.click(first)
        engine.click(second)

    manager.handle_event(key(pygame.K_ESCAPE))
    assert manager.current_screen is Screen.MAIN_MENU
    assert engine.disposed

    manager.update(MEMORY_WIN_DELAY + MEMORY_RESET_DELAY + 0.1)
    # the solved puzzle still counts, but the old board is left alone
    assert manager.session.current_profile.level == 2
    assert engine.complete

    manager.handle_event(key(pygame.K_RETURN))
    manager.handle_event(key(pygame.K_RETURN))
    assert manager.session.reward is None
    manager.handle_event(key(pygame.K_2))
    assert manager.current_scene.engine is not engine


def solve_tiles(engine):
    for slot in range(len(engine.tiles)):
        source = engine.tiles.index(slot)
        if source != slot:
            engine.click(slot)
            engine.click(source)


def test_delayed_win_credits_the_solver_not_the_next_hero(manager):
    go_to(manager, pygame.K_3)
    engine = manager.current_scene.engine
    solve_tiles(engine)
    assert engine.celebrating

    manager.handle_event(key(pygame.K_ESCAPE))
    manager.handle_event(key(pygame.K_ESCAPE))
    assert manager.current_screen is Screen.CHARACTER_SELECT
    manager.handle_event(key(pygame.K_2))
    assert manager.session.current_character_id == "kedi"

    manager.update(TILE_WIN_DELAY + 0.1)
    profiles = manager.session.profiles
    assert profiles["zizi"].level == 2
    assert len(profiles["zizi"].unlocked_rewards) == 1
    assert profiles["kedi"].level == 1
    assert profiles["kedi"].unlocked_rewards == []


def test_game_screen_without_character_falls_back(scheduler, narrator):
    session = SessionOrchestrator(
        PersistentProfileStore(MemoryStorage()), scheduler, narrator=narrator
    )
    session._snapshot.current_screen = Screen.CIPHER_GAME
    manager = build_manager(session)
    manager.initialize()

    assert manager.current_screen is Screen.CHARACTER_SELECT
    assert manager.session.current_screen is Screen.CHARACTER_SELECT


def test_render_without_surface_is_a_no_op(manager):
    go_to(manager, pygame.K_3)
    manager.render(None)
    manager.session.handle_win()
    manager.render(None)


def test_shutdown_exits_active_scene(manager):
    go_to(manager, pygame.K_3)
    engine = manager.current_scene.engine
    manager.shutdown()
    assert engine.disposed
    assert not manager.running
