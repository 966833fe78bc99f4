from __future__ import annotations

import numpy as np
import pygame
import pytest

from lib_shell import build_manager
from lib_shell.drawing import DATA_URL_PREFIX, CanvasSurface, decode_image
from lib_shell.models import Screen
from lib_shell.screens import StickerRoomScreen
from lib_shell.session import SessionOrchestrator
from lib_shell.storage import MemoryStorage, PersistentProfileStore

RED = (239, 68, 68)


@pytest.fixture
def room(scheduler, narrator):
    session = SessionOrchestrator(
        PersistentProfileStore(MemoryStorage()),
        scheduler,
        narrator=narrator,
        rng=np.random.default_rng(1),
    )
    manager = build_manager(session)
    manager.initialize()
    session.start()
    session.select_character("robot")
    session.choose(Screen.STICKER_ROOM)
    manager.update(0.0)
    scene = manager.current_scene
    assert isinstance(scene, StickerRoomScreen)
    return scene


def test_stroke_paints_the_canvas():
    canvas = CanvasSurface((50, 50))
    assert tuple(canvas.surface.get_at((25, 25)))[:3] == (255, 255, 255)

    canvas.stroke([(5, 25), (45, 25)], RED, 6)
    assert tuple(canvas.surface.get_at((25, 25)))[:3] == RED

    canvas.clear()
    assert tuple(canvas.surface.get_at((25, 25)))[:3] == (255, 255, 255)


def test_export_produces_a_loadable_png_data_url():
    canvas = CanvasSurface((40, 40))
    canvas.stroke([(20, 20)], RED, 10)
    blob = canvas.export()
    assert blob.startswith(DATA_URL_PREFIX)

    other = CanvasSurface((40, 40))
    assert other.load(blob) is True
    assert tuple(other.surface.get_at((20, 20)))[:3] == RED


@pytest.mark.parametrize("blob", ["", "hello", DATA_URL_PREFIX + "!!!", DATA_URL_PREFIX + "aGVsbG8="])
def test_garbage_blobs_do_not_load(blob):
    assert decode_image(blob) is None
    assert CanvasSurface((10, 10)).load(blob) is False


def test_saving_goes_to_the_current_profile(room, narrator):
    room.pick_color(1)
    room.press_canvas((100, 100))
    room.drag_canvas((200, 100))
    room.release_canvas()
    room.save()

    images = room.session.current_profile.saved_images
    assert len(images) == 1
    assert images[0].startswith(DATA_URL_PREFIX)
    assert narrator.texts[-1] == "Resim kaydedildi!"


def test_opening_a_saved_picture_restores_it(room):
    room.pick_color(1)
    room.press_canvas((150, 150))
    room.save()
    room.clear()
    assert tuple(room.canvas.surface.get_at((150, 150)))[:3] == (255, 255, 255)

    room.open_saved(0)
    assert tuple(room.canvas.surface.get_at((150, 150)))[:3] == RED


def test_picking_a_color_drops_the_selected_sticker(room):
    room.session.current_profile.add_reward("⭐")
    room.pick_sticker(0)
    assert room.selected_sticker == "⭐"

    room.pick_color(2)
    assert room.selected_sticker is None


def test_escape_returns_to_main_menu(room):
    room.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
    assert room.session.current_screen is Screen.MAIN_MENU
