"""Profile persistence: a single JSON snapshot under one fixed key.

Nothing in here is allowed to stop the game. Read problems fall back to
the catalog defaults and write problems are logged and dropped.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Annotated, Any, Dict, List, Optional, Protocol

from pydantic import Field, TypeAdapter, ValidationError

from .catalog import CHARACTER_IDS, CHARACTERS
from .models import CHARACTER_SCREENS, GameSnapshot, Profile, Screen

logger = logging.getLogger(__name__)

STORAGE_KEY = "sesli_sifre_v1"

_LEVEL = TypeAdapter(Annotated[int, Field(ge=0)])


class ProfileStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage, used by tests and as a last-resort fallback."""

    def __init__(self, items: Optional[Dict[str, str]] = None) -> None:
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class JsonFileStorage:
    """Key/value strings kept in one JSON object on disk.

    - Every `set_item` rewrites the file through a temporary sibling and
      `os.replace`, so readers never observe a half-written file.
    - Errors propagate; `PersistentProfileStore` decides what to do.
    """

    def __init__(self, path: os.PathLike[str] | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ValueError(f"{self._path} does not hold a JSON object")
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        try:
            items = self._read_all()
        except ValueError:
            # unreadable file gets replaced wholesale
            items = {}
        items[key] = value

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, ensure_ascii=False, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def _repair_level(character_id: str, entry: Dict[str, Any], default: int) -> int:
    if "level" not in entry:
        return default
    try:
        return _LEVEL.validate_python(entry["level"])
    except ValidationError:
        logger.warning("Bad saved level for %r: %r; using %d", character_id, entry["level"], default)
        return default


def _repair_strings(character_id: str, entry: Dict[str, Any], key: str) -> List[str]:
    """Keep the string items of a stored list; anything else is dropped."""
    value = entry.get(key)
    if value is None:
        if key in entry:
            logger.warning("Saved %s for %r is null; starting empty", key, character_id)
        return []
    if not isinstance(value, list):
        logger.warning("Saved %s for %r is not a list; starting empty", key, character_id)
        return []
    kept = [item for item in value if isinstance(item, str)]
    if len(kept) != len(value):
        logger.warning(
            "Dropped %d non-string %s items for %r", len(value) - len(kept), key, character_id
        )
    return kept


def merge_snapshot(data: Any) -> GameSnapshot:
    """Repair a decoded save against the current catalog.

    - every catalog character gets an entry; missing ones start fresh
    - name, emoji and theme always come from the catalog
    - level, rewards and drawings are repaired one field at a time
    - unknown screens / characters fall back to safe defaults
    """
    if not isinstance(data, dict):
        logger.warning("Save snapshot is not an object; starting fresh")
        return GameSnapshot.default()

    raw_characters = data.get("characters")
    if not isinstance(raw_characters, dict):
        raw_characters = {}

    characters: Dict[str, Profile] = {}
    for info in CHARACTERS:
        entry = raw_characters.get(info.id)
        fresh = Profile.from_catalog(info)
        if not isinstance(entry, dict):
            characters[info.id] = fresh
            continue
        # each field is repaired on its own so one bad value keeps the rest
        characters[info.id] = Profile.model_validate(
            {
                "id": info.id,
                "name": info.name,
                "emoji": info.emoji,
                "theme": info.theme_id,
                "level": _repair_level(info.id, entry, fresh.level),
                "unlockedStickers": _repair_strings(info.id, entry, "unlockedStickers"),
                "drawings": _repair_strings(info.id, entry, "drawings"),
            }
        )

    try:
        screen = Screen(data.get("currentScreen", Screen.INTRO.value))
    except ValueError:
        logger.warning("Unknown saved screen %r; back to intro", data.get("currentScreen"))
        screen = Screen.INTRO

    character_id = data.get("currentCharacterId")
    if character_id not in CHARACTER_IDS:
        character_id = None

    if character_id is None and screen in CHARACTER_SCREENS:
        screen = Screen.CHARACTER_SELECT

    return GameSnapshot(
        characters=characters,
        current_character_id=character_id,
        current_screen=screen,
    )


class PersistentProfileStore:
    def __init__(self, storage: ProfileStorage, key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load_snapshot(self) -> GameSnapshot:
        """Read and repair the saved snapshot; never raises."""
        try:
            stored = self._storage.get_item(self._key)
        except Exception as ex:
            logger.warning("Save load error: %s", ex)
            return GameSnapshot.default()

        if not stored:
            return GameSnapshot.default()

        try:
            data = json.loads(stored)
        except ValueError as ex:
            logger.warning("Save load error: snapshot is not valid JSON (%s)", ex)
            return GameSnapshot.default()

        return merge_snapshot(data)

    def load(self) -> Dict[str, Profile]:
        return self.load_snapshot().characters

    def save(self, snapshot: GameSnapshot) -> bool:
        """Write the whole snapshot; returns False (and logs) on failure."""
        try:
            payload = json.dumps(
                snapshot.to_json_dict(),
                ensure_ascii=False,
                separators=(",", ":"),
                sort_keys=True,
            )
            self._storage.set_item(self._key, payload)
        except Exception as ex:
            logger.warning("Save error: %s", ex)
            return False
        return True
