"""JSON save files for fighters.

A fighter is written as the JSON dump of its pydantic model and read back
through the AnyFighter union, so the "kind" field decides whether a
Player or a Monster comes out. A missing, unreadable or invalid save is
treated as "no saved state".

Default location: the storage.save_path setting (data/player.json).
"""

from __future__ import annotations

from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from skirmish.core.config import get_settings
from skirmish.core.exceptions import PersistenceError
from skirmish.core.logging import get_logger
from skirmish.models.fighter import AnyFighter, Fighter, Monster, Player


logger = get_logger(__name__)

_fighter_adapter: TypeAdapter[Player | Monster] = TypeAdapter(AnyFighter)


def _default_path() -> Path:
    return get_settings().storage.save_path


def save_fighter(fighter: Fighter, path: str | Path | None = None) -> Path:
    """Write a fighter to a JSON file, creating parent directories.

    Args:
        fighter: The fighter to save.
        path: Target file; defaults to the storage.save_path setting.

    Returns:
        The path written to.

    Raises:
        PersistenceError: If the file cannot be written.
    """
    target = Path(path) if path is not None else _default_path()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(fighter.model_dump_json(indent=2), encoding="utf-8")
    except OSError as e:
        raise PersistenceError(f"Could not save {fighter.name}: {e}", path=str(target)) from e

    logger.info(f"Saved fighter: {fighter.name}", path=str(target))
    return target


def load_fighter(path: str | Path | None = None) -> Player | Monster | None:
    """Read a fighter back from a JSON file.

    Args:
        path: Source file; defaults to the storage.save_path setting.

    Returns:
        The loaded fighter, or None when there is no usable save.
    """
    source = Path(path) if path is not None else _default_path()
    try:
        raw = source.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No save file", path=str(source))
        return None
    except OSError:
        logger.exception("Could not read save file", path=str(source))
        return None

    try:
        fighter = _fighter_adapter.validate_json(raw)
    except ValidationError as e:
        logger.warning("Invalid save file", path=str(source), errors=e.error_count())
        return None

    logger.info(f"Loaded fighter: {fighter.name}", path=str(source))
    return fighter


__all__ = [
    "save_fighter",
    "load_fighter",
]
