"""JSON file storage for the leaderboard."""

import json
import logging
from pathlib import Path

from skifree.sim.leaderboard import DEFAULT_SIZE, Leaderboard

logger = logging.getLogger(__name__)


def load_leaderboard(path: Path, size: int = DEFAULT_SIZE) -> Leaderboard:
    """Read a leaderboard, starting empty if the file is missing or broken."""
    path = Path(path)
    if not path.exists():
        return Leaderboard(size=size)

    try:
        rows = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read leaderboard {path}: {e}")
        return Leaderboard(size=size)

    if not isinstance(rows, list):
        logger.warning(f"Leaderboard {path} is not a list, ignoring it")
        return Leaderboard(size=size)

    return Leaderboard.from_dicts(rows, size=size)


def save_leaderboard(board: Leaderboard, path: Path) -> bool:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(board.to_dicts(), indent=2), encoding="utf-8")
    except OSError as e:
        logger.error(f"Could not save leaderboard to {path}: {e}")
        return False
    logger.debug(f"Leaderboard saved to {path}")
    return True
