"""
Main entry point for SkiFree.

Wires settings, the simulation, the commentary narrator and the pygame
window together, then runs the window loop.
"""

import asyncio
import logging
import sys
from pathlib import Path

from skifree.core.events import EventBus
from skifree.core.state import StateMachine


def setup_logging(debug: bool = False, log_file: Path | None = None) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    if log_file is not None:
        # Truncate on each run for fresh logs
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S"
        ))
        logging.getLogger().addHandler(file_handler)
        logging.info(f"Logging to file: {log_file}")


async def run_game() -> None:
    """Build every component from settings and run the window."""
    from skifree.ai.client import GeminiConfig, get_gemini_client
    from skifree.ai.commentary import CommentaryService
    from skifree.ai.narrator import Narrator
    from skifree.config.settings import get_settings
    from skifree.sim.clock import Simulation
    from skifree.sim.tuning import Tuning
    from skifree.simulator.scores import load_leaderboard
    from skifree.simulator.window import SkiFreeWindow, WindowConfig

    settings = get_settings()

    client = get_gemini_client(GeminiConfig(
        api_key=settings.ai.gemini_api_key,
        model=settings.ai.model,
        timeout=settings.ai.timeout,
        max_retries=settings.ai.max_retries,
        retry_delay=settings.ai.retry_delay,
        temperature=settings.ai.temperature,
    ))
    service = CommentaryService(client, cooldown_s=settings.ai.rate_limit_cooldown)

    event_bus = EventBus()
    narrator = Narrator(event_bus, service)

    leaderboard = load_leaderboard(
        settings.game.leaderboard_path, size=settings.game.leaderboard_size
    )

    simulation = Simulation(
        tuning=Tuning(view_width=settings.display.width, view_height=settings.display.height),
        seed=settings.game.seed,
        state_machine=StateMachine(),
        best_score=leaderboard.best,
    )

    window = SkiFreeWindow(
        simulation,
        narrator,
        config=WindowConfig(
            width=settings.display.width,
            height=settings.display.height,
            fps=settings.display.fps,
            scale=settings.display.scale,
        ),
        event_bus=event_bus,
        leaderboard=leaderboard,
        leaderboard_path=settings.game.leaderboard_path,
    )

    await window.run()
    await narrator.flush()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    from skifree.config.settings import get_settings
    settings = get_settings()
    setup_logging(settings.debug, settings.log_file)

    logger = logging.getLogger(__name__)
    logger.info("SkiFree starting...")

    try:
        asyncio.run(run_game())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("SkiFree stopped")


if __name__ == "__main__":
    main()
