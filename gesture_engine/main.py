"""
Main application for hands-free gesture control.
"""
import asyncio
import logging
import sys
from typing import Optional

from .config import load_config
from .controller_mock import MockController
from .engine import GestureEngine


def _config_path(argv) -> Optional[str]:
    if "--config" in argv:
        i = argv.index("--config")
        if i + 1 < len(argv):
            return argv[i + 1]
    return None


async def run(config_path: Optional[str] = None, provider_factory=None) -> None:
    """Run the engine against the camera until cancelled."""
    config = load_config(config_path)
    logging.basicConfig(level=getattr(logging, config.logging.level.upper(), logging.INFO))

    if provider_factory is None:
        # Heavy model imports stay out of the package import path
        from .landmarks import MediaPipeLandmarkProvider
        provider_factory = MediaPipeLandmarkProvider

    provider = provider_factory(config)
    controller = MockController()
    engine = GestureEngine(provider, controller, config)

    print("🎯 Gesture Recognition:")
    print("  - Eyes closed for 2s = Next song")
    print("  - Both hands open / closed = Next / previous song")
    print("  - Point right / left = Next / previous section")
    print("Press Ctrl+C to quit")

    engine.enable()
    try:
        # Cancelling run() must not cancel the loop mid-read
        await asyncio.shield(engine.wait_closed())
    finally:
        engine.disable()
        # The provider is only closed once its in-flight read has returned
        await engine.wait_closed()
        provider.close()


def main() -> int:
    """Entry point for the application."""
    try:
        asyncio.run(run(_config_path(sys.argv)))
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")
    except (RuntimeError, FileNotFoundError) as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
