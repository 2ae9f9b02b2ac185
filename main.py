# main.py
"""
Main entry point for the pointer-reactive canvas effects.

This script orchestrates the entire application lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Builds the page window, the scroll service and one engine per effect.
4. Runs the frame scheduler until the window is closed.
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config
import cProfile
import pstats
import io

EFFECT_SECTIONS = ('floating_dots', 'circulating_pixels')


def main():
    """
    The main function to run the page.
    """
    # Load configuration from the JSON file first.
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Canvas Effects Starting ---")

    run_params = config.get('run_control', {})

    from config import EffectConfig, CIRCLES, ORBIT
    from constants import FPS, DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT
    from engine import FloatingDotsEngine, CirculatingPixelsEngine
    from pointer import ScrollService
    from scheduler import FrameScheduler
    from visualization import PageVisualizer

    engine_types = {
        'floating_dots': (FloatingDotsEngine, CIRCLES),
        'circulating_pixels': (CirculatingPixelsEngine, ORBIT),
    }
    enabled = run_params.get('effects', list(EFFECT_SECTIONS))

    # --- Component Initialization ---
    # 1. The page window determines the viewport size.
    page = PageVisualizer(
        run_params.get('window_width', DEFAULT_WINDOW_WIDTH),
        run_params.get('window_height', DEFAULT_WINDOW_HEIGHT)
    )
    scroll_service = ScrollService()
    scheduler = FrameScheduler(
        fps=run_params.get('fps', FPS),
        max_frames=run_params.get('max_frames'),
        log_throttle=run_params.get('log_throttle_frames', 300)
    )

    # 2. One engine per enabled effect, in page order.
    engines = []
    for section in EFFECT_SECTIONS:
        if section not in enabled:
            logging.info(f"Effect '{section}' disabled in run_control.")
            continue
        engine_cls, variant = engine_types[section]
        effect_config = EffectConfig.from_params(config.get(section), variant)
        engines.append(engine_cls(effect_config, scroll_service))

    def resize_all(width, height):
        for engine in engines:
            engine.request_resize(width, height)

    def poll_events():
        if not page.handle_events(scroll_service, resize_all):
            scheduler.stop()

    # 3. Per frame: input first, then every engine, then present.
    scheduler.add(poll_events)
    for engine in engines:
        engine.start(*page.viewport_size, scheduler=scheduler)
    scheduler.add(lambda: page.draw(engines))

    profiler = cProfile.Profile() if run_params.get('profile', False) else None
    if profiler is not None:
        profiler.enable()
    scheduler.start()
    if profiler is not None:
        profiler.disable()

    for engine in engines:
        engine.teardown()
    page.close()
    logging.info("Frame loop finished.")

    if profiler is not None:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Canvas Effects Shutting Down ---")


if __name__ == "__main__":
    main()
