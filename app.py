"""Entry point for bindswitch

Loads a YAML binding config, opens a small pygame window for keyboard
focus, and logs logical actions as they change each frame.
"""
import argparse
import logging
import time

from manager import InputManager
from devices.pygame_input import PygameInput, pygame

LOG = logging.getLogger("bindswitch")


def poll_actions(mgr: InputManager) -> dict:
    """Read every handle of the active profile the way a game loop would."""
    profile = mgr.get_active_profile()
    if profile is None:
        return {}
    out = {}
    for handle in profile.bindings:
        if mgr.is_axis(handle):
            out[handle] = round(mgr.get_axis(handle), 3)
        else:
            out[handle] = mgr.get_button(handle)
            if mgr.get_button_down(handle):
                LOG.info("%s down", handle)
            if mgr.get_button_up(handle):
                LOG.info("%s up", handle)
    return out


def main():
    parser = argparse.ArgumentParser(description="bindswitch: logical input actions over pygame")
    parser.add_argument("--config", required=True, help="YAML binding config")
    parser.add_argument("--profile", help="profile name to activate (overrides active_profile)")
    parser.add_argument("--hz", type=int, default=60, help="frame rate")
    parser.add_argument("--deadzone", type=float, default=0.1, help="analog deadzone for smoothed axes")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging level (default: INFO)")
    parser.add_argument("--log-format", default="%(levelname)s:%(name)s:%(message)s",
                        help="Logging format string (default: %(levelname)s:%(name)s:%(message)s)")
    parser.add_argument("--debug-modules", nargs="*", default=[],
                        help="Modules to set to DEBUG level (e.g., 'binding', 'profile', 'manager', 'pygame')")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level), format=args.log_format)
    for module in args.debug_modules:
        logging.getLogger(f"bindswitch.{module}").setLevel(logging.DEBUG)

    if pygame is None:
        parser.error("pygame is required to run bindswitch interactively")

    poller = PygameInput(deadzone=args.deadzone)
    mgr = InputManager.load_config(args.config, poller)
    poller.start()
    pygame.display.set_mode((320, 120))
    pygame.display.set_caption("bindswitch")

    mgr.initialize_all()
    if args.profile:
        mgr.set_active_profile(args.profile)

    period = 1.0 / float(args.hz)
    last = {}
    running = True
    LOG.info("bindswitch running, close the window or press Ctrl+C to stop")
    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
            poller.update()
            mgr.tick()
            actions = poll_actions(mgr)
            changed = {k: v for k, v in actions.items() if last.get(k) != v}
            if changed:
                LOG.debug("actions -> %s", changed)
            last = actions
            time.sleep(period)
    except KeyboardInterrupt:
        LOG.info("shutdown requested")
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
