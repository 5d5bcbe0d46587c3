import argparse
import logging

from config import AppConfig, ConfigError
from runners.platform import is_wsl
from runners.run_snake import main as run_snake


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Snake on a half-block grid")
    p.add_argument("--width", type=int, default=AppConfig().grid_w)
    p.add_argument("--height", type=int, default=AppConfig().grid_h)
    p.add_argument("--wrap", action="store_true", help="wrap at the edges instead of dying")
    p.add_argument("--speed", type=int, default=1, help="starting speed level")
    p.add_argument("--no-bonus", action="store_true", help="disable time-limited bonus food")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--headless", action="store_true", help="autopilot without a window, print the final board")
    p.add_argument("--ticks", type=int, default=None, help="stop after this many ticks")
    p.add_argument("--scores", default=None, help="high score file")
    p.add_argument("--round-log", default=None, help="append finished rounds to this CSV")
    p.add_argument("--log-level", default="WARNING")
    return p.parse_args(argv)


def build_config(args) -> AppConfig:
    return AppConfig().with_(
        grid_w=args.width,
        grid_h=args.height,
        wall_policy="wrap" if args.wrap else "collide",
        start_speed_level=args.speed,
        bonus_food=not args.no_bonus,
        seed=args.seed,
        scores_path=args.scores,
        round_log_path=args.round_log,
        # no controller support under WSL
        controller_enabled=not is_wsl(),
    )


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        cfg = build_config(args).validate()
    except ConfigError as e:
        raise SystemExit(f"snake: {e}")
    run_snake(cfg, headless=args.headless, max_ticks=args.ticks)


if __name__ == "__main__":
    main()
