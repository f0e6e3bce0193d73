from __future__ import annotations

import argparse
import logging
import re
import sys
from collections.abc import Sequence

from backlight_ctl import __version__
from backlight_ctl.config import ConfigError, Settings, load
from backlight_ctl.controller import Controller
from backlight_ctl.paths import default_config_path
from backlight_ctl.spec import BrightnessSpec, SpecError, parse
from backlight_ctl.system.logind import LogindBacklight
from backlight_ctl.system.sysfs import Backlight, BacklightError, discover

log = logging.getLogger(__name__)

# "-s", or a cluster of value-less short flags ending in it, e.g. "-gs".
_SET_FLAG_RE = re.compile(r"--set|-([gv]*)s")
_SIGNED_RE = re.compile(r"-[0-9]")


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0: {value}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="backlight",
        description="Read and adjust display backlight brightness.",
    )
    ap.add_argument("--version", action="version", version=__version__)
    ap.add_argument("-g", "--get", action="store_true", help="print the resulting brightness")
    ap.add_argument(
        "-s",
        "--set",
        metavar="[+|-]VALUE[%]",
        help="absolute value, relative step, percentage or relative percentage",
    )
    ap.add_argument(
        "-m",
        "--minimum-brightness",
        type=_non_negative_int,
        metavar="VALUE",
        help="never go below this value (default: 1)",
    )
    ap.add_argument(
        "-d",
        "--device",
        action="append",
        dest="devices",
        metavar="NAME",
        help="only touch this device (repeatable)",
    )
    ap.add_argument("-c", "--config", help="YAML config file")
    ap.add_argument("--logind", action="store_true", help="write through systemd-logind")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def _glue_set_value(argv: Sequence[str]) -> list[str]:
    """Keep argparse from reading ``-s -4%`` as two options."""

    out: list[str] = []
    it = iter(argv)
    for arg in it:
        m = _SET_FLAG_RE.fullmatch(arg)
        if m:
            nxt = next(it, None)
            if nxt is None:
                out.append(arg)
            elif _SIGNED_RE.match(nxt):
                if m.group(1):
                    out.append(f"-{m.group(1)}")
                out.append(f"--set={nxt}")
            else:
                out.extend((arg, nxt))
        else:
            out.append(arg)
    return out


def _settings(args: argparse.Namespace) -> Settings:
    if args.config:
        cfg = load(args.config)
    else:
        cfg = load(default_config_path(), required=False)

    if args.minimum_brightness is not None:
        cfg["minimum_brightness"] = args.minimum_brightness
    if args.devices:
        cfg["devices"] = list(args.devices)
    if args.logind:
        cfg["writer"] = "logind"
    return Settings.from_config(cfg)


def run(args: argparse.Namespace) -> None:
    spec = parse(args.set) if args.set is not None else BrightnessSpec()
    settings = _settings(args)
    log.debug("spec=%s settings=%s", spec, settings)

    factory = LogindBacklight if settings.writer == "logind" else Backlight
    backlights = discover(settings.sysfs_root, settings.devices, factory=factory)
    ctl = Controller(backlights, minimum=settings.minimum_brightness)

    for name, value in ctl.adjust(spec):
        if args.get:
            print(f"{name}: {value}", flush=True)


def main(argv: Sequence[str] | None = None) -> None:
    ap = _build_parser()
    args = ap.parse_args(_glue_set_value(sys.argv[1:] if argv is None else argv))
    if not args.get and args.set is None:
        ap.error("at least one of --get or --set is required")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        run(args)
    except (SpecError, ConfigError, BacklightError) as e:
        raise SystemExit(f"backlight: {e}") from None


if __name__ == "__main__":
    main()
