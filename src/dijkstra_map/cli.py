from __future__ import annotations

import argparse
import sys

from dijkstra_map.app.build import build
from dijkstra_map.config.models import SessionModel, load_config
from dijkstra_map.domain.entities.results import PathError
from dijkstra_map.io.recorder import JsonlSink, Recorder


def _config(args) -> SessionModel:
    cfg = load_config(args.config) if args.config else SessionModel()
    level = "CRITICAL" if args.quiet else args.log_level
    if level:
        cfg = cfg.model_copy(update={"log": cfg.log.model_copy(update={"level": level})})
    if getattr(args, "seed", None) is not None:
        cfg = cfg.model_copy(update={"seed": args.seed})
    return cfg


def _session(args):
    return build(_config(args), recorder=args.recorder)


def _load(session, args) -> bool:
    report = session.load_file(args.map, fmt=args.format)
    if not report.ok:
        print(f"error: {report.message}", file=sys.stderr)
        return False
    return True


def cmd_stats(args) -> int:
    session = _session(args)
    if not _load(session, args):
        return 1
    print(session.stats())
    problem = session.connectivity()
    if problem is not None:
        print(f"{problem.message}: {problem.details}")
    return 0


def cmd_route(args) -> int:
    session = _session(args)
    if not _load(session, args):
        return 1
    outcome = session.route(args.origin, args.destination)
    print(session.report())
    if isinstance(outcome, PathError):
        if outcome.details:
            print(outcome.details, file=sys.stderr)
        return 2
    return 0


def cmd_generate(args) -> int:
    session = _session(args)
    result = session.generate(args.count)
    if not result.ok:
        print(f"error: {result.message}", file=sys.stderr)
        return 1
    print(session.stats())
    return 0


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dijkstra-map", description="Shortest paths over OSM / POLY road networks."
    )
    parser.add_argument("--config", help="JSON session config file")
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Override log level"
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress structured logs")
    parser.add_argument("--events", help="Append session events to this JSONL file")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("stats", help="Load a map and print graph statistics")
    p.add_argument("map")
    p.add_argument("--format", choices=["osm", "poly"], help="Override format detection")
    p.set_defaults(func=cmd_stats)

    p = sub.add_parser("route", help="Shortest path between two node ids")
    p.add_argument("map")
    p.add_argument("origin")
    p.add_argument("destination")
    p.add_argument("--format", choices=["osm", "poly"], help="Override format detection")
    p.set_defaults(func=cmd_route)

    p = sub.add_parser("generate", help="Random triangulated graph")
    p.add_argument("count", type=int)
    p.add_argument("--seed", type=int)
    p.set_defaults(func=cmd_generate)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = make_parser().parse_args(argv)
    if not args.events:
        args.recorder = None
        return args.func(args)
    with open(args.events, "a", encoding="utf-8") as fp:
        args.recorder = Recorder(JsonlSink(fp))
        return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
