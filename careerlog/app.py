import argparse
import asyncio
import json
from pathlib import Path

from . import __version__
from .candidates import GRAMMARS
from .config import Settings
from .env import load_env
from .errors import FetchError, RosterSchemaError
from .evaluator import POLICIES
from .models import Category, current_season
from .pipeline import run_pipeline
from .retry import RetryError
from .roster import fetch_roster
from .schema import validate_roster_payload
from .scrapers.common import FetchClient
from .storage import load_run, save_run

DEFAULT_OUTPUTS = {
    "gamelogs": "player-data.json",
    "injuries": "For-AI/Injury/injury-history.json",
}


def _settings(args: argparse.Namespace, pipeline: str | None = None) -> Settings:
    try:
        settings = Settings.from_env(pipeline)
        return settings.override(
            batch_size=getattr(args, "batch_size", None),
            batch_delay_ms=getattr(args, "batch_delay_ms", None),
            roster_limit=getattr(args, "limit", None),
        )
    except ValueError as e:
        raise SystemExit(f"Invalid configuration: {e}")


def _run(args: argparse.Namespace, pipeline: str) -> None:
    settings = _settings(args, pipeline)
    policy = POLICIES["strict" if args.strict else "greedy"]()
    output = Path(args.output or DEFAULT_OUTPUTS[pipeline])

    try:
        result = asyncio.run(run_pipeline(pipeline, settings, policy=policy))
    except RosterSchemaError as e:
        raise SystemExit(str(e))
    except (RetryError, FetchError) as e:
        raise SystemExit(f"Failed to fetch ADP data: {e}")

    save_run(output, result)
    stats = result.stats
    print(f"Done. resolved={stats.resolved} failed={stats.failed} no-match={stats.no_match}")
    print(f"Data saved to {output}")


def cmd_gamelogs(args: argparse.Namespace) -> None:
    _run(args, "gamelogs")


def cmd_injuries(args: argparse.Namespace) -> None:
    _run(args, "injuries")


def cmd_roster(args: argparse.Namespace) -> None:
    settings = _settings(args)
    client = FetchClient(settings)
    try:
        players = asyncio.run(fetch_roster(client))
    except RosterSchemaError as e:
        raise SystemExit(str(e))
    except (RetryError, FetchError) as e:
        raise SystemExit(f"Failed to fetch ADP data: {e}")
    for i, p in enumerate(players, 1):
        print(f"#{i:<4} {p.name:<28} {p.category.value:<3} {p.affiliation:<4} adp={p.rank}")


def cmd_candidates(args: argparse.Namespace) -> None:
    grammar = GRAMMARS[args.grammar]
    category = Category.parse(args.category)
    if args.category and category is None:
        raise SystemExit(f"Unknown position: {args.category}")
    season = args.season or current_season()
    for candidate in grammar.candidates(args.name, category):
        print(f" - {candidate}  {grammar.locate(candidate, season=season)}")


def cmd_validate(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        payload = json.load(f)
    errors = validate_roster_payload(payload)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_summary(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Run output not found: {input_path}")
        return
    run = load_run(input_path)
    players = run.get("data", {})
    if not players:
        print("No players in run output.")
        return
    print(f"{run.get('pipeline', 'run')} from {run.get('timestamp')} (season {run.get('current_nfl_season')})")
    print(f"Stats: {run.get('stats')}\n")
    for key, player in players.items():
        print(f"{player.get('name')} ({player.get('position')}, {player.get('team')})")
        if "seasons" in player:
            rookie = " rookie" if player.get("is_likely_rookie") else ""
            print(f"  Seasons: {player.get('total_seasons')}{rookie}")
        if "injuries" in player:
            print(f"  Injuries: {player.get('total_injuries')} (recent: {player.get('has_recent_injuries')})")


def _add_run_options(p: argparse.ArgumentParser, pipeline: str) -> None:
    p.add_argument("--output", help=f"Output JSON path (default: {DEFAULT_OUTPUTS[pipeline]})")
    p.add_argument("--batch-size", type=int, help="Players per concurrent batch (default: $BATCH_SIZE or 5)")
    p.add_argument("--batch-delay-ms", type=int, help="Pause between batches in milliseconds")
    p.add_argument("--limit", type=int, help="Only process the top N players of the roster")
    p.add_argument("--strict", action="store_true", help="Reject pages whose position differs from the roster")


def main():
    # Load .env if present (BATCH_SIZE, ROSTER_URL, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="careerlog", description="NFL player career history and injury scraper")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    gl = subparsers.add_parser("gamelogs", help="Scrape season game-log totals for every roster player")
    _add_run_options(gl, "gamelogs")
    gl.set_defaults(func=cmd_gamelogs)

    inj = subparsers.add_parser("injuries", help="Scrape injury history for every roster player")
    _add_run_options(inj, "injuries")
    inj.set_defaults(func=cmd_injuries)

    ros = subparsers.add_parser("roster", help="Fetch and print the ranked skill-position roster")
    ros.add_argument("--limit", type=int, help="Only print the top N players")
    ros.set_defaults(func=cmd_roster)

    cand = subparsers.add_parser("candidates", help="Print the candidate locators tried for a player name")
    cand.add_argument("--name", required=True, help="Player display name, e.g. \"Josh Allen\"")
    cand.add_argument("--category", help="Position (QB, RB, WR, TE)")
    cand.add_argument("--grammar", choices=sorted(GRAMMARS), default="gamelogs", help="Source site grammar")
    cand.add_argument("--season", type=int, help="Season for game-log URLs (default: current season)")
    cand.set_defaults(func=cmd_candidates)

    val = subparsers.add_parser("validate", help="Validate a saved ADP API response against the roster schema")
    val.add_argument("--input", required=True, help="Path to roster JSON")
    val.set_defaults(func=cmd_validate)

    summ = subparsers.add_parser("summary", help="Summarize a saved run output")
    summ.add_argument("--input", default=DEFAULT_OUTPUTS["gamelogs"], help="Path to run output JSON")
    summ.set_defaults(func=cmd_summary)

    args = parser.parse_args()

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
