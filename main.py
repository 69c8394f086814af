"""Command-line entrypoint for CampusStyle: generate a plan or look up an item."""

import argparse
import json
import sys
from typing import List, Optional

from campus_app.app import CampusStyleApp
from campus_app.errors import CampusStyleError
from models.preferences import Preferences
from models.taxonomy import Gender, Season, StylePreference, parse_day
from tools.photo_loader import load_photo


def _choices(enum_type) -> List[str]:
    return [member.value for member in enum_type]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="campus-style", description="Weekly college outfit planner")
    commands = parser.add_subparsers(dest="command", required=True)

    plan = commands.add_parser("plan", help="Generate a 7-day outfit plan")
    plan.add_argument("--gender", choices=_choices(Gender), default=Gender.UNISEX.value)
    plan.add_argument(
        "--days",
        default="Monday,Tuesday,Wednesday,Thursday,Friday",
        help="Comma separated college days, e.g. Mon,Wed,Fri. Empty for none.",
    )
    plan.add_argument("--start", default="09:00", help="Class start time HH:MM")
    plan.add_argument("--end", default="17:00", help="Class end time HH:MM")
    plan.add_argument("--season", choices=_choices(Season), default=Season.AUTUMN.value)
    plan.add_argument("--style", choices=_choices(StylePreference), default=StylePreference.CASUAL.value)
    plan.add_argument("--notes", default="", help="Additional instructions for the stylist")
    plan.add_argument("--photo", help="Path, URL or data URL of a photo to tailor colors and fit")

    shop = commands.add_parser("shop", help="Find shopping links for an item description")
    shop.add_argument("query", help="Item description, e.g. 'Navy Pleated Skirt'")
    return parser


def preferences_from_args(args: argparse.Namespace) -> Preferences:
    days = [parse_day(value) for value in args.days.split(",") if value.strip()]
    return Preferences(
        gender=Gender(args.gender),
        college_days=days,
        start_time=args.start,
        end_time=args.end,
        season=Season(args.season),
        style=StylePreference(args.style),
        additional_instructions=args.notes,
        photo=load_photo(args.photo) if args.photo else None,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        app = CampusStyleApp()
        if args.command == "plan":
            session_id = app.start_session()
            plan = app.generate_plan(session_id, preferences_from_args(args))
            print(json.dumps(plan.to_json_data(), indent=2))
        else:
            result = app.find_shopping(args.query)
            print(json.dumps(result.model_dump(mode="json"), indent=2))
    except (CampusStyleError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
