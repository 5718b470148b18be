#!/usr/bin/env python3
"""
Generate a plan and log part of this week's sessions through the FORGE API,
so the compliance and load endpoints have something to show.

Every planned session up to yesterday is logged on its day, except the
ones listed with --skip, which are left missed. Run efforts come from
--effort (one value per logged run, cycled).

Usage examples:
  - Against a local backend:
      python scripts/seed_plan_week.py --base-url http://localhost:8000 --token <JWT>
  - Leave Wednesday missed and make every run hard:
      python scripts/seed_plan_week.py --base-url ... --token ... --skip Wed --effort 8
"""

from __future__ import annotations

import argparse
import datetime as dt
import itertools
import sys

import requests


DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def monday_of_week(d: dt.date) -> dt.date:
    return d - dt.timedelta(days=d.weekday())


def pace_duration(distance_mi: float, pace_min_per_mile: float) -> str:
    minutes = distance_mi * pace_min_per_mile
    total_seconds = int(minutes * 60)
    h = total_seconds // 3600
    m = (total_seconds % 3600) // 60
    s = total_seconds % 60
    return f"{h:02d}:{m:02d}:{s:02d}"


def call(base_url: str, token: str, method: str, path: str, payload: dict | None = None) -> dict:
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    r = requests.request(method, url, json=payload, timeout=15, headers={"Authorization": f"Bearer {token}"})
    if r.status_code >= 300:
        raise RuntimeError(f"{method} {path} -> HTTP {r.status_code}: {r.text}")
    return r.json()


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed this week's plan and logged sessions")
    ap.add_argument("--base-url", required=True, help="API base URL (e.g. http://localhost:8000)")
    ap.add_argument("--token", required=True, help="Bearer token for the user to seed")
    ap.add_argument("--weekly-miles", type=float, default=20.0)
    ap.add_argument("--skip", action="append", default=[], help="Day label to leave missed (repeatable)")
    ap.add_argument("--effort", type=int, action="append", default=[], help="Perceived effort per run (cycled)")
    args = ap.parse_args()

    plan = call(args.base_url, args.token, "POST", "plans/generate", {"weekly_miles": args.weekly_miles})["plan"]
    week = plan["plan_json"]["weeks"][0]

    today = dt.date.today()
    this_monday = monday_of_week(today)
    efforts = itertools.cycle(args.effort or [5])
    skip = {s[:3].title() for s in args.skip}

    logged = 0
    for day in week["days"]:
        if day.get("rest") or day["day"] in skip:
            continue
        when = this_monday + dt.timedelta(days=DAYS.index(day["day"]))
        if when >= today:
            continue
        if day["type"] in ("strength", "cross_train"):
            call(args.base_url, args.token, "POST", "lifts/", {
                "date": when.isoformat(),
                "muscle_groups": ["full body"],
                "notes": "seed",
            })
        else:
            miles = float(day.get("distance_miles") or 3.0)
            call(args.base_url, args.token, "POST", "runs/", {
                "date": when.isoformat(),
                "type": day["type"] if day["type"] in ("easy", "tempo", "long", "intervals", "recovery") else "other",
                "distance_miles": miles,
                "duration": pace_duration(miles, 9.0),
                "perceived_effort": next(efforts),
                "notes": "seed",
            })
        logged += 1

    compliance = call(args.base_url, args.token, "GET", "plans/compliance")
    load = call(args.base_url, args.token, "GET", "runs/load-analysis")
    print(f"Logged {logged} sessions. Compliance {compliance['completed']}/{compliance['planned']} "
          f"({compliance['score']}%), load {load['load_status']}.")


if __name__ == "__main__":
    try:
        main()
    except RuntimeError as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)
