"""Seed a user's last few weeks with demo runs and lifts, straight through the ORM.

    cd backend && python -m scripts.seed_demo_runs --user demo-user
"""
import argparse
from datetime import date, timedelta
import random

from forge.db import Base, SessionLocal, engine
from forge.models.lift import Lift
from forge.models.run import Run


def clear_recent_activity(db, user_id: str, days: int = 120) -> None:
    """Delete the user's runs and lifts in the last N days so we can reseed cleanly."""
    cutoff = date.today() - timedelta(days=days)
    db.query(Run).filter(Run.user_id == user_id, Run.date >= cutoff).delete()
    db.query(Lift).filter(Lift.user_id == user_id, Lift.date >= cutoff).delete()
    db.commit()


def seed_demo_activity(db, user_id: str, weeks: int = 6) -> None:
    """Tue easy, Thu tempo, Sat long plus a Wednesday leg day, per week."""
    today = date.today()
    start_day = today - timedelta(days=today.weekday()) - timedelta(weeks=weeks - 1)

    runs_to_add = []
    lifts_to_add = []

    for week in range(weeks):
        week_start = start_day + timedelta(weeks=week)
        tue = week_start + timedelta(days=1)
        wed = week_start + timedelta(days=2)
        thu = week_start + timedelta(days=3)
        sat = week_start + timedelta(days=5)

        for d, run_type, dist, effort, notes in [
            (tue, "easy", round(random.uniform(3.0, 5.0), 1), random.randint(3, 5), "Easy aerobic miles."),
            (thu, "tempo", round(random.uniform(4.0, 6.0), 1), random.randint(6, 8), "Threshold / tempo workout."),
            (sat, "long", round(random.uniform(7.0, 11.0), 1), random.randint(5, 7), "Long run on rolling hills."),
        ]:
            # Skip future days
            if d > today:
                continue
            runs_to_add.append(
                Run(
                    user_id=user_id,
                    date=d,
                    type=run_type,
                    distance_miles=dist,
                    duration_seconds=int(dist * random.uniform(510, 600)),
                    perceived_effort=effort,
                    notes=notes,
                )
            )

        if wed <= today:
            lifts_to_add.append(
                Lift(
                    user_id=user_id,
                    date=wed,
                    muscle_groups=["legs", "core"],
                    intensity=random.choice(["moderate", "heavy"]),
                    duration_seconds=45 * 60,
                )
            )

    db.add_all(runs_to_add + lifts_to_add)
    db.commit()

    print(f"Seeded {len(runs_to_add)} runs and {len(lifts_to_add)} lifts for {user_id}")


def main():
    ap = argparse.ArgumentParser(description="Seed demo runs and lifts for one user")
    ap.add_argument("--user", required=True, help="user id (the JWT `sub` claim)")
    ap.add_argument("--weeks", type=int, default=6)
    args = ap.parse_args()

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        clear_recent_activity(db, args.user, days=args.weeks * 7 + 7)
        seed_demo_activity(db, args.user, weeks=args.weeks)
    finally:
        db.close()


if __name__ == "__main__":
    main()
