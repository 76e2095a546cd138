"""Seed a demo user with a few weeks of digestive logs, meals and an experiment."""

from datetime import date, timedelta
from uuid import UUID

from gut_insights.database import SessionLocal
from gut_insights.models import (
    ConsumedMeal,
    DigestiveLog,
    FoodExperiment,
    FoodItem,
    Supplement,
    SupplementRegimen,
    User,
)
from gut_insights.services.auth.local_provider import hash_password


DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo-password"

# (meal description, log severity the following day)
DEMO_ROTATION = [
    ("Curry de garbanzos", 5),
    ("Arroz con pollo", 2),
    ("Ensalada de quinoa", 2),
    ("Curry de garbanzos", 4),
    ("Avena con plátano", 1),
    ("Arroz con pollo", 2),
    ("Lentejas guisadas", 4),
]


def seed_demo(today: date | None = None) -> UUID:
    """Create the demo user and three weeks of data ending today. Returns the user id."""
    today = today or date.today()
    db = SessionLocal()

    try:
        existing = db.query(User).filter(User.email == DEMO_EMAIL).first()
        if existing:
            print("Demo user already exists. Skipping.")
            return existing.id

        user = User(email=DEMO_EMAIL, password_hash=hash_password(DEMO_PASSWORD))
        db.add(user)
        db.flush()

        start = today - timedelta(days=21)
        for offset in range(21):
            day = start + timedelta(days=offset)
            description, severity = DEMO_ROTATION[offset % len(DEMO_ROTATION)]
            db.add(
                ConsumedMeal(
                    user_id=user.id,
                    consumed_date=day,
                    meal_label="lunch",
                    description=description,
                )
            )
            db.add(
                DigestiveLog(
                    user_id=user.id,
                    log_date=day + timedelta(days=1),
                    symptom="bloating",
                    severity=severity,
                    bloating=severity,
                    pain=max(severity - 1, 0),
                    bristol=4 if severity <= 2 else 6,
                    stress=2,
                    sleep_hours=7.5,
                )
            )

        magnesium = Supplement(user_id=user.id, name="Magnesio", brand="Demo")
        db.add(magnesium)
        db.flush()
        db.add(
            SupplementRegimen(
                user_id=user.id,
                supplement_id=magnesium.id,
                start_date=today - timedelta(days=10),
                dose_value=300,
                dose_unit="mg",
            )
        )

        chickpeas = db.query(FoodItem).filter(FoodItem.name == "Garbanzos").first()
        if not chickpeas:
            chickpeas = FoodItem(name="Garbanzos", category="legumes")
            db.add(chickpeas)
            db.flush()
        db.add(
            FoodExperiment(
                user_id=user.id,
                food_item_id=chickpeas.id,
                start_date=today - timedelta(days=7),
                notes="Elimination trial",
            )
        )

        user_id = user.id
        db.commit()
        print(f"Successfully created demo user {DEMO_EMAIL}")
        return user_id

    except Exception as e:
        print(f"Error seeding demo data: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_demo()
