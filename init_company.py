"""
Bootstrap a tenant for local development.

    COMPANY_NAME="Studio" COMPANY_SLUG=studio python init_company.py

Creates the tables if they are missing, the company with the default week
(Mon–Sat 09:00–18:00, Sunday closed) and one 60-minute service.
"""

import os

from dotenv import load_dotenv

from agenda.database import SessionLocal, engine
from agenda.models import Base, Company, Services
from agenda.services.opening_hours import seed_default_rules


# ======================================================
# ENV
# ======================================================

load_dotenv()

COMPANY_NAME = os.getenv("COMPANY_NAME", "Default Company")
COMPANY_SLUG = os.getenv("COMPANY_SLUG", "default")


def main():
    Base.metadata.create_all(engine)

    db = SessionLocal()
    try:
        company = db.query(Company).filter(Company.slug == COMPANY_SLUG).first()
        if company:
            print(f"Company already exists: id={company.id}, slug={company.slug}")
            return

        company = Company(name=COMPANY_NAME, slug=COMPANY_SLUG)
        db.add(company)
        db.flush()

        seed_default_rules(db, company.id)
        db.add(Services(company_id=company.id, name="Consultation", duration_min=60, price=0))
        db.commit()

        print(f"✔ Company created: id={company.id}, slug={company.slug}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
