"""
Seed the database with sample companies, contacts and contact methods.

Requires: DATABASE_URL configured.
Usage: python scripts/seed.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

load_dotenv()

from recruit_crm.db.base import get_session_factory, init_db
from recruit_crm.logging_config import configure_logging
from recruit_crm.schemas import CompanyCreate, ContactCreate
from recruit_crm.stores import CompanyStore, ContactStore, SubEntityStore

COMPANIES = [
    {
        "name": "TechCorp Solutions",
        "legalName": "TechCorp Solutions Inc.",
        "emailDomains": ["techcorp.com"],
        "companyType": "private",
        "employeeCountRange": "51-200",
        "industry": "technology",
        "specialties": ["Software Development", "Cloud Computing", "AI/ML"],
        "foundedYear": 2015,
        "description": "Enterprise software and cloud infrastructure provider.",
        "websiteUrl": "https://techcorp.com",
        "linkedinUrl": "https://linkedin.com/company/techcorp",
        "lifecycleStage": "customer",
        "tags": ["enterprise", "b2b", "saas"],
    },
    {
        "name": "Green Energy Co",
        "legalName": "Green Energy Company LLC",
        "emailDomains": ["greenenergy.com"],
        "companyType": "private",
        "employeeCountRange": "11-50",
        "industry": "energy",
        "specialties": ["Solar Power", "Wind Energy", "Sustainability"],
        "foundedYear": 2018,
        "description": "Renewable energy solutions for residential and commercial clients.",
        "websiteUrl": "https://greenenergy.com",
        "lifecycleStage": "opportunity",
        "tags": ["renewable", "sustainability", "b2c"],
    },
    {
        "name": "HealthFirst Medical",
        "legalName": "HealthFirst Medical Group",
        "emailDomains": ["healthfirst.com"],
        "companyType": "private",
        "employeeCountRange": "201-500",
        "industry": "healthcare",
        "specialties": ["Primary Care", "Telemedicine", "Preventive Medicine"],
        "foundedYear": 2010,
        "description": "Healthcare services focused on preventive care and patient wellness.",
        "websiteUrl": "https://healthfirst.com",
        "lifecycleStage": "customer",
        "tags": ["healthcare", "medical", "telemedicine"],
    },
]

# (company index, contact fields, work email)
CONTACTS = [
    (
        0,
        {
            "firstName": "John",
            "lastName": "Smith",
            "title": "Chief Technology Officer",
            "department": "Engineering",
            "seniority": "c_level",
            "headline": "Technology leader with 15+ years in enterprise software",
            "locationLabel": "San Francisco, CA",
            "lifecycleStage": "customer",
            "tags": ["decision-maker", "technical"],
        },
        "john.smith@techcorp.com",
    ),
    (
        1,
        {
            "firstName": "Sarah",
            "lastName": "Johnson",
            "title": "VP of Operations",
            "department": "Operations",
            "seniority": "vp",
            "headline": "Operations executive focused on sustainable business practices",
            "locationLabel": "Austin, TX",
            "lifecycleStage": "opportunity",
            "tags": ["decision-maker", "operations"],
        },
        "sarah.johnson@greenenergy.com",
    ),
    (
        2,
        {
            "firstName": "Michael",
            "lastName": "Chen",
            "title": "Director of IT",
            "department": "Information Technology",
            "seniority": "director",
            "headline": "Healthcare IT specialist",
            "locationLabel": "Boston, MA",
            "lifecycleStage": "customer",
            "tags": ["technical", "healthcare-it"],
        },
        "michael.chen@healthfirst.com",
    ),
]


def seed():
    """Create the sample records through the stores."""
    configure_logging()
    init_db()
    db = get_session_factory()()
    try:
        companies = []
        for data in COMPANIES:
            company = CompanyStore(db).create(CompanyCreate.model_validate(data))
            domain = data["emailDomains"][0]
            SubEntityStore(db, "emails").create(
                "company", company.id, {"type": "work", "email": f"info@{domain}", "isPrimary": True}
            )
            companies.append(company)
            print(f"[OK] Created company: {company.name}")

        for index, data, email in CONTACTS:
            contact = ContactStore(db).create(ContactCreate.model_validate({**data, "companyId": companies[index].id}))
            SubEntityStore(db, "emails").create(
                "contact", contact.id, {"type": "work", "email": email, "isPrimary": True}
            )
            print(f"[OK] Created contact: {contact.first_name} {contact.last_name}")
    finally:
        db.close()

    print("Seeding complete!")


if __name__ == "__main__":
    seed()
