"""
seed_data.py

Seeds the predefined skill catalog and a few demo users with offered and
wanted skills. Safe to run repeatedly: existing skills and users are kept.
"""

import logging

from sqlalchemy.orm import Session

from app.core import logging_config  # noqa: F401
from app.db.session import SessionLocal
from app.db.models import Skill, UserSkill
from app.db.models.enums import SkillTypeEnum
from app.db.repositories import SkillRepository, UserRepository
from app.services.user_profile import UserProfileService

logger = logging.getLogger(__name__)

PREDEFINED_SKILLS = [
    # Programming & Technology
    ("JavaScript", "Programming"),
    ("Python", "Programming"),
    ("React", "Frontend"),
    ("Node.js", "Backend"),
    ("SQL", "Database"),
    ("Git", "Version Control"),
    ("Docker", "DevOps"),
    ("AWS", "Cloud Computing"),
    # Languages
    ("English", "Language"),
    ("Spanish", "Language"),
    ("French", "Language"),
    ("German", "Language"),
    ("Mandarin", "Language"),
    ("Japanese", "Language"),
    # Creative
    ("Photography", "Creative"),
    ("Graphic Design", "Creative"),
    ("Video Editing", "Creative"),
    ("Drawing", "Creative"),
    ("Music Production", "Creative"),
    ("Writing", "Creative"),
    # Business & Professional
    ("Project Management", "Business"),
    ("Marketing", "Business"),
    ("Sales", "Business"),
    ("Data Analysis", "Business"),
    ("Excel", "Business"),
    ("PowerPoint", "Business"),
    # Life Skills
    ("Cooking", "Life Skills"),
    ("Gardening", "Life Skills"),
    ("Fitness Training", "Life Skills"),
    ("Meditation", "Life Skills"),
    ("Public Speaking", "Life Skills"),
    ("Time Management", "Life Skills"),
    # Academic
    ("Mathematics", "Academic"),
    ("Physics", "Academic"),
    ("Chemistry", "Academic"),
    ("Biology", "Academic"),
    ("History", "Academic"),
    ("Literature", "Academic"),
]

DEMO_USERS = [
    {
        "email": "john@example.com",
        "first_name": "John",
        "last_name": "Doe",
        "location": "New York, NY",
        "bio": "Full-stack developer who wants to learn photography.",
        "offered": ["JavaScript", "React"],
        "wanted": ["Photography"],
    },
    {
        "email": "jane@example.com",
        "first_name": "Jane",
        "last_name": "Smith",
        "location": "Los Angeles, CA",
        "bio": "Photographer curious about programming.",
        "offered": ["Photography", "Graphic Design"],
        "wanted": ["JavaScript"],
    },
    {
        "email": "mike@example.com",
        "first_name": "Mike",
        "last_name": "Johnson",
        "location": "Chicago, IL",
        "bio": "Chef and language enthusiast.",
        "offered": ["Cooking", "Spanish"],
        "wanted": ["Python", "Public Speaking"],
    },
]

def seed_skills(db: Session) -> int:
    skills = SkillRepository(db)
    created = 0
    for name, category in PREDEFINED_SKILLS:
        if skills.find_by_name(name) is None:
            skills.add(Skill(name=name, category=category, is_custom=False))
            created += 1
    skills.commit()
    logger.info("Seeded %s predefined skills", created)
    return created

def seed_users(db: Session) -> int:
    users = UserRepository(db)
    skills = SkillRepository(db)
    profiles = UserProfileService(users, skills)
    created = 0
    for demo in DEMO_USERS:
        if users.get_by_email(demo["email"]) is not None:
            continue
        user = profiles.create_user(
            email=demo["email"],
            first_name=demo["first_name"],
            last_name=demo["last_name"],
            location=demo["location"],
            bio=demo["bio"],
        )
        for skill_type, names in ((SkillTypeEnum.OFFERED, demo["offered"]), (SkillTypeEnum.WANTED, demo["wanted"])):
            for name in names:
                skill = skills.find_by_name(name)
                if skill is not None:
                    users.add(UserSkill(user_id=user.id, skill_id=skill.id, skill_type=skill_type, level=3))
        users.commit()
        created += 1
    logger.info("Seeded %s demo users", created)
    return created

def run_seed():
    db = SessionLocal()
    try:
        seed_skills(db)
        seed_users(db)
    finally:
        db.close()

if __name__ == "__main__":
    run_seed()
