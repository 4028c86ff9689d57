import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from app.db.base import Base
from app.db import models  # noqa: F401
from app.db.deps import get_db
from app.db.models import Skill, User, UserSkill
from app.db.models.enums import ProfileVisibilityEnum, SkillTypeEnum
from app.db.repositories import FeedbackRepository, SwapRepository, UserRepository
from app.services.feedback_service import FeedbackService
from app.services.swap_lifecycle import SwapLifecycleEngine


class RecordingNotifier:
    """Stands in for the dispatcher and remembers every published event."""

    def __init__(self):
        self.events = []

    def publish(self, user_id, message, data=None):
        self.events.append({"user_id": user_id, "message": message, "data": data or {}})

    def types_for(self, user_id):
        return [e["data"].get("type") for e in self.events if e["user_id"] == user_id]


class FailingNotifier:
    def publish(self, user_id, message, data=None):
        raise RuntimeError("notification channel is down")


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def swap_engine(db, notifier):
    return SwapLifecycleEngine(SwapRepository(db), UserRepository(db), notifier)


@pytest.fixture
def feedback_service(db):
    return FeedbackService(FeedbackRepository(db), SwapRepository(db), UserRepository(db))


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(first_name="Test", **fields):
        counter["n"] += 1
        user = User(
            email=fields.pop("email", f"user{counter['n']}@example.com"),
            first_name=first_name,
            last_name=fields.pop("last_name", "User"),
            profile_visibility=fields.pop("profile_visibility", ProfileVisibilityEnum.PUBLIC),
            is_available=fields.pop("is_available", True),
            **fields,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_skill(db):
    def _make_skill(name, category="General", is_custom=False, description=None):
        skill = Skill(name=name, category=category, is_custom=is_custom, description=description)
        db.add(skill)
        db.commit()
        db.refresh(skill)
        return skill

    return _make_skill


@pytest.fixture
def give_skill(db):
    def _give_skill(user, skill, skill_type=SkillTypeEnum.OFFERED, level=3):
        user_skill = UserSkill(user_id=user.id, skill_id=skill.id, skill_type=skill_type, level=level)
        db.add(user_skill)
        db.commit()
        return user_skill

    return _give_skill


@pytest.fixture
def barter_pair(make_user, make_skill, give_skill):
    """Sender offers JavaScript, receiver offers Photography."""
    sender = make_user("Sam")
    receiver = make_user("Rita")
    javascript = make_skill("JavaScript", "Programming")
    photography = make_skill("Photography", "Creative")
    give_skill(sender, javascript)
    give_skill(receiver, photography)
    give_skill(sender, photography, SkillTypeEnum.WANTED)
    return {
        "sender": sender,
        "receiver": receiver,
        "offered": javascript,
        "requested": photography,
    }


@pytest.fixture
def client(session_factory):
    from app.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
