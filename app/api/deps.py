"""
FastAPI dependencies: the calling user, the notification dispatcher and the
request-scoped services built on top of the DB session.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.exceptions import Unauthorized
from app.db.deps import get_db
from app.db.models import User
from app.db.repositories import FeedbackRepository, SkillRepository, SwapRepository, UserRepository
from app.services.feedback_service import FeedbackService
from app.services.notifications import Notifier
from app.services.skill_catalog import SkillCatalogService
from app.services.swap_lifecycle import SwapLifecycleEngine
from app.services.user_profile import UserProfileService


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        raise Unauthorized("Missing X-User-ID header")
    user = db.get(User, user_id)
    if user is None:
        raise Unauthorized("Unknown user")
    return user


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notification_dispatcher


def get_swap_engine(
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
) -> SwapLifecycleEngine:
    return SwapLifecycleEngine(SwapRepository(db), UserRepository(db), notifier)


def get_feedback_service(db: Session = Depends(get_db)) -> FeedbackService:
    return FeedbackService(FeedbackRepository(db), SwapRepository(db), UserRepository(db))


def get_skill_catalog(db: Session = Depends(get_db)) -> SkillCatalogService:
    return SkillCatalogService(SkillRepository(db))


def get_user_profile_service(db: Session = Depends(get_db)) -> UserProfileService:
    return UserProfileService(UserRepository(db), SkillRepository(db))


CurrentUser = Annotated[User, Depends(get_current_user)]
SwapEngineDep = Annotated[SwapLifecycleEngine, Depends(get_swap_engine)]
FeedbackServiceDep = Annotated[FeedbackService, Depends(get_feedback_service)]
SkillCatalogDep = Annotated[SkillCatalogService, Depends(get_skill_catalog)]
UserProfileServiceDep = Annotated[UserProfileService, Depends(get_user_profile_service)]
