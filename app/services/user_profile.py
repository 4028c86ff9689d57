"""
User profiles: own profile, public profiles, search, held skills and
availability slots.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import Conflict, DuplicateUserSkill, Forbidden, NotFound, ValidationError
from app.db.models import User, UserSkill, UserAvailability
from app.db.models.enums import (
    AvailabilityTypeEnum,
    ProfileVisibilityEnum,
    SkillTypeEnum,
)
from app.db.repositories import SkillRepository, UserRepository

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("first_name", "last_name", "location", "bio", "profile_visibility", "is_available")
SKILL_LEVELS = range(1, 6)


class UserProfileService:
    def __init__(self, users: UserRepository, skills: SkillRepository):
        self.users = users
        self.skills = skills

    def create_user(
        self,
        email: str,
        first_name: str,
        last_name: str,
        hashed_password: Optional[str] = None,
        **fields: Any,
    ) -> User:
        """Persist a user record. Signup and credentials live upstream."""
        if self.users.get_by_email(email) is not None:
            raise Conflict("A user with this email already exists")
        user = User(
            email=email.lower(),
            first_name=first_name,
            last_name=last_name,
            hashed_password=hashed_password,
            **fields,
        )
        return self.users.save(user)

    def get_own_profile(self, user_id: str) -> User:
        user = self.users.get_with_profile(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def update_profile(self, user: User, changes: Dict[str, Any]) -> User:
        for name, value in changes.items():
            if name in PROFILE_FIELDS and value is not None:
                setattr(user, name, value)
        self.users.commit()
        return self.get_own_profile(user.id)

    def get_public_profile(self, viewer_id: str, user_id: str) -> User:
        user = self.users.get_with_profile(user_id)
        if user is None:
            raise NotFound("User not found")
        if user.profile_visibility == ProfileVisibilityEnum.PRIVATE and user.id != viewer_id:
            raise Forbidden("This profile is private")
        return user

    def search_users(
        self,
        skill: Optional[str] = None,
        skill_type: Optional[SkillTypeEnum] = None,
        location: Optional[str] = None,
        available_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[User], int]:
        return self.users.search_public(
            skill=skill,
            skill_type=skill_type,
            location=location,
            available_only=available_only,
            limit=limit,
            offset=offset,
        )

    # --- held skills ---

    def add_user_skill(self, user: User, skill_id: str, skill_type: SkillTypeEnum, level: int = 1) -> UserSkill:
        if level not in SKILL_LEVELS:
            raise ValidationError("Skill level must be between 1 and 5")
        if self.skills.get(skill_id) is None:
            raise NotFound("Skill not found")
        if self.users.find_user_skill(user.id, skill_id, skill_type) is not None:
            raise DuplicateUserSkill()

        user_skill = UserSkill(user_id=user.id, skill_id=skill_id, skill_type=skill_type, level=level)
        try:
            self.users.save(user_skill)
        except IntegrityError:
            self.users.rollback()
            if self.users.find_user_skill(user.id, skill_id, skill_type) is not None:
                raise DuplicateUserSkill()
            raise
        return user_skill

    def remove_user_skill(self, user: User, user_skill_id: str) -> None:
        user_skill = self.users.get_user_skill(user_skill_id, user.id)
        if user_skill is None:
            raise NotFound("User skill not found")
        self.users.delete(user_skill)
        self.users.commit()

    # --- availability ---

    def add_availability(
        self,
        user: User,
        availability_type: AvailabilityTypeEnum,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        days_of_week: Optional[List[str]] = None,
    ) -> UserAvailability:
        availability = UserAvailability(
            user_id=user.id,
            availability_type=availability_type,
            start_time=start_time,
            end_time=end_time,
            days_of_week=list(days_of_week or []),
        )
        return self.users.save(availability)

    def remove_availability(self, user: User, availability_id: str) -> None:
        availability = self.users.get_availability(availability_id, user.id)
        if availability is None:
            raise NotFound("Availability not found")
        self.users.delete(availability)
        self.users.commit()
