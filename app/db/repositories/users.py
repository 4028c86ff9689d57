from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from app.db.models import User, UserSkill, Skill, UserAvailability
from app.db.models.enums import ProfileVisibilityEnum, SkillTypeEnum
from app.db.repositories.base import BaseRepository


class UserRepository(BaseRepository):
    model = User

    def get_with_profile(self, user_id: str) -> Optional[User]:
        return (
            self.db.query(User)
            .options(
                selectinload(User.user_skills).selectinload(UserSkill.skill),
                selectinload(User.availabilities),
            )
            .filter(User.id == user_id)
            .first()
        )

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def search_public(
        self,
        skill: Optional[str] = None,
        skill_type: Optional[SkillTypeEnum] = None,
        location: Optional[str] = None,
        available_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[User], int]:
        query = self.db.query(User).filter(User.profile_visibility == ProfileVisibilityEnum.PUBLIC)

        if location:
            query = query.filter(User.location.ilike(f"%{location}%"))
        if available_only:
            query = query.filter(User.is_available.is_(True))
        if skill or skill_type:
            held = select(UserSkill.user_id).join(Skill, Skill.id == UserSkill.skill_id)
            if skill:
                held = held.where(Skill.name.ilike(f"%{skill}%"))
            if skill_type:
                held = held.where(UserSkill.skill_type == skill_type)
            query = query.filter(User.id.in_(held))

        total = query.count()
        users = (
            query.options(selectinload(User.user_skills).selectinload(UserSkill.skill))
            .order_by(User.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return users, total

    # --- user skills ---

    def get_user_skill(self, user_skill_id: str, user_id: str) -> Optional[UserSkill]:
        return (
            self.db.query(UserSkill)
            .filter(UserSkill.id == user_skill_id, UserSkill.user_id == user_id)
            .first()
        )

    def find_user_skill(self, user_id: str, skill_id: str, skill_type: SkillTypeEnum) -> Optional[UserSkill]:
        return (
            self.db.query(UserSkill)
            .filter(
                UserSkill.user_id == user_id,
                UserSkill.skill_id == skill_id,
                UserSkill.skill_type == skill_type,
            )
            .first()
        )

    def offers_skill(self, user_id: str, skill_id: str) -> bool:
        return self.find_user_skill(user_id, skill_id, SkillTypeEnum.OFFERED) is not None

    # --- availability ---

    def get_availability(self, availability_id: str, user_id: str) -> Optional[UserAvailability]:
        return (
            self.db.query(UserAvailability)
            .filter(UserAvailability.id == availability_id, UserAvailability.user_id == user_id)
            .first()
        )
