"""
Skill catalog: browsing, search and user-submitted custom skills.
"""

import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import Conflict, DuplicateSkill, NotFound
from app.db.models import Skill, User
from app.db.repositories import SkillRepository

logger = logging.getLogger(__name__)

SEARCH_RESULT_LIMIT = 20


class SkillCatalogService:
    def __init__(self, skills: SkillRepository):
        self.skills = skills

    def usage_counts(self, skills: List[Skill]) -> Dict[str, int]:
        return self.skills.usage_counts([skill.id for skill in skills])

    def list_skills(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Skill], int]:
        return self.skills.list_page(category=category, search=search, limit=limit, offset=offset)

    def search_skills(self, query: str, category: Optional[str] = None) -> List[Skill]:
        skills, _ = self.skills.list_page(category=category, search=query, limit=SEARCH_RESULT_LIMIT)
        return skills

    def get_skill(self, skill_id: str) -> Skill:
        skill = self.skills.get(skill_id)
        if skill is None:
            raise NotFound("Skill not found")
        return skill

    def get_categories(self) -> List[str]:
        return self.skills.categories()

    def get_popular(self, limit: int = 10) -> List[Tuple[Skill, int]]:
        return self.skills.popular(limit=limit)

    def create_custom_skill(
        self, creator: User, name: str, category: str, description: Optional[str] = None
    ) -> Skill:
        name = name.strip()
        if self.skills.find_by_name(name) is not None:
            raise DuplicateSkill()

        skill = Skill(
            name=name,
            category=category.strip(),
            description=description,
            is_custom=True,
            created_by=creator.id,
        )
        try:
            self.skills.save(skill)
        except IntegrityError:
            # Lost a race with a concurrent create of the same name
            self.skills.rollback()
            raise Conflict(DuplicateSkill.default_message)

        logger.info("Custom skill %r created by %s", skill.name, creator.id)
        return skill
