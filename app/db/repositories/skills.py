from typing import List, Optional, Tuple

from sqlalchemy import func, or_

from app.db.models import Skill, UserSkill
from app.db.repositories.base import BaseRepository


class SkillRepository(BaseRepository):
    model = Skill

    def _filtered(self, category: Optional[str] = None, search: Optional[str] = None):
        query = self.db.query(Skill)
        if category:
            query = query.filter(Skill.category == category)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Skill.name.ilike(pattern), Skill.description.ilike(pattern)))
        return query

    def list_page(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Skill], int]:
        query = self._filtered(category, search)
        total = query.count()
        # Predefined skills first, then alphabetical
        skills = (
            query.order_by(Skill.is_custom.asc(), Skill.name.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return skills, total

    def find_by_name(self, name: str) -> Optional[Skill]:
        return self.db.query(Skill).filter(func.lower(Skill.name) == name.strip().lower()).first()

    def categories(self) -> List[str]:
        rows = self.db.query(Skill.category).distinct().order_by(Skill.category.asc()).all()
        return [row[0] for row in rows]

    def usage_counts(self, skill_ids: List[str]) -> dict:
        """Number of UserSkill rows referencing each skill id."""
        if not skill_ids:
            return {}
        rows = (
            self.db.query(UserSkill.skill_id, func.count(UserSkill.id))
            .filter(UserSkill.skill_id.in_(skill_ids))
            .group_by(UserSkill.skill_id)
            .all()
        )
        return {skill_id: count for skill_id, count in rows}

    def popular(self, limit: int = 10) -> List[Tuple[Skill, int]]:
        usage = func.count(UserSkill.id).label("usage")
        rows = (
            self.db.query(Skill, usage)
            .outerjoin(UserSkill, UserSkill.skill_id == Skill.id)
            .group_by(Skill.id)
            .order_by(usage.desc(), Skill.name.asc())
            .limit(limit)
            .all()
        )
        return [(skill, count) for skill, count in rows]
