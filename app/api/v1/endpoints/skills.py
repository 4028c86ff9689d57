"""
Skill catalog endpoints. Browsing is open to anyone; creating a custom skill
requires a known caller.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentUser, SkillCatalogDep
from app.models.common import Pagination, api_response, dump
from app.models.skill import SkillCreate, SkillOut

router = APIRouter()


def _skill_out(skill, user_count: int = 0) -> dict:
    return dump(SkillOut.model_validate(skill).model_copy(update={"user_count": user_count}))


@router.get("")
async def list_skills(
    catalog: SkillCatalogDep,
    category: Optional[str] = None,
    search: Optional[str] = Query(None, max_length=100),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    skills, total = catalog.list_skills(category=category, search=search, limit=limit, offset=offset)
    counts = catalog.usage_counts(skills)
    return api_response({
        "skills": [_skill_out(skill, counts.get(skill.id, 0)) for skill in skills],
        "pagination": dump(Pagination.build(total, limit, offset, len(skills))),
        "categories": catalog.get_categories(),
    })


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_custom_skill(payload: SkillCreate, user: CurrentUser, catalog: SkillCatalogDep):
    skill = catalog.create_custom_skill(user, payload.name, payload.category, payload.description)
    return api_response({"skill": _skill_out(skill)}, "Custom skill created successfully")


@router.get("/search")
async def search_skills(
    catalog: SkillCatalogDep,
    query: str = Query(..., min_length=1, max_length=100),
    category: Optional[str] = None,
):
    skills = catalog.search_skills(query, category=category)
    counts = catalog.usage_counts(skills)
    return api_response({"skills": [_skill_out(skill, counts.get(skill.id, 0)) for skill in skills]})


@router.get("/categories")
async def get_categories(catalog: SkillCatalogDep):
    return api_response({"categories": catalog.get_categories()})


@router.get("/popular")
async def get_popular_skills(catalog: SkillCatalogDep, limit: int = Query(10, ge=1, le=100)):
    popular = catalog.get_popular(limit=limit)
    return api_response({"skills": [_skill_out(skill, count) for skill, count in popular]})


@router.get("/{skill_id}")
async def get_skill(skill_id: str, catalog: SkillCatalogDep):
    skill = catalog.get_skill(skill_id)
    counts = catalog.usage_counts([skill])
    return api_response({"skill": _skill_out(skill, counts.get(skill.id, 0))})
