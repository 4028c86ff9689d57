"""
Repositories wrap the SQLAlchemy session behind one class per aggregate.

Services receive repositories instead of reaching for a global session, so
tests can hand them a session bound to an in-memory database.
"""

from .base import BaseRepository
from .users import UserRepository
from .skills import SkillRepository
from .swaps import SwapRepository
from .feedback import FeedbackRepository
