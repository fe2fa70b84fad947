"""Friend connections and progress comparison."""

from datetime import date
import re
from typing import List, Set

from models.schemas import FriendSummary, GoalType
from services.storage_service import StorageService
from services.streak import calculate_streak
from utils.dates import day_key
from utils.logger import setup_logger

logger = setup_logger(__name__)

SEARCH_LIMIT = 20


class FriendService:
    """Friendship edges live in the ``friendships`` collection in both directions."""

    def __init__(self, storage: StorageService):
        self.storage = storage

    @property
    def friendships(self):
        return self.storage.database.friendships

    async def friend_ids(self, user_id: str) -> Set[str]:
        try:
            rows = await self.friendships.find({"user_id": user_id}).to_list(length=None)
        except Exception as e:
            logger.error(f"Failed to load friends for user {user_id}: {e}", exc_info=True)
            return set()
        return {row["friend_id"] for row in rows}

    async def summarize(self, friend_id: str, today: date) -> FriendSummary:
        data = await self.storage.get_app_data(friend_id)
        today_entry = data.history.get(day_key(today))
        today_tasks = today_entry.todos if today_entry else []
        active = [goal for goal in data.goals if not goal.completed]
        return FriendSummary(
            id=friend_id,
            name=data.profile.name,
            email=data.profile.email,
            streak=calculate_streak(data.history, today),
            today_task_count=len(today_tasks),
            today_tasks=today_tasks,
            active_short_term_goals=sum(1 for goal in active if goal.type == GoalType.SHORT_TERM),
            active_long_term_goals=sum(1 for goal in active if goal.type == GoalType.LONG_TERM),
        )

    async def list_friends(self, user_id: str, today: date) -> List[FriendSummary]:
        """Connected users, longest streak first."""
        friends = [await self.summarize(friend_id, today) for friend_id in await self.friend_ids(user_id)]
        return sorted(friends, key=lambda friend: friend.streak, reverse=True)

    async def search_users(self, user_id: str, query: str) -> List[FriendSummary]:
        """Users whose name contains ``query``, minus the caller and existing friends."""
        query = query.strip()
        if not query:
            return []

        exclude = await self.friend_ids(user_id) | {user_id}
        try:
            cursor = self.storage.database.profiles.find({
                "name": {"$regex": re.escape(query), "$options": "i"},
            })
            rows = await cursor.to_list(length=SEARCH_LIMIT + len(exclude))
        except Exception as e:
            logger.error(f"User search failed for '{query}': {e}", exc_info=True)
            return []

        results = []
        for row in rows:
            if row.get("user_id") in exclude:
                continue
            profile = self.storage.profile_from_row(row)
            results.append(FriendSummary(id=row["user_id"], name=profile.name, email=profile.email))
        return results[:SEARCH_LIMIT]

    async def connect(self, user_id: str, friend_id: str) -> bool:
        if user_id == friend_id:
            return False
        try:
            for owner, other in ((user_id, friend_id), (friend_id, user_id)):
                await self.friendships.update_one(
                    {"user_id": owner, "friend_id": other},
                    {"$set": {"user_id": owner, "friend_id": other}},
                    upsert=True,
                )
        except Exception as e:
            logger.error(f"Failed to connect {user_id} with {friend_id}: {e}", exc_info=True)
            return False
        logger.info(f"Connected {user_id} with {friend_id}")
        return True

    async def disconnect(self, user_id: str, friend_id: str) -> bool:
        try:
            await self.friendships.delete_many({
                "$or": [
                    {"user_id": user_id, "friend_id": friend_id},
                    {"user_id": friend_id, "friend_id": user_id},
                ]
            })
        except Exception as e:
            logger.error(f"Failed to disconnect {user_id} from {friend_id}: {e}", exc_info=True)
            return False
        return True
