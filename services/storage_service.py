"""MongoDB-backed storage for the per-user tracker aggregate."""

from datetime import date
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from pymongo import DeleteMany, UpdateOne

from models.database import get_database
from models.schemas import AIAnalysis, AppData, DailyEntry, Goal, Todo, UserProfile
from services.aggregation import filter_todays_analyses
from services.entry_service import blank_entry, repeat_copies
from utils.dates import day_key, days_before
from utils.logger import setup_logger

logger = setup_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Collections cleared by a full reset. Friendship edges are kept.
USER_COLLECTIONS = ("profiles", "daily_entries", "goals", "ai_analyses", "user_settings")


def to_document(user_id: str, model: BaseModel) -> Dict[str, Any]:
    """Serialize a model into a row owned by ``user_id``."""
    return {"user_id": user_id, **model.model_dump(mode="json")}


class StorageService:
    """Reads and writes a user's profile, history, goals, analyses and settings.

    Write failures are logged and swallowed. ``get_app_data`` falls back to
    the default dataset, while ``load_app_data`` and ``get_day_entry`` raise
    so callers never save over data they could not read.
    """

    def __init__(self, database=None):
        self._database = database

    @property
    def database(self):
        return self._database if self._database is not None else get_database()

    @staticmethod
    def _validate_rows(model: Type[ModelT], rows: List[Dict[str, Any]]) -> List[ModelT]:
        validated = []
        for row in rows:
            try:
                validated.append(model.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping invalid {model.__name__} row: {e}")
        return validated

    @staticmethod
    def profile_from_row(row: Optional[Dict[str, Any]]) -> UserProfile:
        """Parse a profile row, falling back to a blank profile when it is unusable."""
        try:
            return UserProfile.model_validate(row or {})
        except ValidationError as e:
            logger.warning(f"Ignoring invalid profile row: {e}")
            return UserProfile()

    async def _find_all(self, collection, user_id: str) -> List[Dict[str, Any]]:
        cursor = collection.find({"user_id": user_id})
        return await cursor.to_list(length=None)

    # ------------------------------------------------------------------
    # Aggregate load / save
    # ------------------------------------------------------------------

    async def load_app_data(self, user_id: str) -> AppData:
        """Load everything stored for a user. Backend errors propagate.

        Invalid rows are skipped one by one, so a single bad document never
        hides the rest of the user's data.
        """
        database = self.database
        profile_row = await database.profiles.find_one({"user_id": user_id})
        entry_rows = await self._find_all(database.daily_entries, user_id)
        goal_rows = await self._find_all(database.goals, user_id)
        analysis_rows = await self._find_all(database.ai_analyses, user_id)

        entries = self._validate_rows(DailyEntry, entry_rows)
        return AppData(
            profile=self.profile_from_row(profile_row),
            history={entry.date: entry for entry in entries},
            goals=self._validate_rows(Goal, goal_rows),
            analytics=self._validate_rows(AIAnalysis, analysis_rows),
        )

    async def get_app_data(self, user_id: str) -> AppData:
        """Like load_app_data, but the default dataset is returned on failure.

        Only for read paths: never write back a result of this method
        wholesale, it may be the empty default.
        """
        try:
            return await self.load_app_data(user_id)
        except Exception as e:
            logger.error(f"Failed to load data for user {user_id}: {e}", exc_info=True)
            return AppData()

    async def _sync_rows(self, collection, user_id: str, key_field: str, models: List[BaseModel]):
        """Upsert every row and delete the user's rows that are gone, in one batch."""
        documents = [to_document(user_id, model) for model in models]
        keys = [document[key_field] for document in documents]
        operations = [
            UpdateOne(
                {"user_id": user_id, key_field: document[key_field]},
                {"$set": document},
                upsert=True,
            )
            for document in documents
        ]
        operations.append(DeleteMany({"user_id": user_id, key_field: {"$nin": keys}}))
        await collection.bulk_write(operations, ordered=False)

    async def _upsert_profile(self, user_id: str, profile: UserProfile):
        await self.database.profiles.update_one(
            {"user_id": user_id},
            {"$set": to_document(user_id, profile)},
            upsert=True,
        )

    async def save_app_data(self, user_id: str, data: AppData) -> bool:
        """Write the whole aggregate: one call per collection."""
        try:
            database = self.database
            await self._upsert_profile(user_id, data.profile)
            await self._sync_rows(database.daily_entries, user_id, "date", list(data.history.values()))
            await self._sync_rows(database.goals, user_id, "id", data.goals)
            await self._sync_rows(database.ai_analyses, user_id, "id", data.analytics)
            return True
        except Exception as e:
            logger.error(f"Failed to save data for user {user_id}: {e}", exc_info=True)
            return False

    async def purge_stale_analyses(self, user_id: str, data: AppData, today: date) -> AppData:
        """Drop reports not generated today, persisting only when something was removed."""
        kept = filter_todays_analyses(data.analytics, today)
        if len(kept) == len(data.analytics):
            return data

        logger.info(f"Purging {len(data.analytics) - len(kept)} stale analyses for user {user_id}")
        try:
            await self.database.ai_analyses.delete_many({
                "user_id": user_id,
                "date": {"$ne": day_key(today)},
            })
        except Exception as e:
            logger.error(f"Failed to purge stale analyses for user {user_id}: {e}", exc_info=True)
        return data.model_copy(update={"analytics": kept})

    async def reset_user_data(self, user_id: str) -> AppData:
        """Delete all of a user's rows. Returns the default dataset."""
        database = self.database
        for name in USER_COLLECTIONS:
            try:
                await database[name].delete_many({"user_id": user_id})
            except Exception as e:
                logger.error(f"Failed to reset {name} for user {user_id}: {e}", exc_info=True)
        logger.info(f"Reset all data for user {user_id}")
        return AppData()

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    async def update_profile(self, user_id: str, profile: UserProfile) -> AppData:
        try:
            await self._upsert_profile(user_id, profile)
        except Exception as e:
            logger.error(f"Failed to update profile for user {user_id}: {e}", exc_info=True)
        return await self.get_app_data(user_id)

    # ------------------------------------------------------------------
    # Daily entries
    # ------------------------------------------------------------------

    async def get_day_entry(self, user_id: str, date_str: str) -> DailyEntry:
        """The stored entry, or a blank one when the day has no valid log.

        Backend errors propagate: callers edit and save the result, and a
        blank entry saved over a real one would lose the day.
        """
        row = await self.database.daily_entries.find_one({"user_id": user_id, "date": date_str})
        if row:
            try:
                return DailyEntry.model_validate(row)
            except ValidationError as e:
                logger.warning(f"Replacing invalid entry {date_str} for user {user_id}: {e}")
        return blank_entry(date_str)

    async def save_day_entry(self, user_id: str, entry: DailyEntry) -> AppData:
        try:
            await self.database.daily_entries.update_one(
                {"user_id": user_id, "date": entry.date},
                {"$set": to_document(user_id, entry)},
                upsert=True,
            )
        except Exception as e:
            logger.error(f"Failed to save entry {entry.date} for user {user_id}: {e}", exc_info=True)
        return await self.get_app_data(user_id)

    async def delete_day_entry(self, user_id: str, date_str: str) -> AppData:
        try:
            await self.database.daily_entries.delete_one({"user_id": user_id, "date": date_str})
        except Exception as e:
            logger.error(f"Failed to delete entry {date_str} for user {user_id}: {e}", exc_info=True)
        return await self.get_app_data(user_id)

    async def get_repeat_tasks(self, user_id: str, today: date) -> List[Todo]:
        """Yesterday's todos, reset, when yesterday was marked to repeat."""
        yesterday = await self.get_day_entry(user_id, day_key(days_before(today, 1)))
        if not yesterday.repeat_daily:
            return []
        return repeat_copies(yesterday.todos)

    async def set_repeat_daily(self, user_id: str, date_str: str, repeat_daily: bool) -> bool:
        try:
            await self.database.daily_entries.update_one(
                {"user_id": user_id, "date": date_str},
                {"$set": {"repeat_daily": repeat_daily}},
                upsert=True,
            )
            return True
        except Exception as e:
            logger.error(f"Failed to update repeat flag for {date_str}: {e}", exc_info=True)
            return False

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------

    async def save_goals(self, user_id: str, goals: List[Goal]) -> AppData:
        """Upsert the given goals. Goals not listed are left untouched."""
        if goals:
            try:
                await self.database.goals.bulk_write(
                    [
                        UpdateOne(
                            {"user_id": user_id, "id": goal.id},
                            {"$set": to_document(user_id, goal)},
                            upsert=True,
                        )
                        for goal in goals
                    ],
                    ordered=False,
                )
            except Exception as e:
                logger.error(f"Failed to save goals for user {user_id}: {e}", exc_info=True)
        return await self.get_app_data(user_id)

    async def delete_goal(self, user_id: str, goal_id: str) -> AppData:
        try:
            await self.database.goals.delete_one({"user_id": user_id, "id": goal_id})
        except Exception as e:
            logger.error(f"Failed to delete goal {goal_id} for user {user_id}: {e}", exc_info=True)
        return await self.get_app_data(user_id)

    # ------------------------------------------------------------------
    # Analyses
    # ------------------------------------------------------------------

    async def add_analysis(self, user_id: str, analysis: AIAnalysis) -> bool:
        """Insert a report. The report gate only marks the day seen on True."""
        try:
            await self.database.ai_analyses.insert_one(to_document(user_id, analysis))
            logger.info(f"Stored {analysis.type.value} analysis {analysis.id} for user {user_id}")
            return True
        except Exception as e:
            logger.error(f"Failed to store analysis for user {user_id}: {e}", exc_info=True)
            return False

    async def mark_analysis_read(self, user_id: str, analysis_id: str) -> bool:
        try:
            result = await self.database.ai_analyses.update_one(
                {"user_id": user_id, "id": analysis_id},
                {"$set": {"read": True}},
            )
            return result.matched_count > 0
        except Exception as e:
            logger.error(f"Failed to mark analysis {analysis_id} read: {e}", exc_info=True)
            return False

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    async def get_setting(self, user_id: str, key: str) -> Optional[str]:
        try:
            row = await self.database.user_settings.find_one({"user_id": user_id, "setting_key": key})
        except Exception as e:
            logger.error(f"Failed to read setting {key} for user {user_id}: {e}", exc_info=True)
            return None
        return row.get("setting_value") if row else None

    async def set_setting(self, user_id: str, key: str, value: str) -> bool:
        try:
            await self.database.user_settings.update_one(
                {"user_id": user_id, "setting_key": key},
                {"$set": {"user_id": user_id, "setting_key": key, "setting_value": value}},
                upsert=True,
            )
            return True
        except Exception as e:
            logger.error(f"Failed to write setting {key} for user {user_id}: {e}", exc_info=True)
            return False
