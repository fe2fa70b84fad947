"""Tests for the Mongo-backed storage service."""

from datetime import date

import pytest

from models.schemas import AIAnalysis, AnalysisType, AppData, Goal, UserProfile
from services.storage_service import StorageService
from tests.conftest import BrokenDatabase, make_entry

TODAY = date(2024, 6, 3)


def sample_data() -> AppData:
    return AppData(
        profile=UserProfile(name="Ada", age="30", height="170", weight="60"),
        history={
            "2024-06-02": make_entry("2024-06-02", 1, 2),
            "2024-06-03": make_entry("2024-06-03", 0, 1, journal="hello"),
        },
        goals=[Goal(title="Read more"), Goal(title="Sleep early")],
        analytics=[AIAnalysis(date="2024-06-03", type=AnalysisType.WEEKLY, content="# Audit")],
    )


async def test_save_and_load_round_trip(storage):
    data = sample_data()
    assert await storage.save_app_data("u1", data)

    loaded = await storage.get_app_data("u1")
    assert loaded.profile.name == "Ada"
    assert set(loaded.history) == {"2024-06-02", "2024-06-03"}
    assert loaded.history["2024-06-03"].journal == "hello"
    assert {goal.title for goal in loaded.goals} == {"Read more", "Sleep early"}
    assert loaded.analytics[0].content == "# Audit"


async def test_load_is_scoped_to_user(storage):
    await storage.save_app_data("u1", sample_data())
    other = await storage.get_app_data("u2")
    assert other == AppData()


async def test_load_falls_back_to_default_on_failure():
    broken = StorageService(BrokenDatabase())
    assert await broken.get_app_data("u1") == AppData()
    assert not await broken.save_app_data("u1", sample_data())


async def test_unconnected_storage_returns_default():
    assert await StorageService().get_app_data("u1") == AppData()


async def test_invalid_rows_are_skipped(storage, fake_db):
    await fake_db.goals.insert_one({"user_id": "u1", "id": "bad", "progress": 500})
    await fake_db.goals.insert_one({"user_id": "u1", "id": "ok", "title": "Fine", "deadline": None})

    loaded = await storage.get_app_data("u1")
    assert [goal.id for goal in loaded.goals] == ["ok"]
    assert loaded.goals[0].deadline == ""


async def test_save_removes_deleted_rows(storage, fake_db):
    data = sample_data()
    await storage.save_app_data("u1", data)

    data.goals = data.goals[:1]
    del data.history["2024-06-02"]
    await storage.save_app_data("u1", data)

    loaded = await storage.get_app_data("u1")
    assert [goal.title for goal in loaded.goals] == ["Read more"]
    assert list(loaded.history) == ["2024-06-03"]
    assert len(fake_db.goals.documents) == 1


async def test_purge_stale_analyses(storage, fake_db):
    await storage.add_analysis("u1", AIAnalysis(date="2024-06-01", type=AnalysisType.WEEKLY))
    await storage.add_analysis("u1", AIAnalysis(date="2024-06-03", type=AnalysisType.MONTHLY))
    await storage.add_analysis("u2", AIAnalysis(date="2024-06-01", type=AnalysisType.WEEKLY))

    data = await storage.get_app_data("u1")
    purged = await storage.purge_stale_analyses("u1", data, TODAY)

    assert [analysis.date for analysis in purged.analytics] == ["2024-06-03"]
    remaining = [(doc["user_id"], doc["date"]) for doc in fake_db.ai_analyses.documents]
    assert sorted(remaining) == [("u1", "2024-06-03"), ("u2", "2024-06-01")]


async def test_purge_without_stale_rows_writes_nothing(storage, fake_db):
    await storage.add_analysis("u1", AIAnalysis(date="2024-06-03", type=AnalysisType.WEEKLY))
    writes = fake_db.ai_analyses.write_count

    data = await storage.get_app_data("u1")
    assert await storage.purge_stale_analyses("u1", data, TODAY) is data
    assert fake_db.ai_analyses.write_count == writes


async def test_reset_keeps_friendships(storage, fake_db):
    await storage.save_app_data("u1", sample_data())
    await storage.set_setting("u1", "theme", "dark")
    await fake_db.friendships.insert_one({"user_id": "u1", "friend_id": "u2"})

    assert await storage.reset_user_data("u1") == AppData()
    assert await storage.get_app_data("u1") == AppData()
    assert await storage.get_setting("u1", "theme") is None
    assert len(fake_db.friendships.documents) == 1


async def test_day_entry_crud(storage):
    blank = await storage.get_day_entry("u1", "2024-06-03")
    assert blank.date == "2024-06-03"
    assert blank.todos == []

    data = await storage.save_day_entry("u1", make_entry("2024-06-03", 1, 1))
    assert data.history["2024-06-03"].is_complete

    data = await storage.delete_day_entry("u1", "2024-06-03")
    assert "2024-06-03" not in data.history


async def test_repeat_tasks_come_from_yesterday(storage):
    yesterday = make_entry("2024-06-02", 1, 2)
    await storage.save_day_entry("u1", yesterday)
    assert await storage.get_repeat_tasks("u1", TODAY) == []

    assert await storage.set_repeat_daily("u1", "2024-06-02", True)
    tasks = await storage.get_repeat_tasks("u1", TODAY)
    assert [task.text for task in tasks] == [todo.text for todo in yesterday.todos]
    assert not any(task.completed for task in tasks)


async def test_mark_analysis_read(storage):
    analysis = AIAnalysis(date="2024-06-03", type=AnalysisType.WEEKLY)
    await storage.add_analysis("u1", analysis)

    assert await storage.mark_analysis_read("u1", analysis.id)
    assert not await storage.mark_analysis_read("u1", "missing")
    assert (await storage.get_app_data("u1")).analytics[0].read


async def test_settings_round_trip(storage):
    assert await storage.get_setting("u1", "seen_popup_2024-06-02") is None
    assert await storage.set_setting("u1", "seen_popup_2024-06-02", "true")
    assert await storage.get_setting("u1", "seen_popup_2024-06-02") == "true"
    assert await storage.get_setting("u2", "seen_popup_2024-06-02") is None


async def test_numeric_profile_fields_are_read_as_text(storage, fake_db):
    await storage.save_app_data("u1", sample_data())
    fake_db.profiles.documents[0].update({"age": 30, "height": 170.5, "weight": None})

    loaded = await storage.get_app_data("u1")
    assert loaded.profile.age == "30"
    assert loaded.profile.height == "170.5"
    assert loaded.profile.weight == ""
    assert len(loaded.goals) == 2
    assert len(loaded.history) == 2


async def test_unusable_profile_does_not_hide_other_data(storage, fake_db):
    await storage.save_app_data("u1", sample_data())
    fake_db.profiles.documents[0]["name"] = ["not", "text"]

    loaded = await storage.get_app_data("u1")
    assert loaded.profile == UserProfile()
    assert {goal.title for goal in loaded.goals} == {"Read more", "Sleep early"}
    assert set(loaded.history) == {"2024-06-02", "2024-06-03"}


async def test_save_goals_keeps_unlisted_goals(storage, fake_db):
    await storage.save_app_data("u1", sample_data())

    data = await storage.save_goals("u1", [Goal(title="New")])
    assert {goal.title for goal in data.goals} == {"Read more", "Sleep early", "New"}

    renamed = data.goals[0].model_copy(update={"title": "Read daily"})
    data = await storage.save_goals("u1", [renamed])
    assert len(fake_db.goals.documents) == 3
    assert renamed.id in {goal.id for goal in data.goals}
    assert "Read daily" in {goal.title for goal in data.goals}


async def test_delete_goal_removes_only_that_goal(storage):
    await storage.save_app_data("u1", sample_data())
    await storage.save_app_data("u2", AppData(goals=[Goal(title="Theirs")]))
    goals = (await storage.get_app_data("u1")).goals

    data = await storage.delete_goal("u1", goals[0].id)
    assert [goal.id for goal in data.goals] == [goals[1].id]
    assert len((await storage.get_app_data("u2")).goals) == 1


async def test_strict_reads_raise_on_backend_failure():
    broken = StorageService(BrokenDatabase())
    with pytest.raises(ConnectionError):
        await broken.load_app_data("u1")
    with pytest.raises(ConnectionError):
        await broken.get_day_entry("u1", "2024-06-03")


async def test_invalid_stored_entry_reads_as_blank(storage, fake_db):
    await fake_db.daily_entries.insert_one({"user_id": "u1", "date": "2024-06-03", "mood_score": 42})
    entry = await storage.get_day_entry("u1", "2024-06-03")
    assert entry.todos == []
    assert entry.mood_score == 0
