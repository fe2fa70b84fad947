"""Tests for friend connections and search."""

from datetime import date

from models.schemas import GoalType, UserProfile
from services import goal_service
from services.friend_service import FriendService
from tests.conftest import make_entry

TODAY = date(2024, 6, 3)


async def add_user(storage, user_id, name, streak_days=0):
    await storage.update_profile(user_id, UserProfile(name=name, email=f"{user_id}@example.com"))
    for offset in range(1, streak_days + 1):
        await storage.save_day_entry(user_id, make_entry(f"2024-06-{3 - offset:02d}", 1, 1))


async def test_connect_is_bidirectional(storage, fake_db):
    friends = FriendService(storage)
    assert await friends.connect("u1", "u2")
    assert await friends.friend_ids("u1") == {"u2"}
    assert await friends.friend_ids("u2") == {"u1"}

    # connecting twice keeps a single edge per direction
    await friends.connect("u2", "u1")
    assert len(fake_db.friendships.documents) == 2


async def test_cannot_befriend_self(storage):
    assert not await FriendService(storage).connect("u1", "u1")


async def test_disconnect_removes_both_edges(storage, fake_db):
    friends = FriendService(storage)
    await friends.connect("u1", "u2")
    await friends.connect("u1", "u3")

    assert await friends.disconnect("u2", "u1")
    assert await friends.friend_ids("u1") == {"u3"}
    assert await friends.friend_ids("u2") == set()


async def test_list_friends_sorted_by_streak(storage):
    await add_user(storage, "u1", "Me")
    await add_user(storage, "u2", "Bea", streak_days=1)
    await add_user(storage, "u3", "Cal", streak_days=2)
    await storage.save_day_entry("u3", make_entry("2024-06-03", 0, 2))
    await storage.save_goals("u3", [
        goal_service.new_goal("Run", GoalType.SHORT_TERM, TODAY),
        goal_service.new_goal("Marathon", GoalType.LONG_TERM, TODAY),
    ])

    friends = FriendService(storage)
    await friends.connect("u1", "u2")
    await friends.connect("u1", "u3")
    listed = await friends.list_friends("u1", TODAY)

    assert [friend.name for friend in listed] == ["Cal", "Bea"]
    cal = listed[0]
    assert cal.streak == 2
    assert cal.today_task_count == 2
    assert cal.active_short_term_goals == 1
    assert cal.active_long_term_goals == 1
    assert cal.email == "u3@example.com"


async def test_search_excludes_self_and_friends(storage):
    await add_user(storage, "u1", "Alex")
    await add_user(storage, "u2", "Alexandra")
    await add_user(storage, "u3", "alex.b")
    await add_user(storage, "u4", "Sam")

    friends = FriendService(storage)
    await friends.connect("u1", "u3")

    results = await friends.search_users("u1", "ALEX")
    assert [result.id for result in results] == ["u2"]
    assert await friends.search_users("u1", "   ") == []


async def test_search_treats_query_literally(storage):
    await add_user(storage, "u2", "a.b")
    await add_user(storage, "u3", "axb")
    results = await FriendService(storage).search_users("u1", "a.b")
    assert [result.id for result in results] == ["u2"]


async def test_search_survives_malformed_profiles(storage, fake_db):
    await add_user(storage, "u2", "Alexa")
    await fake_db.profiles.insert_one({"user_id": "u3", "name": "Alex", "age": 41})
    await fake_db.profiles.insert_one({"user_id": "u4", "name": "Alexis", "email": ["x"]})

    results = await FriendService(storage).search_users("u1", "alex")

    assert [result.id for result in results] == ["u2", "u3", "u4"]
    assert results[1].name == "Alex"
