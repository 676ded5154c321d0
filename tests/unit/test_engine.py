"""Unit tests for GamificationEngine (habitflow/gamification/engine.py)"""
import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

from prometheus_client import REGISTRY

from habitflow.exceptions import StoreConnectionError
from habitflow.gamification.achievement_catalog import ACHIEVEMENTS
from habitflow.gamification.engine import GamificationEngine
from habitflow.gamification.quotes import DAILY_QUOTES
from habitflow.models.game_state import PersistStatus


# ============================================================================
# Loading Tests
# ============================================================================

@pytest.mark.asyncio
async def test_load_new_user_creates_default_record(engine, record_store, test_user_id):
    """A user without a record starts with defaults and gets one written"""
    state = await engine.load()

    assert state.xp == 0
    assert state.streak_shields == 3
    assert state.sound_enabled is True

    record = await record_store.get(test_user_id)
    assert record["xp"] == 0
    assert record["streak_shields"] == 3
    assert record["unlocked_achievements"] == []


@pytest.mark.asyncio
async def test_load_existing_record(engine, record_store, test_user_id, clock):
    await record_store.upsert(test_user_id, {
        "xp": 500,
        "unlocked_achievements": ["first_habit"],
        "achievement_unlock_times": {"first_habit": "2024-01-01T09:30:00"},
        "current_combo": 2,
        "max_combo": 4,
        "last_completion_date": "2024-01-14",
        "streak_shields": 1,
        "sound_enabled": False,
    })

    state = await engine.load()

    assert state.xp == 500
    assert state.unlocked == {"first_habit": datetime(2024, 1, 1, 9, 30)}
    assert state.max_combo == 4
    assert state.streak_shields == 1
    assert state.sound_enabled is False


@pytest.mark.asyncio
async def test_load_stamps_missing_unlock_times(engine, record_store, test_user_id, clock):
    """Older records without unlock times get the load time"""
    await record_store.upsert(test_user_id, {"xp": 50, "unlocked_achievements": ["first_habit"]})

    await engine.load()

    unlocked = engine.get_unlocked_achievements()
    assert [a.id for a in unlocked] == ["first_habit"]
    assert unlocked[0].unlocked_at == clock.now


@pytest.mark.asyncio
async def test_load_malformed_record_resets_to_defaults(engine, record_store, test_user_id):
    await record_store.upsert(test_user_id, {"xp": "lots", "unlocked_achievements": ["first_habit"]})

    state = await engine.load()

    assert state.xp == 0
    assert state.unlocked == {}
    assert (await record_store.get(test_user_id))["xp"] == 0


@pytest.mark.asyncio
async def test_load_failure_keeps_local_state(test_user_id, clock):
    store = MagicMock()
    store.get = AsyncMock(side_effect=StoreConnectionError())
    store.upsert = AsyncMock()
    engine = GamificationEngine(test_user_id, store, clock=clock)
    engine.state.xp = 120

    state = await engine.load()

    assert state.xp == 120
    store.upsert.assert_not_called()


# ============================================================================
# Record Completion Tests
# ============================================================================

@pytest.mark.asyncio
async def test_first_completion_of_the_day(engine, record_store, test_user_id):
    """25 base + 2 combo + 50 first_habit + 200 perfect_day"""
    await engine.load()

    result = await engine.record_completion(1, 1, 1)

    assert result.xp_gained == 277
    assert result.achievement_ids == ["first_habit", "perfect_day"]
    assert result.combo == 1
    assert result.leveled_up is True
    assert result.new_level == 3
    assert result.status == PersistStatus.APPLIED
    assert result.persisted is True

    assert engine.state.xp == 277
    assert engine.state.last_completion_date == "2024-01-15"

    record = await record_store.get(test_user_id)
    assert record["xp"] == 277
    assert record["unlocked_achievements"] == ["first_habit", "perfect_day"]
    assert record["achievement_unlock_times"]["first_habit"] == "2024-01-15T12:00:00"


@pytest.mark.asyncio
async def test_unlocked_achievements_stamped_with_now(engine, clock):
    await engine.load()

    result = await engine.record_completion(1, 1, 1)

    assert all(a.unlocked_at == clock.now for a in result.achievements_unlocked)


@pytest.mark.asyncio
async def test_combo_builds_within_a_day(engine):
    await engine.load()
    await engine.record_completion(1, 3, 1)

    result = await engine.record_completion(2, 3, 1)

    assert result.combo == 2
    assert result.xp_gained == 25 + 5
    assert engine.state.max_combo == 2


@pytest.mark.asyncio
async def test_combo_resets_on_new_day(engine, clock):
    await engine.load()
    await engine.record_completion(1, 3, 1)
    await engine.record_completion(2, 3, 1)

    clock.now = datetime(2024, 1, 16, 9, 0)
    result = await engine.record_completion(1, 3, 2)

    assert result.combo == 1
    assert engine.state.current_combo == 1
    assert engine.state.max_combo == 2
    assert engine.state.last_completion_date == "2024-01-16"


@pytest.mark.asyncio
async def test_level_achievements_use_level_before_completion(engine, record_store, test_user_id):
    """Crossing into level 5 only unlocks level_5 on the next completion"""
    await record_store.upsert(test_user_id, {
        "xp": 800,
        "unlocked_achievements": ["first_habit", "perfect_day"],
        "last_completion_date": "2024-01-15",
        "current_combo": 1,
    })
    await engine.load()

    first = await engine.record_completion(1, 2, 1)
    second = await engine.record_completion(2, 2, 1)

    assert first.new_level == 5
    assert first.leveled_up is True
    assert "level_5" not in first.achievement_ids
    assert "level_5" in second.achievement_ids


@pytest.mark.asyncio
async def test_record_completion_counts_metrics(engine):
    await engine.load()
    before = REGISTRY.get_sample_value("habitflow_completions_recorded_total") or 0
    unlocks_before = REGISTRY.get_sample_value(
        "habitflow_achievements_unlocked_total", {"achievement_id": "perfect_day"}
    ) or 0

    await engine.record_completion(1, 1, 1)

    assert REGISTRY.get_sample_value("habitflow_completions_recorded_total") == before + 1
    assert REGISTRY.get_sample_value(
        "habitflow_achievements_unlocked_total", {"achievement_id": "perfect_day"}
    ) == unlocks_before + 1


@pytest.mark.asyncio
async def test_persist_failure_keeps_change_in_memory(failing_store, test_user_id, clock):
    engine = GamificationEngine(test_user_id, failing_store, clock=clock)
    await engine.load()

    result = await engine.record_completion(1, 1, 1)

    assert result.xp_gained == 277
    assert result.status == PersistStatus.APPLIED_BUT_PERSIST_FAILED
    assert result.persisted is False
    assert engine.state.xp == 277


# ============================================================================
# Revert Tests
# ============================================================================

@pytest.mark.asyncio
async def test_revert_undoes_completion(engine):
    await engine.load()
    result = await engine.record_completion(1, 1, 1)

    revert = await engine.revert_completion(result.xp_gained, result.achievement_ids)

    assert revert.status == PersistStatus.APPLIED
    assert engine.state.xp == 0
    assert engine.state.current_combo == 0
    assert engine.state.unlocked == {}
    # Left untouched
    assert engine.state.max_combo == 1
    assert engine.state.last_completion_date == "2024-01-15"
    assert engine.state.streak_shields == 3


@pytest.mark.asyncio
async def test_revert_floors_at_zero(engine):
    await engine.load()

    await engine.revert_completion(1000, ["first_habit"])

    assert engine.state.xp == 0
    assert engine.state.current_combo == 0


@pytest.mark.asyncio
async def test_revert_only_revokes_listed_achievements(engine):
    await engine.load()
    await engine.record_completion(1, 1, 1)

    await engine.revert_completion(50, ["first_habit", "streak_3"])

    assert list(engine.state.unlocked) == ["perfect_day"]
    assert engine.state.xp == 227


@pytest.mark.asyncio
async def test_max_combo_never_decreases(engine):
    await engine.load()
    seen = []

    for step in ("record", "record", "revert", "record", "revert", "revert", "record"):
        if step == "record":
            await engine.record_completion(1, 5, 1)
        else:
            await engine.revert_completion(0, [])
        seen.append(engine.state.max_combo)
        assert engine.state.max_combo >= engine.state.current_combo

    assert seen == sorted(seen)
    assert seen[-1] == 2


@pytest.mark.asyncio
async def test_first_habit_only_on_first_completion(engine):
    await engine.load()

    first = await engine.record_completion(1, 5, 1)
    second = await engine.record_completion(2, 5, 1)

    assert "first_habit" in first.achievement_ids
    assert "first_habit" not in second.achievement_ids
    assert "first_habit" in engine.state.unlocked


# ============================================================================
# Streak Shield & Sound Tests
# ============================================================================

@pytest.mark.asyncio
async def test_use_streak_shield(engine, record_store, test_user_id):
    await engine.load()

    result = await engine.use_streak_shield()

    assert result
    assert result.consumed is True
    assert result.shields_remaining == 2
    assert (await record_store.get(test_user_id))["streak_shields"] == 2


@pytest.mark.asyncio
async def test_use_streak_shield_when_none_left(engine):
    await engine.load()
    for _ in range(3):
        assert await engine.use_streak_shield()

    result = await engine.use_streak_shield()

    assert not result
    assert result.shields_remaining == 0
    assert engine.state.streak_shields == 0


@pytest.mark.asyncio
async def test_toggle_sound(engine, record_store, test_user_id):
    await engine.load()

    result = await engine.toggle_sound()

    assert result.persisted
    assert engine.state.sound_enabled is False
    assert (await record_store.get(test_user_id))["sound_enabled"] is False

    await engine.toggle_sound()
    assert engine.state.sound_enabled is True


# ============================================================================
# Remote Change Tests
# ============================================================================

@pytest.mark.asyncio
async def test_remote_change_reloads_other_session(record_store, test_user_id, clock):
    """Two sessions of the same user converge on the last write"""
    phone = GamificationEngine(test_user_id, record_store, clock=clock)
    laptop = GamificationEngine(test_user_id, record_store, clock=clock)
    await phone.start()
    await laptop.start()

    await phone.record_completion(1, 1, 1)

    assert laptop.state.xp == 277
    assert [a.id for a in laptop.get_unlocked_achievements()] == ["first_habit", "perfect_day"]

    await phone.stop()
    await laptop.stop()
    assert record_store.subscriber_count(test_user_id) == 0


@pytest.mark.asyncio
async def test_stopped_engine_ignores_remote_changes(record_store, test_user_id, clock):
    phone = GamificationEngine(test_user_id, record_store, clock=clock)
    laptop = GamificationEngine(test_user_id, record_store, clock=clock)
    await phone.start()
    await laptop.start()
    await laptop.stop()

    await phone.record_completion(1, 1, 1)

    assert laptop.state.xp == 0


@pytest.mark.asyncio
async def test_other_users_changes_ignored(record_store, clock):
    alice = GamificationEngine("alice", record_store, clock=clock)
    bob = GamificationEngine("bob", record_store, clock=clock)
    await alice.start()
    await bob.start()

    await alice.record_completion(1, 1, 1)

    assert alice.state.xp == 277
    assert bob.state.xp == 0


# ============================================================================
# Derived Value Tests
# ============================================================================

@pytest.mark.asyncio
async def test_derived_values(engine):
    await engine.load()
    await engine.record_completion(1, 1, 1)

    assert engine.get_level() == 3
    assert engine.get_level_title() == "Beginner"

    progress = engine.get_xp_progress()
    assert (progress.current, progress.required, progress.percentage) == (27, 225, 12)

    assert len(engine.get_locked_achievements()) == len(ACHIEVEMENTS) - 2


def test_daily_quote_follows_clock(engine):
    """2024-01-15 is day 15 of the year"""
    assert engine.get_daily_quote() == DAILY_QUOTES[15]
