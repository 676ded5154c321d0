"""
Achievement Catalog

Static, ordered list of every achievement a user can unlock. Loaded once at
import and never mutated; per-user unlock status lives in GameState.

Catalog order is significant: achievements unlocked by the same completion
are reported in this order.
"""

from habitflow.models.achievement import Achievement, AchievementType

COMPLETIONS = AchievementType.COMPLETIONS
STREAK = AchievementType.STREAK
HABITS = AchievementType.HABITS
COMBO = AchievementType.COMBO
SPECIAL = AchievementType.SPECIAL


def _achievement(
    achievement_id: str,
    name: str,
    description: str,
    icon: str,
    requirement: int,
    achievement_type: AchievementType,
    xp_reward: int,
) -> Achievement:
    return Achievement(
        id=achievement_id,
        name=name,
        description=description,
        icon=icon,
        requirement=requirement,
        type=achievement_type,
        xp_reward=xp_reward,
    )


ACHIEVEMENTS: tuple[Achievement, ...] = (
    # Completions (total habits completed)
    _achievement("first_habit", "First Step", "Complete your first habit", "🌟", 1, COMPLETIONS, 50),
    _achievement("getting_started", "Getting Started", "Complete 10 habits", "🚀", 10, COMPLETIONS, 100),
    _achievement("building_momentum", "Building Momentum", "Complete 25 habits", "📈", 25, COMPLETIONS, 150),
    _achievement("on_fire", "On Fire", "Complete 50 habits", "🔥", 50, COMPLETIONS, 250),
    _achievement("centurion", "Centurion", "Complete 100 habits", "💯", 100, COMPLETIONS, 500),
    _achievement("dedicated", "Dedicated", "Complete 250 habits", "🎖️", 250, COMPLETIONS, 750),
    _achievement("habit_machine", "Habit Machine", "Complete 500 habits", "🤖", 500, COMPLETIONS, 1000),
    _achievement("thousand_club", "Thousand Club", "Complete 1,000 habits", "👑", 1000, COMPLETIONS, 2500),
    _achievement("habit_veteran", "Habit Veteran", "Complete 2,500 habits", "🎗️", 2500, COMPLETIONS, 5000),
    _achievement("five_thousand", "High Five Thousand", "Complete 5,000 habits", "🖐️", 5000, COMPLETIONS, 10000),
    _achievement("ten_thousand", "Ten Thousand Hours", "Complete 10,000 habits", "⏰", 10000, COMPLETIONS, 25000),
    _achievement("habit_master", "Habit Master", "Complete 25,000 habits", "🧙", 25000, COMPLETIONS, 50000),
    _achievement("fifty_thousand", "Golden Milestone", "Complete 50,000 habits", "🏅", 50000, COMPLETIONS, 100000),
    _achievement("hundred_thousand", "Platinum Achievement", "Complete 100,000 habits", "💎", 100000, COMPLETIONS, 250000),
    _achievement("quarter_million", "Diamond Legacy", "Complete 250,000 habits", "💠", 250000, COMPLETIONS, 500000),
    _achievement("half_million", "Legendary Status", "Complete 500,000 habits", "🌠", 500000, COMPLETIONS, 1000000),
    _achievement("million", "The Millionaire", "Complete 1,000,000 habits", "👸", 1000000, COMPLETIONS, 2500000),

    # Streaks (consecutive days on one habit)
    _achievement("streak_3", "Hat Trick", "Reach a 3-day streak", "🎩", 3, STREAK, 75),
    _achievement("streak_7", "Week Warrior", "Reach a 7-day streak", "⚔️", 7, STREAK, 150),
    _achievement("streak_14", "Fortnight Fighter", "Reach a 14-day streak", "🛡️", 14, STREAK, 300),
    _achievement("streak_21", "Habit Formed", "Reach a 21-day streak (habits form!)", "🧠", 21, STREAK, 500),
    _achievement("streak_30", "Monthly Master", "Reach a 30-day streak", "🏆", 30, STREAK, 750),
    _achievement("streak_45", "Forty-Five Days", "Reach a 45-day streak", "🌙", 45, STREAK, 1000),
    _achievement("streak_60", "Habit Hero", "Reach a 60-day streak", "🦸", 60, STREAK, 1500),
    _achievement("streak_90", "Quarter Year", "Reach a 90-day streak", "📅", 90, STREAK, 2000),
    _achievement("streak_100", "Century Club", "Reach a 100-day streak", "💎", 100, STREAK, 3000),
    _achievement("streak_150", "Unstoppable Force", "Reach a 150-day streak", "🌊", 150, STREAK, 4500),
    _achievement("streak_180", "Half Year Hero", "Reach a 180-day streak", "☀️", 180, STREAK, 6000),
    _achievement("streak_250", "Persistence Pro", "Reach a 250-day streak", "🎯", 250, STREAK, 8000),
    _achievement("streak_365", "Year of Excellence", "Reach a 365-day streak", "🌈", 365, STREAK, 15000),
    _achievement("streak_500", "Beyond Limits", "Reach a 500-day streak", "🚀", 500, STREAK, 25000),
    _achievement("streak_730", "Two Year Titan", "Reach a 730-day streak (2 years!)", "🏛️", 730, STREAK, 50000),
    _achievement("streak_1000", "Thousand Days", "Reach a 1,000-day streak", "👑", 1000, STREAK, 75000),
    _achievement("streak_1095", "Three Year Legend", "Reach a 1,095-day streak (3 years!)", "🌟", 1095, STREAK, 100000),
    _achievement("streak_1825", "Five Year Phenomenon", "Reach a 1,825-day streak (5 years!)", "🔮", 1825, STREAK, 200000),
    _achievement("streak_2555", "Seven Year Sage", "Reach a 2,555-day streak (7 years!)", "🧙‍♂️", 2555, STREAK, 350000),
    _achievement("streak_3650", "Decade of Dedication", "Reach a 3,650-day streak (10 years!)", "🏆", 3650, STREAK, 500000),
    _achievement("streak_5475", "Fifteen Year Phoenix", "Reach a 5,475-day streak (15 years!)", "🦅", 5475, STREAK, 750000),
    _achievement("streak_7300", "Twenty Year Immortal", "Reach a 7,300-day streak (20 years!)", "⚡", 7300, STREAK, 1000000),
    _achievement("streak_9125", "Quarter Century God", "Reach a 9,125-day streak (25 years!)", "🌌", 9125, STREAK, 2000000),
    _achievement("streak_10950", "Thirty Year Transcendent", "Reach a 10,950-day streak (30 years!)", "🌀", 10950, STREAK, 3000000),
    _achievement("streak_12775", "Thirty-Five Year Eternal", "Reach a 12,775-day streak (35 years!)", "💫", 12775, STREAK, 4000000),
    _achievement("streak_14600", "Forty Year Oracle", "Reach a 14,600-day streak (40 years!)", "🔱", 14600, STREAK, 5000000),
    _achievement("streak_16425", "Forty-Five Year Ancient", "Reach a 16,425-day streak (45 years!)", "📜", 16425, STREAK, 7500000),
    _achievement("streak_18250", "Fifty Year Cosmic Being", "Reach a 18,250-day streak (50 years!)", "🌟", 18250, STREAK, 10000000),

    # Combos (completions in a row)
    _achievement("combo_3", "Triple Threat", "Complete 3 habits in a row", "3️⃣", 3, COMBO, 50),
    _achievement("combo_5", "Combo King", "Complete 5 habits in a row", "👊", 5, COMBO, 100),
    _achievement("combo_10", "Unstoppable", "Complete 10 habits in a row", "💪", 10, COMBO, 250),
    _achievement("combo_15", "Momentum Master", "Complete 15 habits in a row", "🌀", 15, COMBO, 400),
    _achievement("combo_20", "Twenty Streak", "Complete 20 habits in a row", "🎯", 20, COMBO, 600),
    _achievement("combo_25", "On a Roll", "Complete 25 habits in a row", "🎳", 25, COMBO, 800),
    _achievement("combo_30", "Combo God", "Complete 30 habits in a row", "⚡", 30, COMBO, 1000),
    _achievement("combo_50", "Half Century Combo", "Complete 50 habits in a row", "🔥", 50, COMBO, 2000),
    _achievement("combo_75", "Combo Legend", "Complete 75 habits in a row", "🌟", 75, COMBO, 3500),
    _achievement("combo_100", "Century Combo", "Complete 100 habits in a row", "💯", 100, COMBO, 5000),

    # Levels
    _achievement("level_5", "Level 5", "Reach level 5", "⭐", 5, SPECIAL, 100),
    _achievement("level_10", "Level 10", "Reach level 10", "🌟", 10, SPECIAL, 250),
    _achievement("level_15", "Level 15", "Reach level 15", "✨", 15, SPECIAL, 400),
    _achievement("level_20", "Level 20", "Reach level 20", "🌠", 20, SPECIAL, 600),
    _achievement("level_25", "Level 25", "Reach level 25", "💫", 25, SPECIAL, 1000),
    _achievement("level_30", "Level 30", "Reach level 30", "🔮", 30, SPECIAL, 1500),
    _achievement("level_40", "Level 40", "Reach level 40", "🏅", 40, SPECIAL, 2500),
    _achievement("level_50", "Level 50", "Reach level 50", "🥇", 50, SPECIAL, 5000),
    _achievement("level_60", "Level 60", "Reach level 60", "🎖️", 60, SPECIAL, 7500),
    _achievement("level_75", "Level 75", "Reach level 75", "🏆", 75, SPECIAL, 12500),
    _achievement("level_100", "Level 100", "Reach level 100", "👑", 100, SPECIAL, 25000),
    _achievement("level_150", "Level 150", "Reach level 150", "💎", 150, SPECIAL, 50000),
    _achievement("level_200", "Level 200", "Reach level 200", "🌈", 200, SPECIAL, 100000),
    _achievement("level_300", "Level 300", "Reach level 300", "🔱", 300, SPECIAL, 200000),
    _achievement("level_500", "Level 500", "Reach level 500", "⚜️", 500, SPECIAL, 500000),
    _achievement("level_1000", "Level 1000", "Reach level 1000", "🌌", 1000, SPECIAL, 1000000),

    # Special
    _achievement("night_owl", "Night Owl", "Complete a habit after 10 PM", "🦉", 1, SPECIAL, 100),
    _achievement("early_bird", "Early Bird", "Complete a habit before 6 AM", "🐦", 1, SPECIAL, 100),
    _achievement("perfect_day", "Perfect Day", "Complete all habits in one day", "✨", 1, SPECIAL, 200),
    _achievement("perfect_week", "Perfect Week", "Complete all habits for 7 days straight", "🌟", 7, SPECIAL, 1000),
    _achievement("weekend_warrior", "Weekend Warrior", "Complete habits on a weekend", "🎉", 1, SPECIAL, 50),

    # Habit count (number of habits tracked)
    _achievement("habits_3", "Triple Tracker", "Track 3 different habits", "3️⃣", 3, HABITS, 50),
    _achievement("habits_5", "High Five", "Track 5 different habits", "🖐️", 5, HABITS, 100),
    _achievement("habits_7", "Lucky Seven", "Track 7 different habits", "🍀", 7, HABITS, 150),
    _achievement("habits_10", "Perfect Ten", "Track 10 different habits", "🔟", 10, HABITS, 250),
    _achievement("habits_15", "Habit Collector", "Track 15 different habits", "📚", 15, HABITS, 400),
    _achievement("habits_20", "Habit Hoarder", "Track 20 different habits", "🗃️", 20, HABITS, 600),
    _achievement("habits_25", "Life Optimizer", "Track 25 different habits", "🎯", 25, HABITS, 1000),

    # Anniversaries (account age in days)
    _achievement("anniversary_1month", "One Month In", "Use HabitFlow for 1 month", "📆", 30, SPECIAL, 500),
    _achievement("anniversary_3month", "Quarter Journey", "Use HabitFlow for 3 months", "🗓️", 90, SPECIAL, 1500),
    _achievement("anniversary_6month", "Half Year Mark", "Use HabitFlow for 6 months", "📅", 180, SPECIAL, 3000),
    _achievement("anniversary_1year", "One Year Anniversary", "Use HabitFlow for 1 year", "🎂", 365, SPECIAL, 10000),
    _achievement("anniversary_2year", "Two Year Veteran", "Use HabitFlow for 2 years", "🎊", 730, SPECIAL, 25000),
    _achievement("anniversary_3year", "Three Year Champion", "Use HabitFlow for 3 years", "🏅", 1095, SPECIAL, 50000),
    _achievement("anniversary_5year", "Five Year Legend", "Use HabitFlow for 5 years", "🌟", 1825, SPECIAL, 100000),
    _achievement("anniversary_7year", "Seven Year Sage", "Use HabitFlow for 7 years", "🔮", 2555, SPECIAL, 175000),
    _achievement("anniversary_10year", "Decade of Growth", "Use HabitFlow for 10 years", "💎", 3650, SPECIAL, 500000),
    _achievement("anniversary_15year", "Fifteen Year Faithful", "Use HabitFlow for 15 years", "👑", 5475, SPECIAL, 1000000),
    _achievement("anniversary_20year", "Twenty Year Titan", "Use HabitFlow for 20 years", "🏛️", 7300, SPECIAL, 2000000),
    _achievement("anniversary_25year", "Quarter Century Master", "Use HabitFlow for 25 years", "⚡", 9125, SPECIAL, 3500000),
    _achievement("anniversary_30year", "Thirty Year Oracle", "Use HabitFlow for 30 years", "🌌", 10950, SPECIAL, 5000000),
    _achievement("anniversary_40year", "Forty Year Immortal", "Use HabitFlow for 40 years", "🔱", 14600, SPECIAL, 7500000),
    _achievement("anniversary_50year", "Fifty Year Eternal", "Use HabitFlow for 50 years", "✨", 18250, SPECIAL, 10000000),

    # XP milestones
    _achievement("xp_1000", "First Thousand", "Earn 1,000 XP", "💰", 1000, SPECIAL, 100),
    _achievement("xp_5000", "Five K Club", "Earn 5,000 XP", "💵", 5000, SPECIAL, 500),
    _achievement("xp_10000", "Ten Thousand", "Earn 10,000 XP", "💴", 10000, SPECIAL, 1000),
    _achievement("xp_25000", "XP Enthusiast", "Earn 25,000 XP", "💶", 25000, SPECIAL, 2500),
    _achievement("xp_50000", "XP Addict", "Earn 50,000 XP", "💷", 50000, SPECIAL, 5000),
    _achievement("xp_100000", "XP Millionaire", "Earn 100,000 XP", "💎", 100000, SPECIAL, 10000),
    _achievement("xp_250000", "XP Mogul", "Earn 250,000 XP", "🏦", 250000, SPECIAL, 25000),
    _achievement("xp_500000", "XP Tycoon", "Earn 500,000 XP", "🏰", 500000, SPECIAL, 50000),
    _achievement("xp_1000000", "XP Billionaire", "Earn 1,000,000 XP", "👸", 1000000, SPECIAL, 100000),
    _achievement("xp_5000000", "XP Emperor", "Earn 5,000,000 XP", "👑", 5000000, SPECIAL, 500000),
    _achievement("xp_10000000", "XP God", "Earn 10,000,000 XP", "🌟", 10000000, SPECIAL, 1000000),
)

ACHIEVEMENTS_BY_ID: dict[str, Achievement] = {a.id: a for a in ACHIEVEMENTS}


def get_achievement(achievement_id: str) -> Achievement:
    """
    Look up a catalog entry

    Raises:
        KeyError: unknown achievement id
    """
    return ACHIEVEMENTS_BY_ID[achievement_id]
