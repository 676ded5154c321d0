"""Daily motivational quotes"""
from datetime import date
from typing import NamedTuple, Optional


class Quote(NamedTuple):
    text: str
    author: str


DAILY_QUOTES: tuple[Quote, ...] = (
    Quote("The secret of getting ahead is getting started.", "Mark Twain"),
    Quote("Success is the sum of small efforts repeated day in and day out.", "Robert Collier"),
    Quote("We are what we repeatedly do. Excellence is not an act, but a habit.", "Aristotle"),
    Quote("The only way to do great work is to love what you do.", "Steve Jobs"),
    Quote("Believe you can and you're halfway there.", "Theodore Roosevelt"),
    Quote("It does not matter how slowly you go as long as you do not stop.", "Confucius"),
    Quote("The future depends on what you do today.", "Mahatma Gandhi"),
    Quote("Don't watch the clock; do what it does. Keep going.", "Sam Levenson"),
    Quote("Start where you are. Use what you have. Do what you can.", "Arthur Ashe"),
    Quote("Small daily improvements over time lead to stunning results.", "Robin Sharma"),
    Quote("Motivation is what gets you started. Habit is what keeps you going.", "Jim Ryun"),
    Quote("Your habits will determine your future.", "Jack Canfield"),
    Quote("Champions keep playing until they get it right.", "Billie Jean King"),
    Quote("The harder you work, the luckier you get.", "Gary Player"),
    Quote("Success is walking from failure to failure with no loss of enthusiasm.", "Winston Churchill"),
    Quote("Be stronger than your strongest excuse.", "Unknown"),
    Quote("Every expert was once a beginner.", "Helen Hayes"),
    Quote("Progress, not perfection.", "Unknown"),
    Quote("The best time to plant a tree was 20 years ago. The second best time is now.", "Chinese Proverb"),
    Quote("Your only limit is you.", "Unknown"),
    Quote("Dream big. Start small. Act now.", "Robin Sharma"),
    Quote("One day or day one. You decide.", "Unknown"),
    Quote("Make each day your masterpiece.", "John Wooden"),
    Quote("Discipline is the bridge between goals and accomplishment.", "Jim Rohn"),
    Quote("The pain of discipline is nothing like the pain of disappointment.", "Justin Langer"),
    Quote("You don't have to be great to start, but you have to start to be great.", "Zig Ziglar"),
    Quote("Today's actions are tomorrow's results.", "Unknown"),
    Quote("Consistency is key. Keep showing up.", "Unknown"),
    Quote("Little by little, a little becomes a lot.", "Tanzanian Proverb"),
    Quote("The only bad workout is the one that didn't happen.", "Unknown"),
)


def get_daily_quote(today: Optional[date] = None) -> Quote:
    """Quote of the day, cycling through the list by day of year"""
    if today is None:
        today = date.today()
    day_of_year = today.timetuple().tm_yday
    return DAILY_QUOTES[day_of_year % len(DAILY_QUOTES)]
