"""habitflow - gamification and streak engine for a habit tracker"""

__version__ = "0.1.0"
