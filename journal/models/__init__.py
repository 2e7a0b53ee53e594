from .user import User
from .log_entry import LogEntry, Category, Sentiment
from .summary import WeeklySummary

__all__ = [
    "User",
    "LogEntry",
    "Category",
    "Sentiment",
    "WeeklySummary",
]
