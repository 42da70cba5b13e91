"""
Childcare SQLAlchemy Models
"""

from .attendance import Attendance
from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from .children import Child
from .evaluations import Evaluation
from .notifications import Notification
from .reports import Report
from .users import User

__all__ = [
    # Base
    "Base",
    "UUIDPrimaryKeyMixin",
    "TimestampMixin",
    # Accounts
    "User",
    # Children
    "Child",
    # Daily operations
    "Attendance",
    "Evaluation",
    # Messaging
    "Notification",
    # Reporting
    "Report",
]
