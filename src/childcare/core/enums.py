"""
Domain Enumerations

Closed value sets shared by models, schemas and the access policy.
"""

from enum import Enum


class UserRole(str, Enum):
    """Account roles.

    Capabilities form a partial order rather than a ladder: ADMIN manages
    accounts, MANAGER runs daily operations and owns child registration,
    GUARDIAN does attendance and evaluation field work, FAMILY is read-mostly
    and may not sign in to the staff dashboard.
    """

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    GUARDIAN = "GUARDIAN"
    FAMILY = "FAMILY"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class ChildStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    GRADUATED = "GRADUATED"


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"


class EvaluationCategory(str, Enum):
    PHYSICAL = "PHYSICAL"
    COGNITIVE = "COGNITIVE"
    SOCIAL = "SOCIAL"
    EMOTIONAL = "EMOTIONAL"
    LANGUAGE = "LANGUAGE"
    OTHER = "OTHER"


class ReportType(str, Enum):
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"
