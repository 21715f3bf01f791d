from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for permission checks."""

    ADMIN = "admin"
    TEACHER = "teacher"
    PARENT = "parent"


class EntityKind(str, Enum):
    """Every record collection owned by the store.

    The value doubles as the key of the collection in the local substrate.
    """

    USERS = "users"
    STUDENTS = "students"
    CLASSES = "classes"
    SUBJECTS = "subjects"
    GRADES = "grades"
    PAYMENTS = "payments"
    STAFF = "staff"
    INVENTORY = "inventory"
    NEWS = "news"
    EVENTS = "events"
    HOMEWORK = "homework"
    ONLINE_REGISTRATIONS = "onlineRegistrations"
    ROOMS = "rooms"
    ROOM_SCHEDULES = "roomSchedules"
    ATTENDANCE = "attendance"
    MESSAGES = "messages"
    PARENT_NOTIFICATIONS = "parentNotifications"
    TEACHER_SALARIES = "teacherSalaries"
    TEACHER_ADVANCES = "teacherAdvances"
    MONTHLY_SALARY_COSTS = "monthlySalaryCosts"


class SalaryStatus(str, Enum):
    """Payment state of a teacher's monthly salary."""

    PENDING = "pending"
    PARTIAL = "partial"
    COMPLETED = "completed"


class PaymentMethod(str, Enum):
    CASH = "especes"
    MOBILE = "mobile"
    CHEQUE = "cheque"
    TRANSFER = "virement"
