"""Urgency classification for due dates"""

from oik_scheduler.domain.models import DueStatus

# Days-until-due at or below which an upcoming item needs attention
ATTENTION_WINDOW_DAYS = 3


def classify_urgency(days_until_due: int) -> DueStatus:
    """
    Map days until due to a status.

    - < 0: overdue
    - 0:   urgent (due today)
    - 1-3: attention
    - > 3: ok
    """
    if days_until_due < 0:
        return DueStatus.OVERDUE
    elif days_until_due == 0:
        return DueStatus.URGENT
    elif days_until_due <= ATTENTION_WINDOW_DAYS:
        return DueStatus.ATTENTION
    else:
        return DueStatus.OK
