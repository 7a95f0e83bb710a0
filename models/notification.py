"""
models/notification.py
----------------------
Domain model for a notification delivered to a single user.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Notification:
    title: str
    description: Optional[str] = None
    sent_time: Optional[datetime] = None
    user_id: Optional[int] = None
    id: Optional[int] = None
