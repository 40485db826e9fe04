# schemas/notification.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
     id: int
     title: str
     message: str
     to_user_id: int
     created_by_id: Optional[int] = None
     is_read: bool
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)
