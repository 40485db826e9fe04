# models/notification.py
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, func
from .base import Base


class Notification(Base):
     """
     Notification model - in-app messages written by the notification
     dispatcher after the transaction that produced them commits.
     """

     id = Column(Integer, primary_key=True, autoincrement=True)
     title = Column(String(255), nullable=False)
     message = Column(Text, nullable=False)
     to_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
     is_read = Column(Boolean, default=False, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<Notification(id={self.id}, to_user_id={self.to_user_id}, is_read={self.is_read})>"
