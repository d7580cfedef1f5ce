# src/gridway/schemas/connection.py
"""Connection-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ConnectionResponse(BaseModel):
    """Schema for a connection between two attendees."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    connected_user_id: str
    created_at: datetime
