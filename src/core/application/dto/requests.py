# src/core/application/dto/requests.py
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any

class LoginRequest(BaseModel):
    """Request DTO for dashboard login"""
    email: str = Field(..., min_length=3)
    api_key: str = Field(..., min_length=1)

class OutboundCallRequest(BaseModel):
    """Request DTO for outbound calls; presence checks happen in the bridge"""
    phone_number: Optional[str] = None
    agent_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

class ClickToCallRequest(BaseModel):
    """Request DTO for carrier click-to-call"""
    customer_number: str = Field(..., min_length=1)
    agent_number: Optional[str] = None
    caller_id: str = ""
    is_promotional: bool = False

class BatchScheduleRequest(BaseModel):
    """Request DTO for scheduling a batch at an explicit time"""
    batch_id: Optional[str] = None
    scheduled_time: Optional[str] = Field(
        default=None,
        description="ISO-8601 timestamp with timezone, must be in the future"
    )

class BatchRunRequest(BaseModel):
    """Request DTO for running a batch shortly"""
    batch_id: Optional[str] = None
