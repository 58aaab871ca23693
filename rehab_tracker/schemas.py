"""Pydantic schemas for API request/response validation."""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Literal
from datetime import datetime, date

Role = Literal["trainer", "athlete"]
Frequency = Literal["daily", "weekly", "twice_weekly", "three_times_weekly"]
AssignmentStatus = Literal["active", "completed", "paused"]


class MessageResponse(BaseModel):
    message: str


# ============== User Schemas ==============

class UserResponse(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    role: str
    sport: Optional[str] = None
    position: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserUpdate(BaseModel):
    """Profile fields a user may change. Role is not editable."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    sport: Optional[str] = None
    position: Optional[str] = None


# ============== Auth Schemas ==============

class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    role: Role
    sport: Optional[str] = None
    position: Optional[str] = None


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# ============== Exercise Schemas ==============

class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    instructions: Optional[str] = None
    body_part: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    duration: Optional[int] = Field(None, ge=0)  # seconds
    sets: Optional[int] = Field(None, ge=0)
    reps: Optional[int] = Field(None, ge=0)


class ExerciseCreate(ExerciseBase):
    video_url: Optional[str] = None


class ExerciseUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    instructions: Optional[str] = None
    video_url: Optional[str] = None
    body_part: Optional[str] = None
    category: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0)
    sets: Optional[int] = Field(None, ge=0)
    reps: Optional[int] = Field(None, ge=0)


class ExerciseResponse(ExerciseBase):
    id: int
    video_url: Optional[str] = None
    created_by: int
    trainer_first_name: Optional[str] = None
    trainer_last_name: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ============== Progress Schemas ==============

class ProgressCreate(BaseModel):
    assignment_id: int
    notes: Optional[str] = None
    pain_level: Optional[int] = None  # 1-10, checked by the service
    difficulty: Optional[int] = None  # 1-5, checked by the service


class ProgressUpdate(BaseModel):
    notes: Optional[str] = None
    pain_level: Optional[int] = None
    difficulty: Optional[int] = None


class ProgressResponse(BaseModel):
    id: int
    assignment_id: int
    completed_date: date
    notes: Optional[str] = None
    pain_level: Optional[int] = None
    difficulty: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProgressLogged(BaseModel):
    message: str = "Progress logged successfully"
    progress_id: int


class AthleteProgressEntry(ProgressResponse):
    """Progress row joined with its assignment and exercise."""
    frequency: Optional[str] = None
    exercise_name: Optional[str] = None
    body_part: Optional[str] = None
    category: Optional[str] = None


# ============== Assignment Schemas ==============

class AssignmentCreate(BaseModel):
    athlete_id: int
    exercise_id: int
    frequency: str  # checked by the service against FREQUENCIES
    start_date: date
    end_date: Optional[date] = None
    notes: Optional[str] = None


class AssignmentUpdate(BaseModel):
    """Fields omitted from the body are left unchanged."""
    frequency: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None
    status: Optional[str] = None


class AssignmentCreated(BaseModel):
    message: str = "Assignment created successfully"
    assignment_id: int


class AssignmentDetail(BaseModel):
    """Assignment joined with exercise, athlete and trainer info plus its history."""
    assignment_id: int
    frequency: str
    start_date: date
    end_date: Optional[date] = None
    notes: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None

    exercise_id: int
    exercise_name: str
    description: Optional[str] = None
    instructions: Optional[str] = None
    video_url: Optional[str] = None
    body_part: str
    category: str
    duration: Optional[int] = None
    sets: Optional[int] = None
    reps: Optional[int] = None

    athlete_id: int
    athlete_first_name: Optional[str] = None
    athlete_last_name: Optional[str] = None
    athlete_email: Optional[str] = None
    athlete_sport: Optional[str] = None

    trainer_id: int
    trainer_first_name: Optional[str] = None
    trainer_last_name: Optional[str] = None

    progress: List[ProgressResponse] = []


class TrainerStats(BaseModel):
    total_assignments: int
    active_assignments: int
    completed_this_week: int


# ============== Compliance Schemas ==============

class AssignmentCompliance(BaseModel):
    assignment_id: int
    frequency: str
    start_date: date
    exercise_name: str
    completed_count: int
    expected_count: int
    compliance_rate: float  # percent, 0-100


class ComplianceReport(BaseModel):
    period: str
    overall_compliance: int
    exercise_compliance: List[AssignmentCompliance]


# ============== Notification Schemas ==============

class NotificationResponse(BaseModel):
    id: int
    user_id: int
    title: str
    message: str
    type: str
    is_read: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UnreadCount(BaseModel):
    user_id: int
    unread: int
