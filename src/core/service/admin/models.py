from typing import Any, Dict, List

from pydantic import BaseModel, Field


class AdminStats(BaseModel):
    """Aggregate counts over fetched records"""
    totalUsers: int = Field(default=0, ge=0)
    totalSignups: int = Field(default=0, ge=0)
    totalLogins: int = Field(default=0, ge=0)
    membershipBreakdown: Dict[str, int] = Field(default_factory=dict)


class AdminReport(BaseModel):
    """On-demand admin view, never persisted"""
    stats: AdminStats
    users: List[Dict[str, Any]] = Field(default_factory=list)
    recentSignups: List[Dict[str, Any]] = Field(default_factory=list)
    recentLogins: List[Dict[str, Any]] = Field(default_factory=list)
