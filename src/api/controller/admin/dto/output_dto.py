from pydantic import BaseModel, Field

from src.core.service.admin.models import AdminReport


class AdminReportResponseDto(BaseModel):
    """DTO for GET /admin."""

    success: bool = Field(True, description="Report generated")
    data: AdminReport = Field(..., description="Stats, users and recent activity")
