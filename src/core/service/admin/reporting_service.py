from collections import Counter
from typing import Optional

from src.core.service.activity.models import ActivityList
from src.core.service.admin.models import AdminReport, AdminStats
from src.core.service.auth.models.user import MembershipTier
from src.infra.repository.user_repository import UserRepository
from src.infra.repository.activity_log_repository import ActivityLogRepository
from src.infra.config.settings import get_settings
from src.core.logger.logger import get_logger

logger = get_logger(__name__)
settings = get_settings()


class AdminReportingService:
    """Builds the admin report from user records and recent activity"""

    def __init__(
        self,
        user_repository: UserRepository,
        activity_repository: ActivityLogRepository,
        fetch_limit: Optional[int] = None
    ):
        self.user_repository = user_repository
        self.activity_repository = activity_repository
        self.fetch_limit = settings.ADMIN_LOG_FETCH_LIMIT if fetch_limit is None else fetch_limit

    async def get_report(
        self,
        max_users: int = 50,
        max_signups: int = 20,
        max_logins: int = 20
    ) -> AdminReport:
        """
        Scan all users and the recent signup/login lists.

        Totals count what was fetched (logs are capped at fetch_limit). The
        membership breakdown covers every fetched user, not only the returned slice.
        """
        signups = await self.activity_repository.recent(ActivityList.SIGNUPS, self.fetch_limit)
        logins = await self.activity_repository.recent(ActivityList.LOGINS, self.fetch_limit)
        users = await self.user_repository.list_user_records()

        breakdown = Counter(
            user.get("membership") or MembershipTier.NONE.value for user in users
        )

        stats = AdminStats(
            totalUsers=len(users),
            totalSignups=len(signups),
            totalLogins=len(logins),
            membershipBreakdown=dict(breakdown)
        )

        logger.info(
            "Admin report generated",
            extra={
                "total_users": stats.totalUsers,
                "total_signups": stats.totalSignups,
                "total_logins": stats.totalLogins
            }
        )

        return AdminReport(
            stats=stats,
            users=users[:max_users],
            recentSignups=signups[:max_signups],
            recentLogins=logins[:max_logins]
        )
