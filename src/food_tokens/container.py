from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from .auth.service import AuthService
from .checkins.mysql_collection_repository import MySQLCollectionRepository
from .checkins.repository import CollectionRepository
from .checkins.service import CollectionService
from .checkins.watcher import InsertWatcher
from .common.datetime_utils import get_tz
from .control.mysql_control_repository import MySQLControlRepository
from .control.repository import ControlRepository
from .core.constants import DEFAULT_INSERT_POLL_SECONDS, DEFAULT_REDIRECT_SECONDS
from .dashboard.view_model import DashboardViewModel
from .database.connection import DatabaseConnection, DBConfig
from .profile.view_model import ProfileViewModel
from .staff.model import Staff
from .staff.mysql_staff_repository import MySQLStaffRepository
from .staff.registration import RegistrationForm
from .staff.repository import StaffRepository


@dataclass(frozen=True)
class Container:
    staff_repo: StaffRepository
    collections_repo: CollectionRepository
    control_repo: ControlRepository

    watcher: InsertWatcher
    auth_service: AuthService
    collection_service: CollectionService
    registration_form: RegistrationForm

    tz: Any
    conn: Optional[DatabaseConnection] = None

    def dashboard(self, *, enable_filters: bool = True, today: Optional[date] = None) -> DashboardViewModel:
        return DashboardViewModel(
            self.staff_repo,
            self.collections_repo,
            tz=self.tz,
            enable_filters=enable_filters,
            today=today,
        )

    def profile(self, user: Optional[Staff], *, month: Optional[date] = None) -> ProfileViewModel:
        return ProfileViewModel(self.collections_repo, user, tz=self.tz, month=month)


def assemble(
    staff_repo: StaffRepository,
    collections_repo: CollectionRepository,
    control_repo: ControlRepository,
    *,
    timezone: str = "UTC",
    poll_seconds: float = DEFAULT_INSERT_POLL_SECONDS,
    redirect_seconds: int = DEFAULT_REDIRECT_SECONDS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    tz = get_tz(timezone)
    return Container(
        staff_repo=staff_repo,
        collections_repo=collections_repo,
        control_repo=control_repo,
        watcher=InsertWatcher(collections_repo, poll_seconds=poll_seconds),
        auth_service=AuthService(staff_repo),
        collection_service=CollectionService(collections_repo, staff_repo, tz=tz),
        registration_form=RegistrationForm(staff_repo, control_repo, redirect_after_seconds=redirect_seconds),
        tz=tz,
        conn=conn,
    )


def build_container(
    *,
    db_config: DBConfig,
    timezone: str = "UTC",
    poll_seconds: float = DEFAULT_INSERT_POLL_SECONDS,
    redirect_seconds: int = DEFAULT_REDIRECT_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(db_config)
    return assemble(
        MySQLStaffRepository(conn),
        MySQLCollectionRepository(conn),
        MySQLControlRepository(conn),
        timezone=timezone,
        poll_seconds=poll_seconds,
        redirect_seconds=redirect_seconds,
        conn=conn,
    )
