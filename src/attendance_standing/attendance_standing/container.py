from __future__ import annotations

from dataclasses import dataclass

from .core.enums import RecordShape
from .database.connection import DBConfig, DatabaseConnection
from .records.mysql_attendance_row_repository import MySQLAttendanceRowRepository, MySQLRosterRepository
from .reports.service import StandingReportService
from .standing.model import StandingThresholds


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    rows_repo: MySQLAttendanceRowRepository
    roster_repo: MySQLRosterRepository

    thresholds: StandingThresholds
    standing_report_service: StandingReportService


def build_container(
    *,
    db_config: dict,
    thresholds: StandingThresholds,
    shape: RecordShape | str = RecordShape.PERIOD_COLUMNS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    rows_repo = MySQLAttendanceRowRepository(conn, shape=RecordShape(shape))
    roster_repo = MySQLRosterRepository(conn)

    standing_report_service = StandingReportService(rows_repo, roster_repo, thresholds=thresholds)

    return Container(
        conn=conn,
        rows_repo=rows_repo,
        roster_repo=roster_repo,
        thresholds=thresholds,
        standing_report_service=standing_report_service,
    )
