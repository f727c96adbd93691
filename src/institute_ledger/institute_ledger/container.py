from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import COURSE_FEES, DEFAULT_COURSE_FEE, DEFAULT_DEFAULTER_THRESHOLD, DEFAULT_SCAN_WORKERS
from .database.connection import DBConfig, DatabaseConnection
from .fees.factory import PaymentRuleFactory
from .fees.model import CourseFeeSchedule
from .fees.mysql_payment_repository import MySQLPaymentRepository
from .fees.repository import PaymentRepository
from .fees.service import FeeService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    students_repo: StudentRepository
    payments_repo: PaymentRepository
    attendance_repo: AttendanceRepository

    fee_schedule: CourseFeeSchedule
    fee_service: FeeService
    attendance_service: AttendanceService


def build_schedule(course_fees: Optional[Mapping[str, Any]] = None, default_fee: Any = None) -> CourseFeeSchedule:
    fees = COURSE_FEES if course_fees is None else course_fees
    return CourseFeeSchedule(
        fees={name: Decimal(str(fee)) for name, fee in fees.items()},
        default_fee=Decimal(str(default_fee)) if default_fee is not None else DEFAULT_COURSE_FEE,
    )


def assemble(
    *,
    students_repo: StudentRepository,
    payments_repo: PaymentRepository,
    attendance_repo: AttendanceRepository,
    schedule: CourseFeeSchedule,
    conn: Optional[DatabaseConnection] = None,
    defaulter_threshold: int = DEFAULT_DEFAULTER_THRESHOLD,
    scan_workers: int = DEFAULT_SCAN_WORKERS,
) -> Container:
    """Wire services over any repository implementation (MySQL or in-memory)."""
    fee_service = FeeService(students_repo, payments_repo, schedule, rule_factory=PaymentRuleFactory())
    attendance_service = AttendanceService(
        attendance_repo,
        students_repo,
        threshold=defaulter_threshold,
        max_workers=scan_workers,
    )
    return Container(
        conn=conn,
        students_repo=students_repo,
        payments_repo=payments_repo,
        attendance_repo=attendance_repo,
        fee_schedule=schedule,
        fee_service=fee_service,
        attendance_service=attendance_service,
    )


def build_container(*, db_config: Mapping[str, Any], settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return assemble(
        students_repo=MySQLStudentRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        schedule=build_schedule(
            getattr(settings, "COURSE_FEES", None),
            getattr(settings, "DEFAULT_COURSE_FEE", None),
        ),
        conn=conn,
        defaulter_threshold=int(getattr(settings, "DEFAULTER_THRESHOLD", DEFAULT_DEFAULTER_THRESHOLD)),
        scan_workers=int(getattr(settings, "DEFAULTER_SCAN_WORKERS", DEFAULT_SCAN_WORKERS)),
    )
