from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from flask import Flask, jsonify, request

from ..common.date_ranges import get_date_range
from ..common.datetime_utils import parse_iso_date, today_local
from ..common.formatting import round_rate
from ..core.exceptions import ConfigurationError, ValidationError
from .service import ClassReport, StudentReport

logger = logging.getLogger(__name__)


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def _aggregate_dict(a) -> dict:
    return {
        "studentId": a.student_id,
        "totalMarkedPeriods": a.total_marked_periods,
        "presentCount": a.present_count,
        "absentCount": a.absent_count,
        "sickCount": a.sick_count,
        "leaveCount": a.leave_count,
        "attendanceRate": round_rate(a.attendance_rate),
    }


def _standing_dict(s) -> dict:
    return {
        "status": s.status.value,
        "displayStatus": s.display_status.value,
        "warning": s.warning,
        "isExamEligible": s.is_exam_eligible,
        "requiresAction": s.requires_action,
        "remainingAbsences": s.remaining_absences,
        "remainingAbsencesBeforeTasdiq": s.remaining_absences_before_tasdiq,
        "remainingAbsencesBeforeMahroom": s.remaining_absences_before_mahroom,
    }


def _rejection_dict(r) -> dict:
    return {"row": r.row_index, "period": r.period_number, "reason": r.reason}


def class_report_to_dict(report: ClassReport) -> dict:
    ca = report.class_aggregate
    st = report.statistics
    return {
        "classId": ca.class_id,
        "startDate": _iso(report.window.start),
        "endDate": _iso(report.window.end),
        "studentCount": ca.student_count,
        # None -> null: an empty class has no average and no ranking
        "classAverageRate": round_rate(ca.class_average_rate),
        "ranking": [
            {"rank": r.rank, "studentId": r.student_id, "attendanceRate": round_rate(r.attendance_rate)}
            for r in ca.ranked_students
        ],
        "statistics": {
            "medianRate": round_rate(st.median_rate),
            "highestRate": round_rate(st.highest_rate),
            "lowestRate": round_rate(st.lowest_rate),
            "studentsAtRisk": st.students_at_risk,
            "studentsRequiringTasdiq": st.students_requiring_tasdiq,
            "studentsWithWarning": st.students_with_warning,
            "perfectAttendance": st.perfect_attendance,
        },
        "dailyStats": [
            {
                "date": d.date.isoformat(),
                "total": d.total,
                "present": d.present,
                "absent": d.absent,
                "sick": d.sick,
                "leave": d.leave,
                "notMarked": d.not_marked,
                "rate": round_rate(d.rate),
            }
            for d in report.daily
        ],
        "students": [
            {**_aggregate_dict(s.aggregate), "standing": _standing_dict(s.standing)} for s in report.students
        ],
        "rejected": [_rejection_dict(r) for r in report.rejections],
    }


def student_report_to_dict(report: StudentReport) -> dict:
    rank = report.rank
    return {
        **_aggregate_dict(report.aggregate),
        "startDate": _iso(report.window.start),
        "endDate": _iso(report.window.end),
        "standing": _standing_dict(report.standing),
        "rank": None
        if rank is None or not rank.applicable
        else {
            "classId": rank.class_id,
            "rank": rank.rank,
            "classSize": rank.class_size,
            "attendanceRate": round_rate(rank.attendance_rate),
            "classAverageRate": round_rate(rank.class_average_rate),
            "percentile": round_rate(rank.percentile),
            "aboveAverage": rank.above_average,
        },
        "days": [
            {
                "date": d.date.isoformat(),
                "status": d.status.value,
                "sessions": [
                    {"period": s.period_number, "status": s.status.value, "subject": s.subject, "teacherId": s.teacher_id}
                    for s in d.sessions
                ],
            }
            for d in report.days
        ],
        "rejected": [_rejection_dict(r) for r in report.rejections],
    }


def register(app: Flask, container) -> None:
    def _window() -> tuple[Optional[date], Optional[date]]:
        kind = request.args.get("range")
        if kind:
            r = get_date_range(
                kind,
                today=today_local(),
                custom_start=_parse_optional(request.args.get("start")),
                custom_end=_parse_optional(request.args.get("end")),
            )
            return r.start, r.end
        return _parse_optional(request.args.get("start")), _parse_optional(request.args.get("end"))

    def _parse_optional(value: Optional[str]) -> Optional[date]:
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None

    def _bad_request(e: Exception):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.route("/api/classes/<class_id>/standing", methods=["GET"], endpoint="class_standing")
    def class_standing(class_id: str):
        try:
            start, end = _window()
            report = container.standing_report_service.build_class_report(class_id=class_id, start=start, end=end)
            return jsonify({"success": True, "data": class_report_to_dict(report)}), 200
        except (ValidationError, ConfigurationError) as e:
            return _bad_request(e)
        except Exception:
            logger.exception("Class standing failed for class %s", class_id)
            return jsonify({"success": False, "message": "Internal server error"}), 500

    @app.route("/api/students/<student_id>/academic-status", methods=["GET"], endpoint="student_academic_status")
    def student_academic_status(student_id: str):
        try:
            start, end = _window()
            report = container.standing_report_service.build_student_report(
                student_id=student_id,
                start=start,
                end=end,
                class_id=request.args.get("classId") or None,
            )
            return jsonify({"success": True, "data": student_report_to_dict(report)}), 200
        except (ValidationError, ConfigurationError) as e:
            return _bad_request(e)
        except Exception:
            logger.exception("Academic status failed for student %s", student_id)
            return jsonify({"success": False, "message": "Internal server error"}), 500
