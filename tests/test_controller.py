from __future__ import annotations

from dataclasses import dataclass

from flask import Flask

from src.attendance_standing.attendance_standing.reports.controller import register


@dataclass(frozen=True)
class FakeContainer:
    standing_report_service: object


class ExplodingService:
    def build_class_report(self, **kwargs):
        raise RuntimeError("db down")


def make_client(service):
    app = Flask(__name__)
    register(app, FakeContainer(standing_report_service=service))
    return app.test_client()


def test_class_standing_endpoint(make_report_service):
    resp = make_client(make_report_service()).get("/api/classes/C1/standing?start=2024-11-19&end=2024-11-20")

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["studentCount"] == 3
    assert data["ranking"][0] == {"rank": 1, "studentId": "S1", "attendanceRate": 91.7}
    assert data["students"][0]["standing"]["status"] == "GOOD"
    assert data["rejected"][0]["period"] == 5


def test_empty_class_serializes_not_applicable_as_null(make_report_service):
    data = make_client(make_report_service()).get("/api/classes/C7/standing").get_json()["data"]

    assert data["classAverageRate"] is None
    assert data["ranking"] == []


def test_student_academic_status_endpoint(make_report_service):
    resp = make_client(make_report_service()).get("/api/students/S2/academic-status")

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["attendanceRate"] == 50.0
    assert data["standing"]["status"] == "MAHROOM"
    assert data["standing"]["isExamEligible"] is False
    assert data["rank"]["rank"] == 2
    assert data["rank"]["attendanceRate"] == 50.0


def test_bad_dates_are_a_client_error(make_report_service):
    client = make_client(make_report_service())

    resp = client.get("/api/classes/C1/standing?start=2024-13-01")
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False

    resp = client.get("/api/classes/C1/standing?start=2024-11-30&end=2024-11-01")
    assert resp.status_code == 400

    resp = client.get("/api/classes/C1/standing?range=fortnight")
    assert resp.status_code == 400


def test_unexpected_errors_are_hidden():
    resp = make_client(ExplodingService()).get("/api/classes/C1/standing")

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Internal server error"}
