"""
Tests for boundary schemas: admin API responses and push payloads.
"""

from __future__ import annotations

from datetime import datetime, timezone

from salon_calendar.application.dto.admin_api_payloads import parse_appointments, parse_staff
from salon_calendar.application.dto.push_event import PushEnvelopeDTO, parse_push_event
from salon_calendar.domain.entities.appointment import AppointmentStatus, Category
from salon_calendar.domain.entities.push_event import PushEventKind


def _raw(**overrides):
    data = {
        "id": 42,
        "category": "women",
        "starts_at": "2024-03-05T10:00:00+03:00",
        "ends_at": "2024-03-05T11:00:00+03:00",
        "status": "booked",
        "staff_id": 7,
        "staff_full_name": "Zeynep",
        "customer_full_name": "Elif",
        "services": [{"name": "Fön"}, None, {"name": ""}],
        "unexpected": "ignored",
    }
    data.update(overrides)
    return data


def test_appointments_are_normalized():
    """Ids become strings, times become UTC, empty services are dropped."""
    [appointment] = parse_appointments({"appointments": [_raw()]})
    assert appointment.id == "42"
    assert appointment.staff_id == "7"
    assert appointment.category == Category.women
    assert appointment.status == AppointmentStatus.booked
    assert appointment.starts_at == datetime(2024, 3, 5, 7, 0, tzinfo=timezone.utc)
    assert appointment.service_names == "Fön"


def test_bare_list_is_accepted():
    """A plain list works as well as the envelope."""
    assert len(parse_appointments([_raw(), _raw(id=43)])) == 2


def test_malformed_list_becomes_empty():
    """Non-list payloads are treated as an empty result."""
    assert parse_appointments({"appointments": "oops"}) == []
    assert parse_appointments(None) == []
    assert parse_appointments({"error": "x"}) == []
    assert parse_staff({"staff": {"id": 1}}) == []


def test_bad_items_are_dropped():
    """Unparsable items are skipped, valid ones kept."""
    items = [_raw(), _raw(category="kids"), _raw(starts_at="tomorrow"), {"id": 9}]
    assert [a.id for a in parse_appointments({"appointments": items})] == ["42"]


def test_staff_options():
    """Staff ids are stringified and blank ids dropped."""
    staff = parse_staff({"staff": [{"id": 1, "full_name": "Mehmet", "category": "both"}, {"id": " "}, "x"]})
    assert [s.id for s in staff] == ["1"]
    assert staff[0].display_name == "Mehmet (her ikisi)"


def test_new_appointment_push_summary():
    """customerName defaults to '-', empty time is dropped."""
    event = parse_push_event("newAppointment", {"customerName": " ", "time": ""})
    assert event.kind == PushEventKind.new_appointment
    assert event.summary.customer_name == "-"
    assert event.summary.time is None


def test_push_without_summary():
    """Other events and non-dict payloads carry no summary."""
    assert parse_push_event(PushEventKind.update_appointment, {"customerName": "Elif"}).summary is None
    assert parse_push_event("newAppointment", ["Elif"]).summary is None
    assert parse_push_event("newAppointment", {"customerName": {"first": "Elif"}}).summary is None


def test_envelope_keeps_any_payload():
    """The envelope only requires an event name; payloads of any JSON type pass through."""
    assert PushEnvelopeDTO.model_validate({"event": "updateAppointment", "payload": []}).payload == []
    assert PushEnvelopeDTO.model_validate({"event": "updateAppointment", "payload": "x"}).payload == "x"
    assert PushEnvelopeDTO.model_validate({"event": "ping"}).payload is None


def test_naive_api_times_are_read_as_utc():
    """Timestamps without an offset are taken as UTC, like every other instant."""
    [appointment] = parse_appointments([_raw(starts_at="2024-03-05T07:00:00", ends_at="2024-03-05T08:00:00")])
    assert appointment.starts_at == datetime(2024, 3, 5, 7, 0, tzinfo=timezone.utc)
    assert appointment.ends_at.tzinfo is not None
