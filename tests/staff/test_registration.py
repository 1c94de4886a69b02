from __future__ import annotations

from food_tokens.core.enums import CommandMode
from food_tokens.core.exceptions import ConflictError, TransportError
from food_tokens.staff.model import Staff
from food_tokens.staff.registration import RegistrationForm


class FakeStaffRepo:
    def __init__(self):
        self.inserted: list[Staff] = []
        self.error = None

    def insert_staff(self, staff):
        if self.error:
            raise self.error
        if any(s.staff_id == staff.staff_id for s in self.inserted):
            raise ConflictError('duplicate key value violates unique constraint "staff_pkey"')
        self.inserted.append(staff)
        return staff


class FakeControlRepo:
    def __init__(self):
        self.commands = []
        self.error = None

    def insert_control_command(self, *, mode, staff_id, created_at):
        if self.error:
            raise self.error
        self.commands.append({"mode": mode, "staff_id": staff_id, "created_at": created_at})
        return len(self.commands)


CAROL_FORM = {"staffid": "7", "staffname": "Carol", "tag": "5", "email": "c@x.com", "lab": "Z"}


def test_carol_registration_writes_staff_then_control(fixed_now):
    staff_repo, control_repo = FakeStaffRepo(), FakeControlRepo()
    form = RegistrationForm(staff_repo, control_repo)

    result = form.submit(CAROL_FORM, now=fixed_now)

    assert result.ok
    assert staff_repo.inserted == [Staff(staff_id=7, staff_name="Carol", tag=5, email="c@x.com", lab="Z")]
    assert isinstance(staff_repo.inserted[0].staff_id, int)
    assert control_repo.commands == [{"mode": CommandMode.REGISTER, "staff_id": 7, "created_at": fixed_now}]
    assert result.redirect_to == "/admin"
    assert result.redirect_after_seconds == 2


def test_fields_are_trimmed():
    staff_repo = FakeStaffRepo()
    form = RegistrationForm(staff_repo, FakeControlRepo())

    form.submit({**CAROL_FORM, "staffname": "  Carol  ", "staffid": " 7 "})

    assert staff_repo.inserted[0].staff_name == "Carol"


def test_staff_insert_failure_skips_control_and_surfaces_message():
    staff_repo, control_repo = FakeStaffRepo(), FakeControlRepo()
    staff_repo.error = TransportError("Failed to fetch")
    form = RegistrationForm(staff_repo, control_repo)

    result = form.submit(CAROL_FORM)

    assert not result.ok
    assert result.message == "Failed to fetch"
    assert control_repo.commands == []


def test_duplicate_staff_id_is_a_conflict():
    staff_repo, control_repo = FakeStaffRepo(), FakeControlRepo()
    form = RegistrationForm(staff_repo, control_repo)
    form.submit(CAROL_FORM)

    result = form.submit(CAROL_FORM)

    assert not result.ok
    assert isinstance(result.error, ConflictError)
    assert "staff_pkey" in result.message
    assert len(control_repo.commands) == 1


def test_missing_field_is_rejected_before_any_write():
    staff_repo = FakeStaffRepo()
    form = RegistrationForm(staff_repo, FakeControlRepo())

    result = form.submit({**CAROL_FORM, "lab": "   "})

    assert not result.ok
    assert result.message == "Please fill in all required fields"
    assert staff_repo.inserted == []


def test_non_numeric_staff_id_is_rejected():
    staff_repo = FakeStaffRepo()
    form = RegistrationForm(staff_repo, FakeControlRepo())

    result = form.submit({**CAROL_FORM, "tag": "five"})

    assert not result.ok
    assert "Tag" in result.message
    assert staff_repo.inserted == []


def test_numeric_json_values_including_zero_are_accepted():
    staff_repo, control_repo = FakeStaffRepo(), FakeControlRepo()
    form = RegistrationForm(staff_repo, control_repo)

    result = form.submit({"staffid": 0, "staffname": "Carol", "tag": 0, "email": "c@x.com", "lab": "Z"})

    assert result.ok
    assert staff_repo.inserted == [Staff(staff_id=0, staff_name="Carol", tag=0, email="c@x.com", lab="Z")]
    assert control_repo.commands[0]["staff_id"] == 0


def test_none_field_is_still_missing():
    staff_repo = FakeStaffRepo()
    form = RegistrationForm(staff_repo, FakeControlRepo())

    result = form.submit({**CAROL_FORM, "tag": None})

    assert result.message == "Please fill in all required fields"
    assert staff_repo.inserted == []
