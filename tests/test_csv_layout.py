"""Tests for the fixed-width JIRA CSV layout."""

import csv
from pathlib import Path

import pytest

from sprintly_to_jira.csv_layout import FIXED_COLUMNS, CsvLayout
from sprintly_to_jira.exceptions import ColumnOverflowError
from sprintly_to_jira.models import DestinationIssue

EXPECTED_ROW_LENGTH = 12 + 50 + 10 + 20


def _issue(number: int, status: str = "backlog", **overrides: object) -> DestinationIssue:
    values: dict[str, object] = {
        "issue_id": number,
        "issue_key": f"UFS-{number}",
        "issue_type": "Task",
        "summary": "Summary",
        "description": "Hello",
        "status": status,
        "reporter": "employee",
        "assignee": "employee",
    }
    values.update(overrides)
    return DestinationIssue(**values)  # type: ignore[arg-type]


@pytest.mark.unit
class TestCsvLayout:
    def setup_method(self) -> None:
        self.layout: CsvLayout = CsvLayout(max_labels=10, max_comments=50, max_attachments=20)

    def test_header_length(self) -> None:
        header = self.layout.header_row()
        assert len(header) == EXPECTED_ROW_LENGTH
        assert self.layout.row_length == EXPECTED_ROW_LENGTH

    def test_header_columns(self) -> None:
        header = self.layout.header_row()
        assert tuple(header[:12]) == FIXED_COLUMNS
        assert header[12] == "Label 1"
        assert header[21] == "Label 10"
        assert header[22] == "Comment 1"
        assert header[72] == "Attachment 1"
        assert header[-1] == "Attachment 20"

    def test_transform_all_items_to_csv_array(self) -> None:
        rows = self.layout.transform_all_items_to_csv_array(
            [_issue(123, "completed"), _issue(456, "accepted", assignee=None), _issue(789)]
        )
        assert len(rows) == 4
        assert rows[0][0] == "Issue Key"
        assert rows[1][0] == "UFS-123"
        assert [len(r) for r in rows] == [EXPECTED_ROW_LENGTH] * 4
        assert rows[1][11] == "Done"
        assert rows[2][11] == "Done"
        assert rows[3][11] == ""
        assert rows[2][5] == ""

    def test_row_fields_in_header_order(self) -> None:
        issue = _issue(
            2,
            parent_id=1,
            issue_type="Sub-Task",
            date_created="2013-06-14T22:52:07+00:00",
            date_modified="2013-06-14T21:53:43+00:00",
            labels=["scoring", "backlog"],
            comments=["c1"],
            attachments=["https://files/a.png"],
        )
        row = dict(zip(self.layout.header_row(), self.layout.row_for(issue), strict=True))
        assert row["Issue Id"] == "2"
        assert row["Parent Id"] == "1"
        assert row["Issue Type"] == "Sub-Task"
        assert row["Date Created"] == "2013-06-14T22:52:07+00:00"
        assert row["Label 1"] == "scoring"
        assert row["Label 2"] == "backlog"
        assert row["Label 3"] == ""
        assert row["Comment 1"] == "c1"
        assert row["Comment 2"] == ""
        assert row["Attachment 1"] == "https://files/a.png"

    def test_full_columns_fit(self) -> None:
        issue = _issue(1, labels=[f"l{i}" for i in range(10)], comments=["c"] * 50, attachments=["a"] * 20)
        assert len(self.layout.row_for(issue)) == EXPECTED_ROW_LENGTH

    @pytest.mark.parametrize(
        ("field", "overrides"),
        [
            ("labels", {"labels": ["x"] * 11}),
            ("comments", {"comments": ["x"] * 51}),
            ("attachments", {"attachments": ["x"] * 21}),
        ],
    )
    def test_overflow_raises(self, field: str, overrides: dict[str, list[str]]) -> None:
        with pytest.raises(ColumnOverflowError) as exc_info:
            self.layout.row_for(_issue(42, **overrides))
        assert exc_info.value.item_number == 42
        assert exc_info.value.field == field

    def test_zero_bounds(self) -> None:
        layout = CsvLayout(max_labels=0, max_comments=0, max_attachments=0)
        assert layout.header_row() == list(FIXED_COLUMNS)
        with pytest.raises(ColumnOverflowError):
            layout.row_for(_issue(1, labels=["x"]))

    def test_negative_bound_rejected(self) -> None:
        with pytest.raises(ValueError, match="maxLabels"):
            CsvLayout(max_labels=-1, max_comments=0, max_attachments=0)

    def test_write_csv(self, tmp_path: Path) -> None:
        rows = self.layout.transform_all_items_to_csv_array([_issue(1, description='Line "one"\nline two')])
        path = tmp_path / "out.csv"

        assert CsvLayout.write_csv(rows, path) == 2

        with path.open(newline="", encoding="utf-8") as f:
            read_back = list(csv.reader(f))
        assert read_back == rows
