"""
Tests for execution metrics, merge ordering and merged pagination.
"""

import pytest

from core.entities.analytics import (
    ExecutionMetrics,
    MergedPage,
    merge_sorted_by_created_at,
    summarize_executions
)


class TestExecutionMetrics:

    def test_empty_set_has_zero_averages(self):
        metrics = summarize_executions([])

        assert metrics["totalExecutions"] == 0
        assert metrics["avgCost"] == 0
        assert metrics["avgDuration"] == 0
        assert metrics["statusCounts"] == {"busy": 0, "completed": 0}

    def test_cost_is_converted_from_hundredths(self):
        metrics = summarize_executions([
            {"total_cost": 250, "status": "completed", "conversation_duration": 10},
            {"total_cost": 150, "status": "busy", "conversation_duration": 5},
        ])

        assert metrics["totalExecutions"] == 2
        assert metrics["totalCost"] == pytest.approx(4.0)
        assert metrics["totalDuration"] == 15
        assert metrics["avgCost"] == pytest.approx(2.0)
        assert metrics["avgDuration"] == pytest.approx(7.5)
        assert metrics["statusCounts"] == {"busy": 1, "completed": 1}

    def test_untracked_statuses_count_only_in_totals(self):
        metrics = ExecutionMetrics.from_executions([
            {"total_cost": 100, "status": "failed", "conversation_duration": 3},
            {"total_cost": 100, "status": {"status": "Completed"}, "conversation_duration": 3},
            {"status": None},
        ])

        assert metrics.total_executions == 3
        assert metrics.status_counts == {"busy": 0, "completed": 1}

    def test_missing_or_bad_numbers_count_as_zero(self):
        metrics = ExecutionMetrics.from_executions([
            {"total_cost": None, "conversation_duration": "n/a"},
            {"total_cost": True, "conversation_duration": "4"},
        ])

        assert metrics.total_cost == 0
        assert metrics.total_duration == 4


class TestMergeSortedByCreatedAt:

    def test_newest_first_across_agents(self):
        merged = merge_sorted_by_created_at([
            [{"id": 1, "created_at": "2024-01-02"}],
            [{"id": 2, "created_at": "2024-01-03"}],
        ])
        assert [record["id"] for record in merged] == [2, 1]

    def test_mixed_offsets_are_compared_as_instants(self):
        merged = merge_sorted_by_created_at([[
            {"id": "utc", "created_at": "2024-01-01T10:00:00Z"},
            {"id": "ist", "created_at": "2024-01-01T15:00:00+05:30"},
        ]])
        # 15:00+05:30 is 09:30Z, so the UTC record is newer
        assert [record["id"] for record in merged] == ["utc", "ist"]

    def test_missing_timestamps_sort_last(self):
        merged = merge_sorted_by_created_at([[
            {"id": "none"},
            {"id": "dated", "created_at": "2024-01-01"},
        ]])
        assert [record["id"] for record in merged] == ["dated", "none"]


class TestMergedPage:

    def test_paginate(self):
        records = [{"id": i} for i in range(5)]
        page = MergedPage.paginate(records, page_number=2, page_size=2)

        assert page.data == [{"id": 2}, {"id": 3}]
        assert page.total_count == 5
        assert page.total_pages == 3
        assert page.has_more is True

    def test_last_page(self):
        page = MergedPage.paginate([{"id": i} for i in range(5)], page_number=3, page_size=2)
        assert page.data == [{"id": 4}]
        assert page.has_more is False

    def test_page_past_the_end_is_empty(self):
        page = MergedPage.paginate([{"id": 1}], page_number=4, page_size=10)
        assert page.data == []
        assert page.total_pages == 1

    def test_empty(self):
        page = MergedPage.empty(1, 20)
        assert page.to_dict() == {
            "data": [],
            "page_number": 1,
            "page_size": 20,
            "total_count": 0,
            "total_pages": 0,
            "has_more": False,
        }

    @pytest.mark.parametrize("page_number,page_size", [(0, 10), (1, 0), (-1, -1)])
    def test_invalid_page_parameters(self, page_number, page_size):
        with pytest.raises(ValueError):
            MergedPage(data=[], page_number=page_number, page_size=page_size, total_count=0)
