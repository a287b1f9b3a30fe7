"""Tests for utility functions."""

from datetime import datetime

from ecsk.core.utils import (
    batch_items,
    extract_name_from_arn,
    format_columns,
    format_timestamp,
    get_tag_name,
    paginate_aws_list,
    truncate,
)


def test_batch_items_basic():
    items = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]
    batches = list(batch_items(items, 3))

    assert len(batches) == 4
    assert batches[0] == [1, 2, 3]
    assert batches[1] == [4, 5, 6]
    assert batches[2] == [7, 8, 9]
    assert batches[3] == [10]


def test_batch_items_exact_fit():
    batches = list(batch_items([1, 2, 3, 4, 5, 6], 3))

    assert batches == [[1, 2, 3], [4, 5, 6]]


def test_batch_items_empty_list():
    assert list(batch_items([], 5)) == []


def test_batch_items_describe_tasks_sized():
    items = [f"task-{i}" for i in range(250)]
    batches = list(batch_items(items, 100))

    assert [len(batch) for batch in batches] == [100, 100, 50]
    assert [item for batch in batches for item in batch] == items


def test_extract_name_from_arn():
    assert extract_name_from_arn("arn:aws:ecs:us-east-1:123456789012:cluster/production") == "production"
    assert extract_name_from_arn("arn:aws:ecs:us-east-1:123456789012:task/production/abc123") == "abc123"
    assert extract_name_from_arn("plain-name") == "plain-name"


def test_truncate_long_text():
    text = "a" * 45

    assert truncate(text) == "a" * 30 + "..."


def test_truncate_short_text_unchanged():
    assert truncate("a" * 30) == "a" * 30
    assert truncate("") == ""


def test_format_columns_aligns_cells():
    lines = format_columns([["vpc-1", "10.0.0.0/16", "main"], ["vpc-1234", "172.31.0.0/16", "-"]])

    assert lines == [
        "vpc-1    | 10.0.0.0/16   | main",
        "vpc-1234 | 172.31.0.0/16 | -",
    ]


def test_format_columns_empty():
    assert format_columns([]) == []


def test_get_tag_name():
    assert get_tag_name([{"Key": "env", "Value": "dev"}, {"Key": "Name", "Value": "web"}]) == "web"
    assert get_tag_name([{"Key": "env", "Value": "dev"}]) == "-"
    assert get_tag_name(None) == "-"


def test_format_timestamp_without_zero_padding():
    assert format_timestamp(datetime(2021, 1, 2, 3, 4, 5)) == "2021/1/2 03:04:05"
    assert format_timestamp(datetime(2021, 12, 31, 23, 59, 59)) == "2021/12/31 23:59:59"


def test_format_timestamp_missing():
    assert format_timestamp(None) == "-"


def test_paginate_aws_list_concatenates_pages(mock_paginated_client):
    client = mock_paginated_client([{"clusterArns": ["a", "b"]}, {"clusterArns": ["c"]}, {}])

    result = paginate_aws_list(client, "list_clusters", "clusterArns")

    assert result == ["a", "b", "c"]
    client.get_paginator.assert_called_once_with("list_clusters")
