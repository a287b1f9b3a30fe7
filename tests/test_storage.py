"""Tests for S3 staging of file transfers."""

from datetime import datetime
from unittest.mock import Mock, patch

import boto3
import pytest
from moto import mock_aws

from ecsk.features.storage.storage import (
    StorageService,
    filter_deletable_keys,
    generate_key_prefix,
)
from ecsk.features.storage.ui import NEW_BUCKET, BucketUI

BUCKET = "ecsk-staging"
PREFIX = "ecsk_20210101120000"


@pytest.fixture
def storage(s3_client):
    s3_client.create_bucket(Bucket=BUCKET)
    return StorageService(s3_client)


def test_generate_key_prefix():
    assert generate_key_prefix(datetime(2021, 1, 1, 12, 0, 0)) == PREFIX


def test_filter_deletable_keys_skips_foreign_keys():
    keys = [f"{PREFIX}/a.txt", "other/b.txt", f"{PREFIX}/dir/c.txt"]

    assert filter_deletable_keys(keys, PREFIX) == [f"{PREFIX}/a.txt", f"{PREFIX}/dir/c.txt"]


def test_create_bucket_in_us_east_1_has_no_location_constraint():
    client = Mock()

    StorageService(client).create_bucket("new-bucket", "us-east-1")

    client.create_bucket.assert_called_once_with(Bucket="new-bucket")


def test_create_bucket_elsewhere_sets_location_constraint():
    client = Mock()

    StorageService(client).create_bucket("new-bucket", "eu-west-1")

    client.create_bucket.assert_called_once_with(
        Bucket="new-bucket", CreateBucketConfiguration={"LocationConstraint": "eu-west-1"}
    )


def test_create_bucket_against_s3():
    with mock_aws():
        client = boto3.client("s3", region_name="eu-west-1")

        StorageService(client).create_bucket("eu-bucket", "eu-west-1")

        assert client.get_bucket_location(Bucket="eu-bucket")["LocationConstraint"] == "eu-west-1"


def test_upload_directory_keeps_tree(storage, s3_client, tmp_path):
    src = tmp_path / "site"
    (src / "css").mkdir(parents=True)
    (src / "index.html").write_text("<html></html>")
    (src / "css" / "main.css").write_text("body {}")

    result = storage.upload(BUCKET, PREFIX, str(src))

    assert sorted(result["keys"]) == [f"{PREFIX}/css/main.css", f"{PREFIX}/index.html"]
    assert result["failed"] == []
    body = s3_client.get_object(Bucket=BUCKET, Key=f"{PREFIX}/css/main.css")["Body"].read()
    assert body == b"body {}"


def test_upload_single_file_relative_to_working_directory(storage, tmp_path, monkeypatch):
    (tmp_path / "conf").mkdir()
    (tmp_path / "conf" / "app.ini").write_text("[app]")
    monkeypatch.chdir(tmp_path)

    result = storage.upload(BUCKET, PREFIX, "conf/app.ini")

    assert result["keys"] == [f"{PREFIX}/conf/app.ini"]


def test_upload_missing_source(storage, tmp_path):
    with pytest.raises(FileNotFoundError):
        storage.upload(BUCKET, PREFIX, str(tmp_path / "missing"))


def test_download_mirrors_tree(storage, s3_client, tmp_path):
    s3_client.put_object(Bucket=BUCKET, Key=f"{PREFIX}/logs/app.log", Body=b"line")
    s3_client.put_object(Bucket=BUCKET, Key=f"{PREFIX}/dump.sql", Body=b"select 1;")
    s3_client.put_object(Bucket=BUCKET, Key="ecsk_20200101000000/old.txt", Body=b"old")

    result = storage.download(BUCKET, PREFIX, str(tmp_path))

    assert sorted(result["keys"]) == [f"{PREFIX}/dump.sql", f"{PREFIX}/logs/app.log"]
    assert (tmp_path / "logs" / "app.log").read_bytes() == b"line"
    assert (tmp_path / "dump.sql").read_bytes() == b"select 1;"
    assert not (tmp_path / "old.txt").exists()


def test_download_single_file_to_file_path(storage, s3_client, tmp_path):
    s3_client.put_object(Bucket=BUCKET, Key=f"{PREFIX}/dump.sql", Body=b"select 1;")

    result = storage.download(BUCKET, PREFIX, str(tmp_path / "copy.sql"), file_name="dump.sql")

    assert result == {"keys": [f"{PREFIX}/dump.sql"], "failed": []}
    assert (tmp_path / "copy.sql").read_bytes() == b"select 1;"


def test_download_single_file_into_existing_directory(storage, s3_client, tmp_path):
    s3_client.put_object(Bucket=BUCKET, Key=f"{PREFIX}/dump.sql", Body=b"select 1;")

    storage.download(BUCKET, PREFIX, str(tmp_path), file_name="dump.sql")

    assert (tmp_path / "dump.sql").read_bytes() == b"select 1;"


def test_download_failure_is_reported_and_skipped(tmp_path):
    client = Mock()
    client.get_paginator.return_value.paginate.return_value = [
        {"Contents": [{"Key": f"{PREFIX}/a.txt", "Size": 1}, {"Key": f"{PREFIX}/b.txt", "Size": 1}]}
    ]
    client.download_file.side_effect = [OSError("disk full"), None]

    result = StorageService(client).download(BUCKET, PREFIX, str(tmp_path))

    assert result == {"keys": [f"{PREFIX}/a.txt", f"{PREFIX}/b.txt"], "failed": [f"{PREFIX}/a.txt"]}


def test_delete_keys_only_removes_prefixed_objects(storage, s3_client):
    s3_client.put_object(Bucket=BUCKET, Key=f"{PREFIX}/a.txt", Body=b"a")
    s3_client.put_object(Bucket=BUCKET, Key="keep/b.txt", Body=b"b")

    deleted = storage.delete_keys(BUCKET, PREFIX, [f"{PREFIX}/a.txt", "keep/b.txt"])

    assert deleted == 1
    remaining = [obj["Key"] for obj in s3_client.list_objects_v2(Bucket=BUCKET).get("Contents", [])]
    assert remaining == ["keep/b.txt"]


def test_delete_keys_batches_by_1000():
    client = Mock()
    client.delete_objects.side_effect = lambda Bucket, Delete: {"Deleted": Delete["Objects"]}
    keys = [f"{PREFIX}/{i}.txt" for i in range(2500)]

    deleted = StorageService(client).delete_keys(BUCKET, PREFIX, keys)

    assert deleted == 2500
    sizes = [len(call.kwargs["Delete"]["Objects"]) for call in client.delete_objects.call_args_list]
    assert sizes == [1000, 1000, 500]


@patch("ecsk.core.base.select_one")
def test_ask_bucket_existing(mock_select):
    storage_service = Mock()
    storage_service.get_bucket_names.return_value = ["a", "b"]
    mock_select.return_value = "b"

    assert BucketUI(storage_service).ask_bucket("us-east-1", can_go_back=True) == "b"
    values = [choice["value"] for choice in mock_select.call_args[0][1]]
    assert values == [NEW_BUCKET, "a", "b"]
    storage_service.create_bucket.assert_not_called()


@patch("ecsk.features.storage.ui.ask_text")
@patch("ecsk.core.base.select_one")
def test_ask_bucket_creates_new_bucket(mock_select, mock_ask_text):
    storage_service = Mock()
    storage_service.get_bucket_names.return_value = []
    mock_select.return_value = NEW_BUCKET
    mock_ask_text.return_value = "fresh-bucket"

    assert BucketUI(storage_service).ask_bucket("eu-west-1") == "fresh-bucket"
    storage_service.create_bucket.assert_called_once_with("fresh-bucket", "eu-west-1")


@patch("ecsk.features.storage.ui.ask_text")
@patch("ecsk.core.base.select_one")
def test_ask_bucket_blank_name_goes_back(mock_select, mock_ask_text):
    storage_service = Mock()
    storage_service.get_bucket_names.return_value = []
    mock_select.return_value = NEW_BUCKET
    mock_ask_text.return_value = ""

    assert BucketUI(storage_service).ask_bucket("eu-west-1", can_go_back=True) == ""
    storage_service.create_bucket.assert_not_called()
