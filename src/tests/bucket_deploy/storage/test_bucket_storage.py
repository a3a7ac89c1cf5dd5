#!/usr/bin/env python3
"""
Tests for BucketStorage against a mocked aioboto3 client
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError, NoCredentialsError

from bucket_deploy.errors import TransferError
from bucket_deploy.storage import BackendConfig, BucketStorage, s3_credentials_available
from tests.test_utils.storage_mocks import create_mock_s3_client, set_listing_pages


def client_error(code: str, operation: str) -> ClientError:
    return ClientError(error_response={"Error": {"Code": code, "Message": code}}, operation_name=operation)


@pytest.fixture
def s3_client():
    return create_mock_s3_client()


@pytest.fixture
def storage(s3_client):
    storage = BucketStorage(BackendConfig.s3(region="eu-west-1"))
    with patch.object(storage, "_get_s3_client", AsyncMock(return_value=s3_client)):
        yield storage


class TestBackendConfig:
    def test_s3_client_kwargs(self):
        assert BackendConfig.s3(region="eu-west-1").client_kwargs() == {"region_name": "eu-west-1"}

    def test_s3_compatible_includes_endpoint(self):
        config = BackendConfig.s3_compatible("http://localhost:9000", region="us-east-1")

        assert config.client_kwargs() == {"region_name": "us-east-1", "endpoint_url": "http://localhost:9000"}


class TestListing:
    @pytest.mark.asyncio
    async def test_list_buckets_returns_names(self, storage, s3_client):
        s3_client.list_buckets.return_value = {"Buckets": [{"Name": "site"}, {"Name": "logs"}]}

        assert await storage.list_buckets() == ["site", "logs"]

    @pytest.mark.asyncio
    async def test_list_buckets_error_becomes_transfer_error(self, storage, s3_client):
        s3_client.list_buckets.side_effect = client_error("AccessDenied", "ListBuckets")

        with pytest.raises(TransferError) as exc_info:
            await storage.list_buckets()

        assert exc_info.value.operation == "list_buckets"
        assert isinstance(exc_info.value.__cause__, ClientError)

    @pytest.mark.asyncio
    async def test_list_objects_follows_every_page(self, storage, s3_client):
        set_listing_pages(s3_client, [["a.js", "b.js"], ["index.html"]])

        assert await storage.list_objects("site") == ["a.js", "b.js", "index.html"]
        s3_client.get_paginator.assert_called_once_with("list_objects_v2")
        s3_client.get_paginator.return_value.paginate.assert_called_once_with(Bucket="site")

    @pytest.mark.asyncio
    async def test_list_objects_empty_bucket(self, storage, s3_client):
        set_listing_pages(s3_client, [[]])

        assert await storage.list_objects("site") == []

    @pytest.mark.asyncio
    async def test_list_objects_error_becomes_transfer_error(self, storage, s3_client):
        s3_client.get_paginator.side_effect = client_error("NoSuchBucket", "ListObjectsV2")

        with pytest.raises(TransferError, match="Failed to list objects in site"):
            await storage.list_objects("site")


class TestUpload:
    @pytest.mark.asyncio
    async def test_upload_streams_file_with_headers(self, storage, s3_client, tmp_path):
        source = tmp_path / "index.html"
        source.write_text("<html></html>")

        await storage.upload_file("site", "index.html", source, "text/html", "no-cache")

        s3_client.upload_fileobj.assert_awaited_once()
        args, kwargs = s3_client.upload_fileobj.await_args
        assert args[1:] == ("site", "index.html")
        assert kwargs["ExtraArgs"] == {"ContentType": "text/html", "CacheControl": "no-cache"}

    @pytest.mark.asyncio
    async def test_upload_client_error_becomes_transfer_error(self, storage, s3_client, tmp_path):
        source = tmp_path / "app.js"
        source.write_text("x")
        s3_client.upload_fileobj.side_effect = EndpointConnectionError(endpoint_url="https://s3.example")

        with pytest.raises(TransferError) as exc_info:
            await storage.upload_file("site", "app.js", source, "application/javascript", "max-age=31536000")

        assert exc_info.value.key == "app.js"
        assert exc_info.value.operation == "upload"

    @pytest.mark.asyncio
    async def test_upload_missing_file_becomes_transfer_error(self, storage, s3_client, tmp_path):
        with pytest.raises(TransferError):
            await storage.upload_file("site", "gone.js", tmp_path / "gone.js", "application/javascript", "x")

        s3_client.upload_fileobj.assert_not_awaited()


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_object(self, storage, s3_client):
        await storage.delete_object("site", "old.js")

        s3_client.delete_object.assert_awaited_once_with(Bucket="site", Key="old.js")

    @pytest.mark.asyncio
    async def test_delete_error_becomes_transfer_error(self, storage, s3_client):
        s3_client.delete_object.side_effect = client_error("AccessDenied", "DeleteObject")

        with pytest.raises(TransferError) as exc_info:
            await storage.delete_object("site", "old.js")

        assert exc_info.value.key == "old.js"
        assert exc_info.value.operation == "delete"


class TestClientLifecycle:
    @pytest.mark.asyncio
    async def test_client_created_once_with_region_and_closed(self):
        client = create_mock_s3_client()
        client_cm = MagicMock()
        client_cm.__aenter__ = AsyncMock(return_value=client)
        client_cm.__aexit__ = AsyncMock(return_value=None)
        session = MagicMock()
        session.client.return_value = client_cm

        with patch("bucket_deploy.storage.base.aioboto3.Session", return_value=session):
            storage = BucketStorage(BackendConfig.s3_compatible("http://localhost:9000", region="eu-west-1"))
            first = await storage._get_s3_client()
            second = await storage._get_s3_client()
            await storage.close()

        assert first is second is client
        session.client.assert_called_once()
        args, kwargs = session.client.call_args
        assert args == ("s3",)
        assert kwargs["region_name"] == "eu-west-1"
        assert kwargs["endpoint_url"] == "http://localhost:9000"
        client_cm.__aexit__.assert_awaited_once()
        assert storage._s3_client is None

    @pytest.mark.asyncio
    async def test_async_context_manager_closes(self):
        storage = BucketStorage(BackendConfig.s3())

        with patch.object(storage, "close", AsyncMock()) as mock_close:
            async with storage as entered:
                assert entered is storage

        mock_close.assert_awaited_once()


class TestCredentialPreflight:
    def test_credentials_found(self):
        with patch("bucket_deploy.storage.factories.boto3.Session") as session_cls:
            session_cls.return_value.get_credentials.return_value = MagicMock(access_key="AKIA")
            assert s3_credentials_available() is True

    def test_no_credentials(self):
        with patch("bucket_deploy.storage.factories.boto3.Session") as session_cls:
            session_cls.return_value.get_credentials.return_value = None
            assert s3_credentials_available() is False

    def test_resolution_error_counts_as_missing(self):
        with patch("bucket_deploy.storage.factories.boto3.Session", side_effect=NoCredentialsError()):
            assert s3_credentials_available() is False
