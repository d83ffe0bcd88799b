"""
Fixtures for bucket client tests

FakeObsBackend stands in for the aioboto3 S3 client: it keeps objects in
memory, pages list results and groups keys by delimiter like OBS does.
"""

import io
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from config.loader import ObsStorageConfig
from core.metrics import HistogramCollector
from providers.huawei.obs import ObsStorageClient


def make_client_error(code: str, status: int, operation: str) -> ClientError:
    return ClientError(
        {
            "Error": {"Code": code, "Message": f"{code} ({status})"},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


class FakeStreamingBody:
    """Minimal async streaming body (read + close)"""

    def __init__(self, data: bytes):
        self._buffer = io.BytesIO(data)
        self.closed = False

    async def read(self, amt: int | None = None) -> bytes:
        return self._buffer.read() if amt is None else self._buffer.read(amt)

    def close(self) -> None:
        self.closed = True


class FakeObsBackend:
    """In-memory S3-compatible backend"""

    def __init__(self, page_size: int = 1000):
        self.page_size = page_size
        self.objects: dict[str, tuple[bytes, datetime]] = {}
        self.list_calls: list[dict] = []
        self.emit_next_marker = True
        self.fail_on_list_call: int | None = None
        self._clock = datetime(2024, 1, 1, tzinfo=UTC)

    def seed(self, keys: list[str], data: bytes = b"chunk") -> None:
        for key in keys:
            self._store(key, data)

    def _store(self, key: str, data: bytes) -> None:
        self._clock += timedelta(seconds=1)
        self.objects[key] = (data, self._clock)

    async def put_object(self, Bucket: str, Key: str, Body) -> dict:
        data = Body.read() if hasattr(Body, "read") else bytes(Body)
        self._store(Key, data)
        return {"ETag": '"fake"'}

    async def get_object(self, Bucket: str, Key: str) -> dict:
        if Key not in self.objects:
            raise make_client_error("NoSuchKey", 404, "GetObject")
        data, modified_at = self.objects[Key]
        return {"Body": FakeStreamingBody(data), "LastModified": modified_at}

    async def delete_object(self, Bucket: str, Key: str) -> dict:
        self.objects.pop(Key, None)
        return {}

    async def list_objects(
        self, Bucket: str, Prefix: str = "", Delimiter: str | None = None, Marker: str | None = None
    ) -> dict:
        self.list_calls.append(
            {"Bucket": Bucket, "Prefix": Prefix, "Delimiter": Delimiter, "Marker": Marker}
        )
        if self.fail_on_list_call == len(self.list_calls):
            raise make_client_error("ServiceUnavailable", 503, "ListObjects")

        # (label, is_prefix) entries in key order, prefixes deduplicated
        entries: dict[str, bool] = {}
        for key in sorted(k for k in self.objects if k.startswith(Prefix)):
            if Delimiter:
                rest = key[len(Prefix):]
                idx = rest.find(Delimiter)
                if idx >= 0:
                    entries[Prefix + rest[: idx + len(Delimiter)]] = True
                    continue
            entries[key] = False

        remaining = [(label, is_prefix) for label, is_prefix in sorted(entries.items())
                     if Marker is None or label > Marker]
        page = remaining[: self.page_size]
        truncated = len(remaining) > self.page_size

        output = {
            "IsTruncated": truncated,
            "Contents": [
                {"Key": label, "LastModified": self.objects[label][1]}
                for label, is_prefix in page
                if not is_prefix
            ],
            "CommonPrefixes": [{"Prefix": label} for label, is_prefix in page if is_prefix],
        }
        if truncated and self.emit_next_marker:
            output["NextMarker"] = page[-1][0]
        return output


@pytest.fixture
def fake_obs():
    return FakeObsBackend()


@pytest.fixture
def mock_aioboto3_session(fake_obs):
    """Patch aioboto3.Session so session.client(...) yields the fake backend"""
    with patch("providers.huawei.obs.aioboto3.Session") as mock:
        session = MagicMock()
        session.client.return_value.__aenter__.return_value = fake_obs
        mock.return_value = session
        yield session


@pytest.fixture
def obs_config():
    return ObsStorageConfig(
        access_key="AK", secret_key="SK", endpoint="obs.example.com", bucket="chunks"
    )


@pytest.fixture
def recording_metrics():
    return HistogramCollector(name="obs_request_duration_seconds", help="test")


@pytest.fixture
async def obs_client(obs_config, recording_metrics, mock_aioboto3_session):
    """Connected ObsStorageClient backed by FakeObsBackend"""
    client = ObsStorageClient(obs_config, metrics=recording_metrics)
    await client.connect()
    yield client
    await client.stop()
