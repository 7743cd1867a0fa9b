import io

import pytest
from botocore.exceptions import ClientError

from app.core.config import settings
from app.services import storage


class FakeS3:
    def __init__(self, has_bucket=True):
        self.has_bucket = has_bucket
        self.created = []
        self.uploads = []
        self.deleted = []

    def head_bucket(self, Bucket):
        if not self.has_bucket:
            raise ClientError({"Error": {"Code": "404", "Message": "Not Found"}}, "HeadBucket")

    def create_bucket(self, Bucket):
        self.created.append(Bucket)

    def upload_fileobj(self, Fileobj, Bucket, Key, ExtraArgs):
        self.uploads.append({"body": Fileobj.read(), "bucket": Bucket, "key": Key, "extra": ExtraArgs})

    def delete_object(self, Bucket, Key):
        self.deleted.append((Bucket, Key))

    def generate_presigned_url(self, operation, Params, ExpiresIn):
        return f"https://s3.test/{Params['Bucket']}/{Params['Key']}?op={operation}&ttl={ExpiresIn}"


@pytest.fixture
def s3(monkeypatch):
    fake = FakeS3()
    monkeypatch.setattr(storage, "_get_s3_client", lambda: fake)
    return fake


def test_upload_stream_uses_prefix_and_sanitises_name(s3):
    key = storage.upload_stream(io.BytesIO(b"proof"), "scans/receipt.png", "image/png", prefix="payment-proofs")

    assert key.startswith("payment-proofs/")
    assert key.endswith("-scans_receipt.png")
    [upload] = s3.uploads
    assert upload["bucket"] == settings.s3_bucket
    assert upload["body"] == b"proof"
    assert upload["extra"] == {"ContentType": "image/png"}


def test_presigned_download_url(s3):
    link = storage.presigned_download_url("payment-proofs/abc-receipt.pdf", expires_in=120)

    assert link.object_key == "payment-proofs/abc-receipt.pdf"
    assert link.expires_in == 120
    assert link.url.startswith(f"https://s3.test/{settings.s3_bucket}/payment-proofs/abc-receipt.pdf")
    assert "op=get_object" in link.url


def test_presigned_download_url_defaults_expiry(s3):
    assert storage.presigned_download_url("k").expires_in == settings.presign_expires_in


def test_ensure_bucket_creates_missing_bucket(monkeypatch):
    fake = FakeS3(has_bucket=False)
    monkeypatch.setattr(storage, "_get_s3_client", lambda: fake)

    storage.ensure_bucket_exists("conference")

    assert fake.created == ["conference"]


def test_ensure_bucket_leaves_existing_bucket(s3):
    storage.ensure_bucket_exists("conference")

    assert s3.created == []


def test_upload_creates_bucket_on_first_use(monkeypatch):
    fake = FakeS3(has_bucket=False)
    monkeypatch.setattr(storage, "_get_s3_client", lambda: fake)

    storage.upload_stream(io.BytesIO(b"%PDF"), "receipt.pdf", "application/pdf")

    assert fake.created == [settings.s3_bucket]
    assert fake.uploads[0]["key"].startswith("uploads/")


def test_delete_object(s3):
    storage.delete_object("payment-proofs/abc-receipt.pdf")

    assert s3.deleted == [(settings.s3_bucket, "payment-proofs/abc-receipt.pdf")]
