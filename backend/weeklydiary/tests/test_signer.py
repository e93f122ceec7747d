"""
Tests for presigned R2 upload URLs.
"""
import datetime
import re
from urllib.parse import parse_qs, urlsplit

import pytest
from weeklydiary.core.signer import R2Presigner

MOMENT = datetime.datetime(2024, 3, 15, 12, 30, 0)
KEY = "uploads/u1/diary/2024-03-15/x.jpg"


@pytest.fixture
def presigner() -> R2Presigner:
    return R2Presigner(
        account_id="acct",
        bucket="photos",
        access_key_id="AKIDEXAMPLE",
        secret_access_key="secret",
    )


@pytest.fixture
def freeze(monkeypatch):
    """Pin the clock the SDK reads when stamping a signature."""
    real_datetime = datetime.datetime

    def _freeze(moment: datetime.datetime):
        class FrozenDatetime(real_datetime):
            @classmethod
            def utcnow(cls):
                return moment

            @classmethod
            def now(cls, tz=None):
                if tz is None:
                    return moment
                return moment.replace(tzinfo=datetime.timezone.utc).astimezone(tz)

        monkeypatch.setattr(datetime, "datetime", FrozenDatetime)

    return _freeze


def _query(url: str) -> dict:
    return parse_qs(urlsplit(url).query)


def test_sign_is_deterministic_for_a_fixed_clock(presigner, freeze):
    freeze(MOMENT)
    first = presigner.sign(KEY, "image/jpeg", expires=120)
    second = presigner.sign(KEY, "image/jpeg", expires=120)
    assert first == second


def test_sign_structure(presigner, freeze):
    freeze(MOMENT)
    url = presigner.sign(KEY, "image/jpeg", expires=120)

    parts = urlsplit(url)
    assert parts.scheme == "https"
    assert parts.netloc == "acct.r2.cloudflarestorage.com"
    assert parts.path == f"/photos/{KEY}"

    query = _query(url)
    assert query["X-Amz-Algorithm"] == ["AWS4-HMAC-SHA256"]
    assert query["X-Amz-Credential"] == ["AKIDEXAMPLE/20240315/auto/s3/aws4_request"]
    assert query["X-Amz-Date"] == ["20240315T123000Z"]
    assert query["X-Amz-Expires"] == ["120"]
    assert {"content-type", "host"} <= set(query["X-Amz-SignedHeaders"][0].split(";"))
    assert re.fullmatch(r"[0-9a-f]{64}", query["X-Amz-Signature"][0])


def test_signature_covers_content_type_key_and_expiry(presigner, freeze):
    freeze(MOMENT)
    base = _query(presigner.sign(KEY, "image/jpeg"))["X-Amz-Signature"]

    assert _query(presigner.sign(KEY, "image/png"))["X-Amz-Signature"] != base
    assert _query(presigner.sign(KEY.replace("x.jpg", "y.jpg"), "image/jpeg"))["X-Amz-Signature"] != base
    assert _query(presigner.sign(KEY, "image/jpeg", expires=60))["X-Amz-Signature"] != base


def test_signature_changes_with_the_clock(presigner, freeze):
    freeze(MOMENT)
    base = presigner.sign(KEY, "image/jpeg")
    freeze(MOMENT + datetime.timedelta(seconds=1))
    later = presigner.sign(KEY, "image/jpeg")

    assert _query(later)["X-Amz-Date"] == ["20240315T123001Z"]
    assert later != base


def test_public_url(presigner):
    assert presigner.public_url("k/x.jpg") == "https://photos.r2.cloudflarestorage.com/k/x.jpg"
    presigner.public_base_url = "https://cdn.example.test/"
    assert presigner.public_url("k/x.jpg") == "https://cdn.example.test/k/x.jpg"
