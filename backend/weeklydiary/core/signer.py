"""
Presigned uploads to Cloudflare R2 through its S3-compatible API.

The browser PUTs a file straight to the bucket with a short-lived SigV4 URL and
never sees the long-lived secret key.
"""
from dataclasses import dataclass

import boto3
from botocore.config import Config


@dataclass
class R2Presigner:
    """Presigns PUT uploads against an R2 bucket using path-style addressing."""

    account_id: str
    bucket: str
    access_key_id: str
    secret_access_key: str
    region: str = "auto"
    public_base_url: str = ""

    def __post_init__(self):
        # R2 rejects the checksum parameters newer SDKs add by default.
        config = Config(
            s3={"addressing_style": "path"},
            signature_version="s3v4",
            request_checksum_calculation="when_required",
            response_checksum_validation="when_required",
        )
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint,
            region_name=self.region,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            config=config,
        )

    @property
    def host(self) -> str:
        return f"{self.account_id}.r2.cloudflarestorage.com"

    @property
    def endpoint(self) -> str:
        return f"https://{self.host}"

    def sign(self, object_key: str, content_type: str, expires: int = 120) -> str:
        """
        Presigned PUT URL for `object_key`, valid for `expires` seconds.

        The content type is signed, so the upload must send the same
        Content-Type header.
        """
        return self._client.generate_presigned_url(
            ClientMethod="put_object",
            Params={
                "Bucket": self.bucket,
                "Key": object_key,
                "ContentType": content_type,
            },
            ExpiresIn=expires,
        )

    def public_url(self, object_key: str) -> str:
        """URL the stored object is served from once uploaded."""
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{object_key}"
        return f"https://{self.bucket}.r2.cloudflarestorage.com/{object_key}"
