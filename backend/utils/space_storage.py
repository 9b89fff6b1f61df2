import boto3
from botocore.exceptions import ClientError, EndpointConnectionError
import mimetypes
import os
import logging

logger = logging.getLogger(__name__)

# --- Reusable Spaces (S3-compatible) client ---
S3_CLIENT = None
SPACES_REGION = os.getenv('SPACES_REGION', 'sgp1')
SPACES_ENDPOINT = os.getenv('SPACES_ENDPOINT', f'https://{SPACES_REGION}.digitaloceanspaces.com')
SPACES_BUCKET = os.getenv('SPACES_BUCKET', 'kandang-assets')
SPACES_PUBLIC_URL = os.getenv('SPACES_PUBLIC_URL', f'https://{SPACES_BUCKET}.{SPACES_REGION}.digitaloceanspaces.com')


def get_s3_client():
    """Initializes and returns a reusable client for the Spaces endpoint."""
    global S3_CLIENT
    if S3_CLIENT is None:
        try:
            S3_CLIENT = boto3.client(
                's3',
                region_name=SPACES_REGION,
                endpoint_url=SPACES_ENDPOINT,
                aws_access_key_id=os.getenv('SPACES_ACCESS_KEY'),
                aws_secret_access_key=os.getenv('SPACES_SECRET_KEY'),
            )
            logger.info(f"Spaces client initialized for endpoint: {SPACES_ENDPOINT}")
        except Exception:
            logger.exception("Failed to create boto3 client for Spaces")
            raise
    return S3_CLIENT


def file_key_from_url(url: str) -> str:
    """Return the object name stored at the end of a public file URL."""
    return url.rstrip('/').split('/')[-1]


class SpaceStorage:
    """Uploads and deletes public files, grouped in one folder per category.

    Files land at ``<category>/<filename>`` inside the bucket and are exposed
    as ``<public_url>/<category>/<filename>``. Calls are blocking and are not
    retried; failures surface as ``RuntimeError``.
    """

    def __init__(self, client=None, bucket: str = SPACES_BUCKET, public_url: str = SPACES_PUBLIC_URL):
        self._client = client
        self.bucket = bucket
        self.public_url = public_url.rstrip('/')

    @property
    def client(self):
        if self._client is None:
            self._client = get_s3_client()
        return self._client

    def upload_file_to_space(self, file_content: bytes, filename: str, category: str) -> str:
        key = f"{category}/{filename}"
        content_type = mimetypes.guess_type(filename)[0] or 'application/octet-stream'
        logger.info(f"Uploading {len(file_content)} bytes to s3://{self.bucket}/{key}")
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=file_content,
                ACL='public-read',
                ContentType=content_type,
            )
        except ClientError as e:
            error = e.response.get('Error', {})
            logger.error(f"Upload of {key} failed: {error.get('Code')} - {error.get('Message')}")
            raise RuntimeError(f"Space upload failed: {error.get('Message', str(e))}")
        except EndpointConnectionError as e:
            logger.error(f"Cannot reach Spaces endpoint while uploading {key}: {e}")
            raise RuntimeError(f"Space upload failed: {e}")
        return f"{self.public_url}/{key}"

    def delete_file_from_space(self, file_key: str, category: str) -> None:
        key = f"{category}/{file_key}"
        logger.info(f"Deleting s3://{self.bucket}/{key}")
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            error = e.response.get('Error', {})
            logger.error(f"Delete of {key} failed: {error.get('Code')} - {error.get('Message')}")
            raise RuntimeError(f"Space delete failed: {error.get('Message', str(e))}")
        except EndpointConnectionError as e:
            logger.error(f"Cannot reach Spaces endpoint while deleting {key}: {e}")
            raise RuntimeError(f"Space delete failed: {e}")


def get_storage() -> SpaceStorage:
    """FastAPI dependency returning the storage client used by the routers."""
    return SpaceStorage()
