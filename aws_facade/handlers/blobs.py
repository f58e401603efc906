"""
Blob Store

JSON objects and arbitrary byte streams in the configured S3 bucket,
addressed by name. Large streams are uploaded in parts by boto3's managed
transfer.
"""

import json
import logging
from typing import Any, BinaryIO, Dict, Optional

from boto3.s3.transfer import TransferConfig

from ..config import FacadeConfig
from ..utils import to_json

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class BlobStore:
    """Pass-through facade over one S3 bucket."""

    def __init__(self, config: FacadeConfig, s3_client):
        """Initialize blob store.

        Args:
            config: Facade configuration (bucket_name, multipart settings)
            s3_client: boto3 S3 client
        """
        self.config = config
        self.s3 = s3_client
        self.transfer_config = TransferConfig(
            multipart_threshold=config.multipart_threshold,
            multipart_chunksize=config.multipart_chunksize,
        )

    @property
    def bucket(self) -> str:
        return self.config.require('bucket_name')

    def put_object(self, name: str, value: Any) -> Dict[str, Any]:
        """
        Store a value as JSON text under ``name``.

        Returns:
            Raw PutObject response
        """
        key = str(name)
        try:
            response = self.s3.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=to_json(value).encode('utf-8'),
                ContentType=JSON_CONTENT_TYPE,
            )
        except Exception as e:
            logger.error(f"PutObject s3://{self.config.bucket_name}/{key} failed: {e}")
            raise
        logger.info(f"Stored s3://{self.bucket}/{key}")
        return response

    def put_stream(self, name: str, stream: BinaryIO, content_type: Optional[str] = None) -> Dict[str, str]:
        """
        Upload a binary stream of any length under ``name``.

        Streams above ``multipart_threshold`` bytes are sent as a multipart
        upload in ``multipart_chunksize`` parts.

        Args:
            name: Object key
            stream: Readable binary file-like object
            content_type: Content-Type to attach (omitted if None)

        Returns:
            ``{"Bucket": ..., "Key": ...}`` of the stored object
        """
        key = str(name)
        extra_args = {'ContentType': content_type} if content_type else None
        try:
            self.s3.upload_fileobj(
                stream,
                self.bucket,
                key,
                ExtraArgs=extra_args,
                Config=self.transfer_config,
            )
        except Exception as e:
            logger.error(f"Upload to s3://{self.config.bucket_name}/{key} failed: {e}")
            raise
        logger.info(f"Uploaded stream to s3://{self.bucket}/{key}")
        return {'Bucket': self.bucket, 'Key': key}

    def get_object(self, name: str) -> Dict[str, Any]:
        """
        Fetch an object's body stream and metadata.

        Returns:
            Raw GetObject response (``Body`` is a StreamingBody)

        Raises:
            botocore.exceptions.ClientError: ``NoSuchKey`` if absent
        """
        key = str(name)
        try:
            return self.s3.get_object(Bucket=self.bucket, Key=key)
        except Exception as e:
            logger.error(f"GetObject s3://{self.config.bucket_name}/{key} failed: {e}")
            raise

    def get_json(self, name: str) -> Any:
        """Read an object written by ``put_object`` back into Python values."""
        response = self.get_object(name)
        return json.loads(response['Body'].read())
