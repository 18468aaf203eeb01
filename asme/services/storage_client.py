"""Helpers for creating storage clients."""

from __future__ import annotations

import boto3
from botocore.client import BaseClient
from botocore.config import Config

from asme.core.config import settings


def _normalize_endpoint(endpoint_url: str | None) -> str | None:
    if endpoint_url:
        return endpoint_url.rstrip("/")
    return None


def get_s3_client(
    *,
    region: str | None,
    endpoint_url: str | None,
    access_key: str | None,
    secret_key: str | None,
    addressing_style: str | None = None,
) -> BaseClient:
    """Return a configured S3 client (supports S3-compatible endpoints)."""
    config = Config(s3={"addressing_style": addressing_style}) if addressing_style else None
    return boto3.client(
        "s3",
        region_name=region or None,
        aws_access_key_id=access_key or None,
        aws_secret_access_key=secret_key or None,
        endpoint_url=_normalize_endpoint(endpoint_url),
        config=config,
    )


def get_spaces_client() -> BaseClient:
    """Client for the public media Space (virtual-hosted URLs)."""
    return get_s3_client(
        # Spaces ignores the signing region; the endpoint selects the datacenter
        region="us-east-1",
        endpoint_url=settings.spaces_endpoint,
        access_key=settings.SPACES_ACCESS_KEY,
        secret_key=settings.SPACES_SECRET_KEY,
        addressing_style="virtual",
    )


def get_documents_client() -> BaseClient:
    """Client for the private case-documents bucket."""
    return get_s3_client(
        region=settings.DOCUMENTS_REGION,
        endpoint_url=settings.DOCUMENTS_ENDPOINT_URL or None,
        access_key=settings.DOCUMENTS_ACCESS_KEY,
        secret_key=settings.DOCUMENTS_SECRET_KEY,
        addressing_style="path",
    )
