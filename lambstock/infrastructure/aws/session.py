"""Builds the boto3 session and client configuration shared by both adapters."""

import logging
from typing import Optional

import boto3
import botocore.session
from botocore.config import Config

logger = logging.getLogger(__name__)

DEFAULT_CREDENTIAL_TIMEOUT_S = 0.2


def create_session(
    profile: Optional[str] = None,
    region: Optional[str] = None,
    credential_timeout: float = DEFAULT_CREDENTIAL_TIMEOUT_S,
) -> boto3.session.Session:
    """Creates a boto3 session using the default credential provider chain.

    Args:
        profile: Named profile from the shared AWS config, if any.
        region: Region override; falls back to the usual AWS resolution.
        credential_timeout: Timeout in seconds for instance metadata
            credential lookups.
    """
    core_session = botocore.session.get_session()
    core_session.set_config_variable("metadata_service_timeout", credential_timeout)
    core_session.set_config_variable("metadata_service_num_attempts", 1)
    session = boto3.session.Session(
        botocore_session=core_session,
        profile_name=profile,
        region_name=region,
    )
    logger.debug(f"AWS session created: profile={profile or 'default'}, region={session.region_name}")
    return session


def client_config() -> Config:
    """Client configuration with botocore's own retries turned off.

    Retries are handled by RetryExecutor with per-listing predicates.
    """
    return Config(retries={"total_max_attempts": 1, "mode": "standard"})
