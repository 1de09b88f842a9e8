"""EC2 inventory client."""

import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import InventoryQueryError
from .models import DEFAULT_REGION, InstanceState

logger = logging.getLogger(__name__)


def build_filters(environment: str = "", role: str = "") -> List[Dict[str, Any]]:
    """
    Build describe_instances filters for an environment/role tag pair.

    An empty environment or role leaves that dimension unfiltered. Only
    running instances are ever returned.

    Args:
        environment: Value of the ``env`` tag
        role: Value of the ``role`` tag

    Returns:
        List of EC2 filter dictionaries
    """
    filters = [{"Name": "instance-state-name", "Values": [InstanceState.RUNNING.value]}]
    if environment:
        filters.append({"Name": "tag:env", "Values": [environment]})
    if role:
        filters.append({"Name": "tag:role", "Values": [role]})
    return filters


class EC2InventoryClient:
    """Read-only view of the EC2 instances in one region."""

    def __init__(
        self,
        region: str = DEFAULT_REGION,
        profile_name: Optional[str] = None,
        session: Optional[boto3.Session] = None,
    ):
        """
        Initialize the inventory client.

        Args:
            region: AWS region name (e.g., 'us-east-1')
            profile_name: Optional AWS named profile
            session: Optional pre-built boto3 session
        """
        self.region = region
        self.profile_name = profile_name
        self._session = session
        self._ec2_client = None

    @property
    def session(self) -> boto3.Session:
        """Lazy-load boto3 session."""
        if self._session is None:
            self._session = boto3.Session(profile_name=self.profile_name, region_name=self.region)
        return self._session

    @property
    def ec2_client(self):
        """Lazy-load EC2 client."""
        if self._ec2_client is None:
            self._ec2_client = self.session.client("ec2", region_name=self.region)
        return self._ec2_client

    def list_instances(self, environment: str = "", role: str = "") -> List[Dict[str, Any]]:
        """
        List running instances tagged with the given environment and role.

        Every page of the response is read. Instances keep the provider's
        order: page, then reservation, then instance within the reservation.

        Raises:
            InventoryQueryError: If the EC2 API call fails
        """
        filters = build_filters(environment, role)
        logger.debug(f"Describing instances in {self.region} with filters {filters}")

        instances: List[Dict[str, Any]] = []
        try:
            paginator = self.ec2_client.get_paginator("describe_instances")
            for page in paginator.paginate(Filters=filters):
                reservations = page.get("Reservations", [])
                logger.info(f"Found {len(reservations)} reservation(s)")

                for reservation in reservations:
                    reservation_instances = reservation.get("Instances", [])
                    logger.info(
                        f"Found {len(reservation_instances)} instance(s) in the reservation"
                    )
                    instances.extend(reservation_instances)
        except (ClientError, BotoCoreError) as e:
            logger.debug(f"describe_instances failed in {self.region}: {e}")
            raise InventoryQueryError(self.region, e) from e

        return instances
