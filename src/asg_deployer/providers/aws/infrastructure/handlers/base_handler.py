"""Base class for components calling AWS APIs."""

import json
from typing import Any, Callable, TypeVar

from botocore.exceptions import ClientError

from asg_deployer.domain.base.ports import LoggingPort
from asg_deployer.providers.aws.exceptions.aws_exceptions import convert_client_error
from asg_deployer.providers.aws.infrastructure.aws_client import AWSClient

T = TypeVar("T")


class AWSHandler:
    """
    Shared plumbing for AWS services and workers.

    Retries are left to botocore (adaptive mode, configured on the client);
    this class only logs calls and translates ``ClientError`` into domain
    exceptions.
    """

    def __init__(self, aws_client: AWSClient, logger: LoggingPort) -> None:
        self.aws_client = aws_client
        self._logger = logger

    @property
    def region(self) -> str:
        return self.aws_client.region_name

    def _call(self, func: Callable[..., T], operation_name: str, **kwargs: Any) -> T:
        """
        Invoke an AWS operation, converting client errors.

        Args:
            func: Bound client method
            operation_name: Name used in logs and error details
            **kwargs: Request parameters

        Returns:
            The operation's response
        """
        self._logger.debug(
            "Calling AWS operation %s with payload: %s",
            operation_name,
            json.dumps(kwargs, default=str, sort_keys=True),
        )
        try:
            return func(**kwargs)
        except ClientError as e:
            raise convert_client_error(e, operation_name) from e

    def _paginate(self, client: Any, operation_name: str, result_key: str, **kwargs: Any) -> list[dict[str, Any]]:
        """
        Collect every page of a paginated AWS operation.

        Args:
            client: boto3 client exposing the operation
            operation_name: Client method name, e.g. ``describe_auto_scaling_groups``
            result_key: Key of the result list in each page
            **kwargs: Request parameters

        Returns:
            Combined results from all pages
        """
        self._logger.debug("Paginating AWS operation %s", operation_name)
        results: list[dict[str, Any]] = []
        try:
            for page in client.get_paginator(operation_name).paginate(**kwargs):
                results.extend(page.get(result_key, []))
        except ClientError as e:
            raise convert_client_error(e, operation_name) from e
        return results
