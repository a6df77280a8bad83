"""ASG Deployer - Auto Scaling Group deployment planning for AWS.

This package turns a declarative deploy request, optionally cloned from an
existing Auto Scaling Group, into a fully resolved provisioning plan for each
target region and hands that plan to a provisioning worker.

Key Components:
    - domain: Deployment models, ports and exceptions
    - application: Resolvers and the deployment planner
    - config: Configuration schemas and loading
    - infrastructure: Logging, task status and account adapters
    - providers: AWS implementations of the provider ports

Usage:
    >>> from asg_deployer.bootstrap import create_deployment_planner
    >>> planner = create_deployment_planner()
    >>> result = planner.deploy(request)
"""

__version__ = "0.1.0"
