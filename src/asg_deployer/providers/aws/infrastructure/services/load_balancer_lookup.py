"""Load balancer name resolution."""

from asg_deployer.domain.deployment.value_objects import LoadBalancerLookupResult
from asg_deployer.providers.aws.infrastructure.handlers.base_handler import AWSHandler


class LoadBalancerLookupService(AWSHandler):
    """Splits load balancer names into classic ELBs and target groups."""

    def get_load_balancers_by_name(self, names: list[str]) -> LoadBalancerLookupResult:
        """
        Resolve names, classic load balancers first, then target groups.

        Names matching neither are reported as unknown.
        """
        if not names:
            return LoadBalancerLookupResult()

        classic_names = {
            load_balancer["LoadBalancerName"]
            for load_balancer in self._paginate(
                self.aws_client.elb_client, "describe_load_balancers", "LoadBalancerDescriptions"
            )
        }
        classic_load_balancers = [name for name in names if name in classic_names]
        remaining = [name for name in names if name not in classic_names]

        target_group_arns: list[str] = []
        unknown: list[str] = []
        if remaining:
            arns_by_name = {
                target_group["TargetGroupName"]: target_group["TargetGroupArn"]
                for target_group in self._paginate(
                    self.aws_client.elbv2_client, "describe_target_groups", "TargetGroups"
                )
            }
            for name in remaining:
                if name in arns_by_name:
                    target_group_arns.append(arns_by_name[name])
                else:
                    unknown.append(name)

        return LoadBalancerLookupResult(
            classic_load_balancers=classic_load_balancers,
            target_group_arns=target_group_arns,
            unknown_load_balancers=unknown,
        )
