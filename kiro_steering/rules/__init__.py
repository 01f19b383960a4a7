from kiro_steering.rules.models import Inclusion, SteeringRule
from kiro_steering.rules.registry import RuleRegistry

__all__ = ["Inclusion", "RuleRegistry", "SteeringRule"]
