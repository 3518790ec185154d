# chatlite/navigation — navigation-security boundary
# Every navigation or window-open attempt from an embedded surface is routed
# here. No UI component may load a URL into a surface without going through
# a registered NavigationEnforcer.
from chatlite.navigation.enforcer import NavigationEnforcer, NavigationSurface
from chatlite.navigation.guard import ExternalUrlGuard, is_safe_for_external_open, open_external_if_safe
from chatlite.navigation.models import NavigationDecision, NavigationRecord
from chatlite.navigation.policy import DomainPolicy, is_trusted
from chatlite.navigation.registry import EnforcerHandle, SurfaceRegistry

__all__ = [
    "DomainPolicy",
    "ExternalUrlGuard",
    "NavigationEnforcer",
    "NavigationSurface",
    "NavigationDecision",
    "NavigationRecord",
    "SurfaceRegistry",
    "EnforcerHandle",
    "is_trusted",
    "is_safe_for_external_open",
    "open_external_if_safe",
]
