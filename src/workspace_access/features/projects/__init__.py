from .gate import ProjectScopeGate
from .policies import can_change_visibility, can_manage_roles

__all__ = ["ProjectScopeGate", "can_change_visibility", "can_manage_roles"]
