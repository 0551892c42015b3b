from .gate import WorkspaceScopeGate

__all__ = ["WorkspaceScopeGate"]
